"""Character code assignment for extracted glyphs.

Source fonts are frequently subsetted with unreliable character codes:
duplicated codes, control characters, or ligatures replaced by a space. Every
glyph that cannot keep its original code receives a private-use code instead.
The allocator is shared by the whole batch so that identical shapes found in
different fonts land on the same code, which is what later lets the merger
fold those fonts together.

The state lives in an explicit `CodeAssignmentContext` created at the start of
a batch. Glyphs must be fed in a fixed order (document index, then font order
within the document, then glyph index) for the assignment to be reproducible.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass, field
import logging

from fontpool.exceptions import CodeSpaceExhaustedError, UnsupportedFontError
from fontpool.fonts.models import FontGlyph, GlyphData


logger = logging.getLogger(__name__)

FIRST_PRIVATE_USE_CODE = 0xE000
LAST_PRIVATE_USE_CODE = 0xF8FF
FIRST_SUPPLEMENTARY_PRIVATE_USE_CODE = 0xF0000
LAST_SUPPLEMENTARY_PRIVATE_USE_CODE = 0xFFFFD

# Ranges whose original codes are never kept: control characters, the
# Specials block, and phonetic extensions that font tooling mishandles.
REJECTED_RANGES: tuple[tuple[int, int], ...] = (
    (0x0000, 0x001F),
    (0xFFF0, 0xFFFF),
    (0x1D00, 0x1DFF),
)


def _hex(code: int) -> str:
    return f"{code:04x}"


def is_rejected_code(char: str, assigned: Collection[str]) -> bool:
    """Return whether *char* cannot be used as-is in a font using *assigned*."""
    if char in assigned or char.isspace():
        return True
    code = ord(char)
    return any(start <= code <= end for start, end in REJECTED_RANGES)


@dataclass(slots=True)
class CodeAssignmentContext:
    """Batch-wide allocator for private-use character codes."""

    next_code: int = FIRST_PRIVATE_USE_CODE
    shape_codes: dict[GlyphData, str] = field(default_factory=dict)
    reassigned: int = 0

    def reset(self) -> None:
        self.next_code = FIRST_PRIVATE_USE_CODE
        self.shape_codes.clear()
        self.reassigned = 0

    def allocate(self, assigned: Collection[str]) -> str:
        """Return the next private-use code not already used in the font."""
        code = self.next_code
        while True:
            if LAST_PRIVATE_USE_CODE < code < FIRST_SUPPLEMENTARY_PRIVATE_USE_CODE:
                code = FIRST_SUPPLEMENTARY_PRIVATE_USE_CODE
            if code > LAST_SUPPLEMENTARY_PRIVATE_USE_CODE:
                raise CodeSpaceExhaustedError(
                    "No private-use character code left to assign to glyphs."
                )
            if chr(code) not in assigned:
                break
            code += 1
        self.next_code = code + 1
        return chr(code)

    def assign(self, data: GlyphData, code: int, assigned: Collection[str]) -> FontGlyph:
        """Resolve the character code of one glyph.

        *assigned* holds the characters already given to previous glyphs of the
        same font.
        """
        if data.is_whitespace:
            # Whitespace glyphs are interchangeable: keep a single canonical space.
            return FontGlyph(" ", GlyphData.whitespace())

        char = chr(code)
        if not is_rejected_code(char, assigned):
            return FontGlyph(char, data)

        known = self.shape_codes.get(data)
        if known is not None and known not in assigned:
            new_char = known
        else:
            new_char = self.allocate(assigned)
            if known is None:
                self.shape_codes[data] = new_char
        self.reassigned += 1
        logger.debug(
            "Duplicate or invalid char code 0x%s, reassigned to 0x%s (for %s)",
            _hex(code),
            _hex(ord(new_char)),
            data,
        )
        return FontGlyph(new_char, data)

    def assign_font(
        self, codes: Sequence[int], glyphs: Sequence[GlyphData]
    ) -> tuple[FontGlyph, ...]:
        """Resolve the codes of every glyph of one font, in glyph index order.

        Non-whitespace glyphs end up with distinct characters. Every whitespace
        glyph becomes the same canonical space, so a font with several of them
        holds several identical `' '` entries.
        """
        if len(codes) != len(glyphs):
            raise UnsupportedFontError(
                f"Font declares {len(codes)} character codes for {len(glyphs)} glyphs."
            )
        assigned: set[str] = set()
        result: list[FontGlyph] = []
        for code, data in zip(codes, glyphs):
            glyph = self.assign(data, code, assigned)
            result.append(glyph)
            assigned.add(glyph.char)
        return tuple(result)


__all__ = [
    "FIRST_PRIVATE_USE_CODE",
    "REJECTED_RANGES",
    "CodeAssignmentContext",
    "is_rejected_code",
]
