"""Value types describing fonts extracted from source documents.

`GlyphData` is the unit of shape deduplication: two glyphs are the same shape
when both their advance width and their outline command sequence compare
equal. Everything in this module is immutable except `Font`, whose `name` and
`font_file` are overwritten once consolidation has picked the shared resource.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


# Advance width given to canonical space glyphs. Renderers set the actual
# spacing themselves, so the value only needs to be consistent.
WHITESPACE_ADVANCE_WIDTH = 512.0


@dataclass(frozen=True, order=True, slots=True)
class FontId:
    """Identify one font definition across the whole batch."""

    document_index: int
    identifier: int

    def __str__(self) -> str:
        return f"{self.document_index}:{self.identifier}"


@dataclass(frozen=True, slots=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class LineTo:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class QuadTo:
    cx: float
    cy: float
    x: float
    y: float


PathCommand = MoveTo | LineTo | QuadTo


@dataclass(frozen=True, slots=True)
class GlyphData:
    """Advance width and outline of a single glyph."""

    advance_width: float
    outline: tuple[PathCommand, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.outline, tuple):
            object.__setattr__(self, "outline", tuple(self.outline))

    @property
    def is_whitespace(self) -> bool:
        """Return True when the outline draws nothing."""
        return all(isinstance(command, MoveTo) for command in self.outline)

    @classmethod
    def whitespace(cls) -> GlyphData:
        return cls(WHITESPACE_ADVANCE_WIDTH, ())


@dataclass(frozen=True, slots=True)
class FontGlyph:
    char: str
    data: GlyphData

    @property
    def code(self) -> int:
        return ord(self.char)


@dataclass(frozen=True, slots=True)
class FontScale:
    """Factors normalising a source font unit system to design units."""

    scale_x: float = 1.0
    scale_y: float = 1.0


@dataclass(frozen=True, slots=True)
class FontMetrics:
    ascent: float
    descent: float
    scale: FontScale = field(default_factory=FontScale)


@dataclass(slots=True, eq=False)
class Font:
    """One font as extracted from one source document."""

    id: FontId
    name: str
    metrics: FontMetrics
    glyphs: tuple[FontGlyph, ...]
    font_file: Path | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.glyphs, tuple):
            self.glyphs = tuple(self.glyphs)

    @property
    def char_map(self) -> dict[str, GlyphData]:
        """Return the character to shape mapping of this font."""
        return {glyph.char: glyph.data for glyph in self.glyphs}


# A font may be reachable from several ids once merging shared its resource.
FontsMap = dict[FontId, Font]


__all__ = [
    "WHITESPACE_ADVANCE_WIDTH",
    "Font",
    "FontGlyph",
    "FontId",
    "FontMetrics",
    "FontScale",
    "FontsMap",
    "GlyphData",
    "LineTo",
    "MoveTo",
    "PathCommand",
    "QuadTo",
]
