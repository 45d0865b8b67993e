"""Turn fonts defined by source documents into font records.

Documents are validated concurrently, but character codes are always assigned
in one sequential pass ordered by document index, then font order within the
document, then glyph index, so that the batch-wide code allocator produces the
same result whatever the number of workers.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from fontpool.exceptions import UnsupportedFontError
from fontpool.fonts.codes import CodeAssignmentContext
from fontpool.fonts.models import Font, FontId, FontMetrics, FontScale, GlyphData


MAX_SOURCE_CODE = 0xFFFF


@dataclass(slots=True)
class SourceFont:
    """A font definition as parsed from a source document.

    ``codes[i]`` is the character code declared for ``glyphs[i]``.
    """

    identifier: int
    name: str
    codes: Sequence[int]
    glyphs: Sequence[GlyphData]
    ascent: float = 0.0
    descent: float = 0.0
    scale: FontScale = field(default_factory=FontScale)
    kernings: int = 0


@dataclass(slots=True)
class SourceDocument:
    source: str
    fonts: Sequence[SourceFont] = ()


@dataclass(frozen=True, slots=True)
class _PreparedFont:
    id: FontId
    name: str
    metrics: FontMetrics
    codes: tuple[int, ...]
    glyphs: tuple[GlyphData, ...]


def _font_error(document: SourceDocument, font: SourceFont, message: str) -> UnsupportedFontError:
    return UnsupportedFontError(f"{document.source}: font {font.identifier}: {message}")


def prepare_document(index: int, document: SourceDocument) -> list[_PreparedFont]:
    """Validate the fonts of one document and compute their metrics."""
    prepared: list[_PreparedFont] = []
    for font in document.fonts:
        if font.kernings:
            raise _font_error(document, font, "Unsupported font kerning")
        if len(font.codes) != len(font.glyphs):
            raise _font_error(
                document,
                font,
                f"{len(font.codes)} character codes declared for {len(font.glyphs)} glyphs",
            )
        for code in font.codes:
            if not 0 <= code <= MAX_SOURCE_CODE:
                raise _font_error(document, font, f"Invalid character code {code}")
        scale = font.scale
        metrics = FontMetrics(font.ascent * scale.scale_x, font.descent * scale.scale_x, scale)
        prepared.append(
            _PreparedFont(
                id=FontId(index, font.identifier),
                name=font.name,
                metrics=metrics,
                codes=tuple(font.codes),
                glyphs=tuple(font.glyphs),
            )
        )
    return prepared


def extract_fonts(
    documents: Sequence[SourceDocument],
    *,
    context: CodeAssignmentContext | None = None,
    workers: int = 1,
    advance: Callable[[int], None] | None = None,
) -> list[Font]:
    """Create the font records of every document in the batch.

    A fresh `CodeAssignmentContext` is used unless one is given; a given
    context is reset first since code assignment is only valid per batch.
    """
    if context is None:
        context = CodeAssignmentContext()
    else:
        context.reset()

    def _prepare(item: tuple[int, SourceDocument]) -> list[_PreparedFont]:
        result = prepare_document(*item)
        if advance is not None:
            advance(1)
        return result

    if workers > 1 and len(documents) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields in submission order, keeping the document order.
            prepared = list(executor.map(_prepare, enumerate(documents)))
    else:
        prepared = [_prepare(item) for item in enumerate(documents)]

    fonts: list[Font] = []
    for document_fonts in prepared:
        for source in document_fonts:
            glyphs = context.assign_font(source.codes, source.glyphs)
            fonts.append(Font(source.id, source.name, source.metrics, glyphs))
    return fonts


__all__ = ["SourceDocument", "SourceFont", "extract_fonts", "prepare_document"]
