"""Build one font file per font group."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Protocol, runtime_checkable

from fontTools.fontBuilder import FontBuilder
from fontTools.misc.roundTools import otRound
from fontTools.pens.ttGlyphPen import TTGlyphPen
from slugify import slugify

from fontpool.fonts.group import FontGroup
from fontpool.fonts.models import LineTo, MoveTo, PathCommand, QuadTo
from fontpool.fonts.output import FontOutputDir


UNITS_PER_EM = 1024
FONT_EXTENSION = ".ttf"


@runtime_checkable
class FontFileBuilder(Protocol):
    """Write the font file of a group and return its final path."""

    def build(self, group: FontGroup, output: FontOutputDir, temp_dir: Path) -> Path: ...


def glyph_name(code: int) -> str:
    if code <= 0xFFFF:
        return f"uni{code:04X}"
    return f"u{code:05X}"


def draw_outline(pen: TTGlyphPen, outline: Sequence[PathCommand]) -> None:
    """Replay outline commands on *pen*, closing every contour."""
    start: tuple[float, float] = (0.0, 0.0)
    drawing = False
    for command in outline:
        if isinstance(command, MoveTo):
            if drawing:
                pen.closePath()
                drawing = False
            start = (command.x, command.y)
            continue
        if not drawing:
            pen.moveTo(start)
            drawing = True
        if isinstance(command, LineTo):
            pen.lineTo((command.x, command.y))
        elif isinstance(command, QuadTo):
            pen.qCurveTo((command.cx, command.cy), (command.x, command.y))
    if drawing:
        pen.closePath()


class TrueTypeFontBuilder:
    """Build a TrueType font from the merged glyph set of a group."""

    def __init__(self, *, units_per_em: int = UNITS_PER_EM) -> None:
        self.units_per_em = units_per_em

    def postscript_name(self, group: FontGroup) -> str:
        return slugify(group.name) or "font"

    def build(self, group: FontGroup, output: FontOutputDir, temp_dir: Path) -> Path:
        filename = f"{group.name}{FONT_EXTENSION}"
        target = output.file_path(filename)

        glyph_order = [".notdef"]
        cmap: dict[int, str] = {}
        glyphs = {".notdef": TTGlyphPen(None).glyph()}
        metrics: dict[str, tuple[int, int]] = {".notdef": (self.units_per_em // 2, 0)}

        for glyph in sorted(group.glyphs, key=lambda item: item.code):
            name = glyph_name(glyph.code)
            pen = TTGlyphPen(None)
            draw_outline(pen, glyph.data.outline)
            tt_glyph = pen.glyph()
            x_min = tt_glyph.coordinates.calcIntBounds()[0]
            glyph_order.append(name)
            cmap[glyph.code] = name
            glyphs[name] = tt_glyph
            metrics[name] = (max(0, otRound(glyph.data.advance_width)), x_min)

        ascent = otRound(group.metrics.ascent)
        descent = -abs(otRound(group.metrics.descent))

        builder = FontBuilder(self.units_per_em, isTTF=True)
        builder.setupGlyphOrder(glyph_order)
        builder.setupCharacterMap(cmap)
        builder.setupGlyf(glyphs)
        builder.setupHorizontalMetrics(metrics)
        builder.setupHorizontalHeader(ascent=ascent, descent=descent)
        builder.setupNameTable(
            {
                "familyName": group.name,
                "styleName": "Regular",
                "psName": self.postscript_name(group),
            }
        )
        builder.setupOS2(
            sTypoAscender=ascent,
            sTypoDescender=descent,
            usWinAscent=max(0, ascent),
            usWinDescent=abs(descent),
        )
        builder.setupPost()

        staged = temp_dir / filename
        builder.save(str(staged))
        staged.replace(target)
        return target


def build_font_files(
    groups: Sequence[FontGroup],
    builder: FontFileBuilder,
    output: FontOutputDir,
    *,
    workers: int = 1,
    advance: Callable[[int], None] | None = None,
) -> None:
    """Build every group's font file and record it as the group's ``font_file``."""

    def _build(group: FontGroup, temp_dir: Path) -> None:
        group.font_file = builder.build(group, output, temp_dir)
        if advance is not None:
            advance(1)

    with output.tempdir() as temp_dir:
        if workers > 1 and len(groups) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [executor.submit(_build, group, temp_dir) for group in groups]
                for future in futures:
                    future.result()
        else:
            for group in groups:
                _build(group, temp_dir)


__all__ = [
    "FONT_EXTENSION",
    "UNITS_PER_EM",
    "FontFileBuilder",
    "TrueTypeFontBuilder",
    "build_font_files",
    "draw_outline",
    "glyph_name",
]
