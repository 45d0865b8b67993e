"""Project font groups back onto the fonts they were built from."""

from __future__ import annotations

from collections.abc import Iterable

from fontpool.fonts.group import FontGroup
from fontpool.fonts.models import FontsMap


def ungroup_fonts(groups: Iterable[FontGroup]) -> FontsMap:
    """Map every original font id to its font, now pointing at the group resource.

    Fonts keep their own glyph codes; only the name and font file are shared.
    """
    fonts: FontsMap = {}
    for group in groups:
        for font in group.fonts:
            font.name = group.name
            font.font_file = group.font_file
            fonts[font.id] = font
    return fonts


__all__ = ["ungroup_fonts"]
