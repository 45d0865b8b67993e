"""Font consolidation toolchain.

Architecture
: `extract_fonts` turns the fonts defined by each source document into `Font`
  records. Character codes are resolved by a batch-wide
  `CodeAssignmentContext` so identical shapes found in different documents
  receive the same private-use code.
: `FontMerger` wraps every font in a `FontGroup` and greedily merges groups
  whose glyphs agree on every common character, first per font name, then
  across names.
: `FontNamer` gives each surviving group a unique name, a `FontFileBuilder`
  writes one font file per group, and `ungroup_fonts` maps every original
  `FontId` back to its font, now sharing the group's name and file.
: `FontConverter` chains the steps according to a `ConvertConfig`.

Goal
: Emit as few font files as possible for a batch of documents that each embed
  their own subsetted copies of the same faces.
"""

from fontpool.fonts.builder import FontFileBuilder, TrueTypeFontBuilder, build_font_files
from fontpool.fonts.codes import CodeAssignmentContext
from fontpool.fonts.converter import FontConverter
from fontpool.fonts.extraction import SourceDocument, SourceFont, extract_fonts
from fontpool.fonts.group import FontGroup
from fontpool.fonts.logging import FontPipelineLogger
from fontpool.fonts.merger import FontMerger
from fontpool.fonts.models import (
    WHITESPACE_ADVANCE_WIDTH,
    Font,
    FontGlyph,
    FontId,
    FontMetrics,
    FontScale,
    FontsMap,
    GlyphData,
    LineTo,
    MoveTo,
    QuadTo,
)
from fontpool.fonts.naming import FontNamer
from fontpool.fonts.output import FontOutputDir
from fontpool.fonts.ungroup import ungroup_fonts


__all__ = [
    "WHITESPACE_ADVANCE_WIDTH",
    "CodeAssignmentContext",
    "Font",
    "FontConverter",
    "FontFileBuilder",
    "FontGlyph",
    "FontGroup",
    "FontId",
    "FontMerger",
    "FontMetrics",
    "FontNamer",
    "FontOutputDir",
    "FontPipelineLogger",
    "FontScale",
    "FontsMap",
    "GlyphData",
    "LineTo",
    "MoveTo",
    "QuadTo",
    "SourceDocument",
    "SourceFont",
    "TrueTypeFontBuilder",
    "build_font_files",
    "extract_fonts",
    "ungroup_fonts",
]
