"""Primary public API for fontpool."""

from __future__ import annotations

from fontpool.batch import fonts_map_summary, load_batch, parse_batch
from fontpool.config import ConvertConfig, load_config, make_config
from fontpool.exceptions import (
    BatchFormatError,
    CodeSpaceExhaustedError,
    ConfigError,
    FontConsistencyError,
    FontOutputError,
    FontPoolError,
    UnsupportedFontError,
)
from fontpool.fonts import (
    CodeAssignmentContext,
    Font,
    FontConverter,
    FontGlyph,
    FontGroup,
    FontId,
    FontMerger,
    FontMetrics,
    FontNamer,
    FontScale,
    FontsMap,
    GlyphData,
    LineTo,
    MoveTo,
    QuadTo,
    SourceDocument,
    SourceFont,
    TrueTypeFontBuilder,
    extract_fonts,
    ungroup_fonts,
)
from fontpool.version import get_version


__version__ = get_version()


__all__ = [
    "BatchFormatError",
    "CodeAssignmentContext",
    "CodeSpaceExhaustedError",
    "ConfigError",
    "ConvertConfig",
    "Font",
    "FontConsistencyError",
    "FontConverter",
    "FontGlyph",
    "FontGroup",
    "FontId",
    "FontMerger",
    "FontMetrics",
    "FontNamer",
    "FontOutputError",
    "FontPoolError",
    "FontScale",
    "FontsMap",
    "GlyphData",
    "LineTo",
    "MoveTo",
    "QuadTo",
    "SourceDocument",
    "SourceFont",
    "TrueTypeFontBuilder",
    "UnsupportedFontError",
    "__version__",
    "extract_fonts",
    "fonts_map_summary",
    "get_version",
    "load_batch",
    "load_config",
    "make_config",
    "parse_batch",
    "ungroup_fonts",
]
