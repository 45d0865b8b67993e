"""High-level orchestration of the font consolidation pipeline."""

from __future__ import annotations

from collections.abc import Sequence

from fontpool.config import ConvertConfig
from fontpool.fonts.builder import FontFileBuilder, TrueTypeFontBuilder, build_font_files
from fontpool.fonts.codes import CodeAssignmentContext
from fontpool.fonts.extraction import SourceDocument, extract_fonts
from fontpool.fonts.group import FontGroup
from fontpool.fonts.logging import FontPipelineLogger
from fontpool.fonts.merger import FontMerger
from fontpool.fonts.models import Font, FontsMap
from fontpool.fonts.naming import FontNamer
from fontpool.fonts.output import FontOutputDir
from fontpool.fonts.ungroup import ungroup_fonts


def format_percent(ratio: float) -> str:
    """Format *ratio* as a percentage with at most two fraction digits."""
    text = f"{ratio * 100:.2f}".rstrip("0").rstrip(".")
    return f"{text}%"


class FontConverter:
    """Consolidate the fonts of a batch of documents into shared font files."""

    def __init__(
        self,
        config: ConvertConfig | None = None,
        *,
        builder: FontFileBuilder | None = None,
        logger: FontPipelineLogger | None = None,
    ) -> None:
        self.config = config or ConvertConfig()
        self.builder = builder or TrueTypeFontBuilder()
        self.logger = logger or FontPipelineLogger()
        self.context = CodeAssignmentContext()

    def create_fonts(self, documents: Sequence[SourceDocument]) -> list[Font]:
        with self.logger.step("parsing all fonts"):
            with self.logger.progress("Parsing documents", total=len(documents)) as advance:
                fonts = extract_fonts(
                    documents,
                    context=self.context,
                    workers=self.config.extraction_workers,
                    advance=advance,
                )
        if documents and not fonts:
            self.logger.warning("No font found in %d documents", len(documents))
        self.logger.debug(
            "%d fonts parsed, %d glyph codes reassigned", len(fonts), self.context.reassigned
        )
        return fonts

    def create_font_groups(self, documents: Sequence[SourceDocument]) -> list[FontGroup]:
        """Parse, merge and name the fonts of every document.

        Each document has its own fonts, which are frequently subsets of the
        same faces. Grouping fonts with common glyph shapes is not perfect but
        can reduce the number of fonts by a large factor.
        """
        fonts = self.create_fonts(documents)

        with self.logger.step("merging fonts"):
            groups = FontMerger(enabled=self.config.group_fonts).merge(fonts)
        if self.config.group_fonts and fonts:
            ratio = (len(fonts) - len(groups)) / len(fonts)
            self.logger.info(
                "%d font groups created from %d fonts (-%s)",
                len(groups),
                len(fonts),
                format_percent(ratio),
            )

        FontNamer(keep_font_names=self.config.keep_font_names).assign(groups)
        return groups

    def create_font_files(self, groups: Sequence[FontGroup]) -> None:
        with self.logger.step("building fonts"):
            with self.logger.progress("Building fonts", total=len(groups)) as advance:
                build_font_files(
                    groups,
                    self.builder,
                    FontOutputDir(self.config.fonts_dir),
                    workers=self.config.build_workers,
                    advance=advance,
                )

    def ungroup_fonts(self, groups: Sequence[FontGroup]) -> FontsMap:
        """Map original font ids to fonts sharing their group's name and file."""
        return ungroup_fonts(groups)

    def convert(self, documents: Sequence[SourceDocument]) -> FontsMap:
        groups = self.create_font_groups(documents)
        self.create_font_files(groups)
        return self.ungroup_fonts(groups)


__all__ = ["FontConverter", "format_percent"]
