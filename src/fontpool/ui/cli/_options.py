"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
FONTS_PANEL = "Fonts"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

BatchArgument = Annotated[
    Path,
    typer.Argument(
        metavar="BATCH",
        help="Batch description (.json, .yaml) listing the documents and their fonts.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Configuration file (.toml, .yaml); command-line options take precedence.",
        exists=True,
        dir_okay=False,
        rich_help_panel=INPUTS_PANEL,
    ),
]

FontsDirOption = Annotated[
    Path | None,
    typer.Option(
        "--fonts-dir",
        "-o",
        help="Directory receiving the built font files.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

MapOption = Annotated[
    Path | None,
    typer.Option(
        "--map",
        help="Write the font id to font file mapping as JSON.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

GroupFontsOption = Annotated[
    bool | None,
    typer.Option(
        "--group/--no-group",
        help="Merge compatible fonts into shared font files.",
        rich_help_panel=FONTS_PANEL,
    ),
]

KeepNamesOption = Annotated[
    bool | None,
    typer.Option(
        "--keep-names/--no-keep-names",
        help="Name output fonts after their source font names instead of their index.",
        rich_help_panel=FONTS_PANEL,
    ),
]

JobsOption = Annotated[
    int | None,
    typer.Option(
        "--jobs",
        "-j",
        min=1,
        help="Worker threads used to read documents and build fonts.",
        rich_help_panel=FONTS_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]


__all__ = [
    "BatchArgument",
    "ConfigOption",
    "DebugOption",
    "FontsDirOption",
    "GroupFontsOption",
    "JobsOption",
    "KeepNamesOption",
    "MapOption",
    "VerboseOption",
]
