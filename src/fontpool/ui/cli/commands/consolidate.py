"""Implementation of the primary ``fontpool`` CLI command."""

from __future__ import annotations

import logging
from typing import Annotated

import click
import typer

from fontpool.batch import fonts_map_summary, load_batch, write_fonts_map
from fontpool.config import load_config, make_config
from fontpool.exceptions import FontPoolError, exception_hint
from fontpool.fonts.converter import FontConverter
from fontpool.fonts.logging import FontPipelineLogger
from fontpool.version import get_version

from .._options import (
    DIAGNOSTICS_PANEL,
    BatchArgument,
    ConfigOption,
    DebugOption,
    FontsDirOption,
    GroupFontsOption,
    JobsOption,
    KeepNamesOption,
    MapOption,
    VerboseOption,
)
from ..presenter import present_font_groups
from ..state import CLIState, emit_error, set_cli_state


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(get_version())
        raise typer.Exit()


def _configure_logging(state: CLIState) -> None:
    if state.verbosity < 2:
        return
    from rich.logging import RichHandler

    package_logger = logging.getLogger("fontpool")
    package_logger.setLevel(logging.DEBUG)
    if not any(isinstance(handler, RichHandler) for handler in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=state.err_console, show_path=False))


def consolidate(
    batch: BatchArgument,
    config_path: ConfigOption = None,
    fonts_dir: FontsDirOption = None,
    map_path: MapOption = None,
    group_fonts: GroupFontsOption = None,
    keep_names: KeepNamesOption = None,
    jobs: JobsOption = None,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the fontpool version and exit.",
            rich_help_panel=DIAGNOSTICS_PANEL,
        ),
    ] = False,
) -> None:
    """Merge the fonts of a batch of documents into a minimal set of font files."""

    state = set_cli_state(
        ctx=click.get_current_context(silent=True), verbosity=verbose, debug=debug
    )
    _configure_logging(state)

    overrides = {
        "fonts_dir": fonts_dir,
        "group_fonts": group_fonts,
        "keep_font_names": keep_names,
        "extraction_workers": jobs,
        "build_workers": jobs,
    }
    try:
        if config_path is not None:
            config = load_config(config_path, **overrides)
        else:
            config = make_config(**overrides)
        documents = load_batch(batch)
        converter = FontConverter(
            config, logger=FontPipelineLogger(verbose=state.verbosity >= 1)
        )
        groups = converter.create_font_groups(documents)
        converter.create_font_files(groups)
        fonts = converter.ungroup_fonts(groups)
    except FontPoolError as exc:
        if state.show_tracebacks:
            raise
        emit_error(exception_hint(exc) or str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    present_font_groups(state, groups)
    if map_path is not None:
        write_fonts_map(map_path, fonts_map_summary(fonts, documents))


__all__ = ["consolidate"]
