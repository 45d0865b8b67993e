"""Rich-aware presenters for CLI output."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import typer

from fontpool.fonts.group import FontGroup

from .state import CLIState


def _format_path(path: Path) -> str:
    """Format a path relative to the current working directory for display."""
    resolved = path.resolve()
    try:
        return str(resolved.relative_to(Path.cwd()))
    except ValueError:
        return str(resolved)


def _size_details(path: Path | None) -> str:
    """Return a human-readable size for a file if it exists."""
    if path is None or not path.is_file():
        return ""
    size = path.stat().st_size
    if size >= 1024 * 1024:
        return f"{size / (1024 * 1024):.2f} MiB"
    if size >= 1024:
        return f"{size / 1024:.1f} KiB"
    return f"{size} B"


def present_font_groups(state: CLIState, groups: Sequence[FontGroup]) -> None:
    """Display one row per built font group."""
    rows = [
        (
            group.name,
            str(len(group.members)),
            str(len(group.char_map)),
            _format_path(group.font_file) if group.font_file is not None else "",
            _size_details(group.font_file),
        )
        for group in groups
    ]
    console = state.console
    if not console.is_terminal:
        for name, fonts, glyphs, location, size in rows:
            details = f" ({size})" if size else ""
            typer.echo(f"{name}: {fonts} fonts, {glyphs} glyphs -> {location}{details}")
        return

    from rich import box
    from rich.table import Table

    table = Table(box=box.SQUARE, header_style="bold cyan", title="Font Groups")
    table.add_column("Name", style="cyan")
    table.add_column("Fonts", justify="right")
    table.add_column("Glyphs", justify="right")
    table.add_column("Location")
    table.add_column("Filesize", style="magenta", justify="right", no_wrap=True)
    for row in rows:
        table.add_row(*row)
    console.print(table)


__all__ = ["present_font_groups"]
