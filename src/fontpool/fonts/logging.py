"""Progress reporting for the consolidation pipeline.

Messages go to the console of the running ``fontpool`` command when there is
one, and to stderr through typer otherwise. Library users who want silence
pass ``quiet=True``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
import time
from typing import TYPE_CHECKING, Any

import typer


if TYPE_CHECKING:
    from rich.console import Console

    from fontpool.ui.cli.state import CLIState


def _active_cli_state() -> CLIState | None:
    from fontpool.ui.cli.state import get_cli_state

    try:
        return get_cli_state(create=False)
    except RuntimeError:
        return None


def _format(message: str, args: tuple[Any, ...]) -> str:
    return message % args if args else message


@dataclass(slots=True)
class FontPipelineLogger:
    """Announce pipeline steps and drive their progress bars."""

    verbose: bool = False
    quiet: bool = False
    _state: CLIState | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self._state = _active_cli_state()

    def _stderr(self) -> Console:
        if self._state is not None:
            return self._state.err_console
        from rich.console import Console

        return Console(stderr=True)

    def info(self, message: str, *args: Any) -> None:
        if self.quiet:
            return
        text = _format(message, args)
        if self._state is None:
            typer.echo(text, err=True)
        else:
            self._state.console.log(text)

    def warning(self, message: str, *args: Any) -> None:
        text = _format(message, args)
        if self._state is None:
            typer.secho(text, fg="yellow", err=True)
            return
        from fontpool.ui.cli.state import emit_warning

        emit_warning(text)

    def debug(self, message: str, *args: Any) -> None:
        if self.verbose:
            self.info(message, *args)

    @contextmanager
    def step(self, name: str) -> Iterator[None]:
        """Announce *name*, then report its duration in verbose mode."""
        self.info(name)
        started = time.perf_counter()
        yield
        self.debug("%s done in %.2fs", name, time.perf_counter() - started)

    @contextmanager
    def progress(self, task: str, total: int | None = None) -> Iterator[Callable[[int], None]]:
        """Yield a callback advancing a Rich progress bar for *task*."""
        if self.quiet:
            yield lambda step=1: None
            return

        from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

        columns = [TextColumn(f"[bold cyan]{task}"), BarColumn(), MofNCompleteColumn()]
        with Progress(*columns, console=self._stderr(), transient=not self.verbose) as bar:
            task_id = bar.add_task(task, total=total)
            yield lambda step=1: bar.advance(task_id, step)


__all__ = ["FontPipelineLogger"]
