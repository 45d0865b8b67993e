"""Diagnostics state shared by the fontpool command and the pipeline logger."""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
import sys
from typing import IO, TYPE_CHECKING, Any

import click

from fontpool.exceptions import exception_messages


if TYPE_CHECKING:
    from rich.console import Console


def _console_for(console: Console | None, stream: IO[str], **options: Any) -> Console:
    # Test runners swap the standard streams between invocations.
    if console is not None and console.file is stream:
        return console
    from rich.console import Console

    return Console(file=stream, **options)


@dataclass(slots=True)
class CLIState:
    """Verbosity and traceback settings of the running command."""

    verbosity: int = 0
    show_tracebacks: bool = False
    _console: Console | None = field(default=None, init=False, repr=False)
    _err_console: Console | None = field(default=None, init=False, repr=False)

    @property
    def console(self) -> Console:
        self._console = _console_for(self._console, sys.stdout)
        return self._console

    @property
    def err_console(self) -> Console:
        self._err_console = _console_for(self._err_console, sys.stderr, highlight=False)
        return self._err_console


_STATE_VAR: ContextVar[CLIState | None] = ContextVar("fontpool_cli_state", default=None)


def _state_from_context(ctx: click.Context | None) -> CLIState | None:
    while ctx is not None:
        if isinstance(ctx.obj, CLIState):
            return ctx.obj
        ctx = ctx.parent
    return None


def get_cli_state(ctx: click.Context | None = None, *, create: bool = True) -> CLIState:
    """Return the state of the active command, creating it when allowed.

    The state attached to the click context wins over the one bound to the
    current execution context. Without either, ``RuntimeError`` is raised
    unless *create* is set.
    """
    if ctx is None:
        ctx = click.get_current_context(silent=True)

    state = _state_from_context(ctx) or _STATE_VAR.get()
    if state is None:
        if not create:
            raise RuntimeError("CLI state is not initialised for this context.")
        state = CLIState()
    if ctx is not None and ctx.obj is None:
        ctx.obj = state
    _STATE_VAR.set(state)
    return state


def set_cli_state(
    *,
    ctx: click.Context | None = None,
    verbosity: int | None = None,
    debug: bool | None = None,
) -> CLIState:
    state = get_cli_state(ctx)
    if verbosity is not None:
        state.verbosity = max(0, verbosity)
    if debug is not None:
        state.show_tracebacks = debug
    return state


def reset_cli_state() -> None:
    _STATE_VAR.set(None)


def render_message(
    level: str,
    message: str,
    *,
    exception: BaseException | None = None,
) -> None:
    """Print *message* with a level prefix; details of *exception* follow with -v."""
    state = get_cli_state()
    if level == "info":
        state.console.log(message)
        return

    from rich.text import Text

    style = "red" if level == "error" else "yellow"
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))
    if exception is not None and state.verbosity >= 1:
        details = [line for line in exception_messages(exception) if line not in message]
        details.append(f"type: {type(exception).__name__}")
        text.append("\n" + "\n".join(details), style=style)
    state.err_console.print(text)


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    render_message("warning", message, exception=exception)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    render_message("error", message, exception=exception)


def debug_enabled() -> bool:
    """Return whether full tracebacks were requested."""
    state = _STATE_VAR.get()
    return state is not None and state.show_tracebacks


__all__ = [
    "CLIState",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "render_message",
    "reset_cli_state",
    "set_cli_state",
]
