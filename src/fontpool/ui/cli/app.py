"""Typer application wiring for the fontpool CLI."""

from __future__ import annotations

import typer

from fontpool.ui.cli.commands.consolidate import consolidate

from .state import debug_enabled, emit_error, get_cli_state


app = typer.Typer(
    help="Merge the fonts embedded by a batch of documents into shared font files.",
    context_settings={"help_option_names": ["-h", "--help"]},
    pretty_exceptions_enable=False,
)


app.command()(consolidate)


def _print_traceback(exc: BaseException, *, show_locals: bool) -> None:
    from rich.traceback import Traceback

    state = get_cli_state()
    state.err_console.print(
        Traceback.from_exception(type(exc), exc, exc.__traceback__, show_locals=show_locals)
    )


def main() -> None:
    """Run the CLI, turning interrupts and unexpected failures into exit code 1."""
    try:
        app()
    except (typer.Exit, SystemExit):
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Interrupted.", exception=exc)
        raise typer.Exit(code=1) from exc
    except Exception as exc:  # pragma: no cover - last resort reporting
        state = get_cli_state()
        if state.show_tracebacks:
            _print_traceback(exc, show_locals=state.verbosity >= 2)
        else:
            emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
