"""Public CLI exports for fontpool."""

from __future__ import annotations

from .app import app, main
from .commands import consolidate
from .state import debug_enabled, emit_error, emit_warning, get_cli_state


__all__ = [
    "app",
    "consolidate",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "main",
]
