"""CLI command implementations."""

from __future__ import annotations

from .consolidate import consolidate


__all__ = ["consolidate"]
