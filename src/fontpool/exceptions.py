"""Exception hierarchy for the font consolidation pipeline."""

from __future__ import annotations


class FontPoolError(RuntimeError):
    """Base exception for font consolidation failures."""


class UnsupportedFontError(FontPoolError):
    """Raised when a source font uses features the pipeline cannot carry over."""


class FontConsistencyError(FontPoolError):
    """Raised when a font group would map one character to two glyph shapes."""


class CodeSpaceExhaustedError(FontPoolError):
    """Raised when no private-use character code is left to assign."""


class FontOutputError(FontPoolError):
    """Raised when a font file would be written outside the output directory."""


class ConfigError(FontPoolError):
    """Raised when the run configuration cannot be loaded or validated."""


class BatchFormatError(FontPoolError):
    """Raised when a batch description file is malformed."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "BatchFormatError",
    "CodeSpaceExhaustedError",
    "ConfigError",
    "FontConsistencyError",
    "FontOutputError",
    "FontPoolError",
    "UnsupportedFontError",
    "exception_hint",
    "exception_messages",
]
