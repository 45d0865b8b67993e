"""Output directory handling for built font files."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
import shutil

from fontpool.exceptions import FontOutputError


TEMP_DIRNAME = "temp"


class FontOutputDir:
    """Resolve output and scratch paths for font building.

    Fonts are written under ``root``; intermediate files go to ``root/temp``,
    which is removed once the build is over.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def ensure(self) -> Path:
        """Ensure the output root exists and return it."""
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    def path(self, *parts: str | Path) -> Path:
        """Return a path under the output root, creating parent directories."""
        base = self.ensure()
        target = base.joinpath(*parts)
        target.parent.mkdir(parents=True, exist_ok=True)
        return target

    def file_path(self, filename: str) -> Path:
        """Return the path of *filename* directly under the output root.

        Names with directory parts, or resolving elsewhere, raise
        `FontOutputError`.
        """
        if filename in {"", ".", ".."} or Path(filename).name != filename or "\\" in filename:
            raise FontOutputError(f"Invalid font file name '{filename}'.")
        target = self.ensure() / filename
        if target.resolve().parent != self.root.resolve():
            raise FontOutputError(f"Font file '{filename}' resolves outside '{self.root}'.")
        return target

    @contextmanager
    def tempdir(self) -> Iterator[Path]:
        """Provide the scratch directory, deleting it on exit."""
        temp = self.ensure() / TEMP_DIRNAME
        temp.mkdir(exist_ok=True)
        try:
            yield temp
        finally:
            shutil.rmtree(temp, ignore_errors=True)


__all__ = ["TEMP_DIRNAME", "FontOutputDir"]
