from pathlib import Path

import pytest

from fontpool.exceptions import FontOutputError
from fontpool.fonts.output import TEMP_DIRNAME, FontOutputDir


def test_path_creates_parent_directories(tmp_path: Path) -> None:
    output = FontOutputDir(tmp_path / "fonts")

    target = output.path("nested", "font.ttf")

    assert target == tmp_path / "fonts" / "nested" / "font.ttf"
    assert target.parent.is_dir()


def test_tempdir_is_removed_even_on_failure(tmp_path: Path) -> None:
    output = FontOutputDir(tmp_path)

    with pytest.raises(RuntimeError):
        with output.tempdir() as temp_dir:
            assert temp_dir == tmp_path / TEMP_DIRNAME
            (temp_dir / "partial.ttf").write_bytes(b"0")
            raise RuntimeError("boom")

    assert not (tmp_path / TEMP_DIRNAME).exists()


def test_file_path_accepts_plain_names(tmp_path: Path) -> None:
    output = FontOutputDir(tmp_path / "fonts")

    assert output.file_path("arial.ttf") == tmp_path / "fonts" / "arial.ttf"


@pytest.mark.parametrize("filename", ["", ".", "..", "a/b.ttf", "../x.ttf", "a\\b.ttf"])
def test_file_path_refuses_names_with_directories(tmp_path: Path, filename: str) -> None:
    with pytest.raises(FontOutputError):
        FontOutputDir(tmp_path).file_path(filename)
