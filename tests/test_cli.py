import json
from pathlib import Path

from fontTools.ttLib import TTFont
import pytest
from typer.testing import CliRunner

from fontpool.ui.cli import app
from fontpool.version import get_version


TRIANGLE = [["M", 0, 0], ["L", 100, 0], ["L", 50, 80]]
BAR = [["M", 0, 0], ["L", 20, 0], ["L", 20, 200], ["L", 0, 200]]


def _write_batch(tmp_path: Path, *, kernings: int = 0) -> Path:
    payload = {
        "documents": [
            {
                "source": "first.swf",
                "fonts": [
                    {
                        "id": 1,
                        "name": "Arial",
                        "ascent": 900,
                        "descent": 200,
                        "kernings": kernings,
                        "glyphs": [{"code": 97, "advance": 500, "outline": TRIANGLE}],
                    }
                ],
            },
            {
                "source": "second.swf",
                "fonts": [
                    {
                        "id": 1,
                        "name": "Arial",
                        "ascent": 900,
                        "descent": 200,
                        "glyphs": [
                            {"code": 97, "advance": 500, "outline": TRIANGLE},
                            {"code": 108, "advance": 300, "outline": BAR},
                        ],
                    },
                    {
                        "id": 2,
                        "name": "Courier",
                        "ascent": 800,
                        "descent": 150,
                        "glyphs": [{"code": 97, "advance": 600, "outline": BAR}],
                    },
                ],
            },
        ]
    }
    path = tmp_path / "batch.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_consolidate_writes_fonts_and_map(tmp_path: Path) -> None:
    batch = _write_batch(tmp_path)
    fonts_dir = tmp_path / "fonts"
    map_path = tmp_path / "map.json"
    runner = CliRunner()

    result = runner.invoke(
        app,
        [str(batch), "--fonts-dir", str(fonts_dir), "--map", str(map_path), "--keep-names"],
    )

    assert result.exit_code == 0, result.stderr
    assert sorted(path.name for path in fonts_dir.iterdir()) == ["arial.ttf", "courier.ttf"]
    assert "2 font groups created from 3 fonts (-33.33%)" in result.stdout
    assert "arial: 2 fonts, 2 glyphs" in result.stdout

    summary = json.loads(map_path.read_text(encoding="utf-8"))
    assert summary["first.swf:1"]["file"] == summary["second.swf:1"]["file"]
    assert summary["second.swf:2"]["name"] == "courier"
    assert summary["second.swf:1"]["glyphs"] == [97, 108]

    font = TTFont(fonts_dir / "arial.ttf")
    assert set(font.getBestCmap()) == {97, 108}


def test_no_group_builds_one_font_per_source_font(tmp_path: Path) -> None:
    batch = _write_batch(tmp_path)
    fonts_dir = tmp_path / "fonts"

    result = CliRunner().invoke(app, [str(batch), "-o", str(fonts_dir), "--no-group", "-j", "2"])

    assert result.exit_code == 0, result.stderr
    assert sorted(path.name for path in fonts_dir.iterdir()) == ["0.ttf", "1.ttf", "2.ttf"]
    assert "font groups created" not in result.stdout


def test_config_file_supplies_defaults(tmp_path: Path) -> None:
    batch = _write_batch(tmp_path)
    config = tmp_path / "fontpool.toml"
    config.write_text(
        f'[fontpool]\nfonts_dir = "{(tmp_path / "configured").as_posix()}"\n'
        "keep_font_names = true\n",
        encoding="utf-8",
    )

    result = CliRunner().invoke(app, [str(batch), "--config", str(config)])

    assert result.exit_code == 0, result.stderr
    assert (tmp_path / "configured" / "courier.ttf").is_file()


def test_unsupported_font_reports_error(tmp_path: Path) -> None:
    batch = _write_batch(tmp_path, kernings=2)

    result = CliRunner().invoke(app, [str(batch), "-o", str(tmp_path / "fonts")])

    assert result.exit_code == 1
    assert "Unsupported font kerning" in result.stderr
    assert not (tmp_path / "fonts").exists()


def test_debug_reraises_pipeline_errors(tmp_path: Path) -> None:
    batch = _write_batch(tmp_path, kernings=2)

    result = CliRunner().invoke(app, [str(batch), "-o", str(tmp_path / "fonts"), "--debug"])

    assert result.exit_code == 1
    assert "Unsupported font kerning" in str(result.exception)


def test_invalid_batch_reports_error(tmp_path: Path) -> None:
    batch = tmp_path / "batch.yaml"
    batch.write_text("documents:\n  - fonts: []\n", encoding="utf-8")

    result = CliRunner().invoke(app, [str(batch), "-o", str(tmp_path / "fonts")])

    assert result.exit_code == 1
    assert "validation error for Batch" in result.stderr


def test_version_option() -> None:
    result = CliRunner().invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.stdout.strip() == get_version()


@pytest.mark.parametrize("jobs", ["0", "-1"])
def test_jobs_must_be_positive(tmp_path: Path, jobs: str) -> None:
    batch = _write_batch(tmp_path)

    result = CliRunner().invoke(app, [str(batch), "--jobs", jobs])

    assert result.exit_code == 2
