from pathlib import Path

from fontTools.pens.recordingPen import RecordingPen
from fontTools.ttLib import TTFont
import pytest

from fontpool.config import ConvertConfig
from fontpool.exceptions import FontOutputError
from fontpool.fonts.builder import (
    FontFileBuilder,
    TrueTypeFontBuilder,
    build_font_files,
    draw_outline,
    glyph_name,
)
from fontpool.fonts.converter import FontConverter
from fontpool.fonts.extraction import SourceDocument, SourceFont
from fontpool.fonts.group import FontGroup
from fontpool.fonts.merger import FontMerger
from fontpool.fonts.models import (
    Font,
    FontGlyph,
    FontId,
    FontMetrics,
    GlyphData,
    LineTo,
    MoveTo,
    QuadTo,
)
from fontpool.fonts.naming import FontNamer
from fontpool.fonts.output import TEMP_DIRNAME, FontOutputDir


TRIANGLE = GlyphData(500, (MoveTo(10, 0), LineTo(110, 0), LineTo(60, 100)))
CURVE = GlyphData(650, (MoveTo(0, 0), QuadTo(50, 120, 100, 0), LineTo(0, 0)))


def _groups(keep_names: bool = True) -> list[FontGroup]:
    fonts = [
        Font(
            FontId(0, 1),
            "Arial",
            FontMetrics(900, 200),
            [FontGlyph("a", TRIANGLE), FontGlyph(" ", GlyphData.whitespace())],
        ),
        Font(FontId(1, 1), "Arial", FontMetrics(900, 200), [FontGlyph("\ue000", CURVE)]),
        Font(FontId(1, 2), "Courier", FontMetrics(800, 150), [FontGlyph("a", CURVE)]),
    ]
    groups = FontMerger().merge(fonts)
    FontNamer(keep_font_names=keep_names).assign(groups)
    return groups


def test_glyph_names_cover_both_planes() -> None:
    assert glyph_name(0x61) == "uni0061"
    assert glyph_name(0xE000) == "uniE000"
    assert glyph_name(0xF0000) == "uF0000"


def test_draw_outline_closes_each_contour() -> None:
    pen = RecordingPen()
    outline = [
        MoveTo(0, 0),
        LineTo(10, 0),
        LineTo(10, 10),
        MoveTo(20, 20),
        MoveTo(30, 30),
        QuadTo(35, 40, 40, 30),
    ]

    draw_outline(pen, outline)

    assert pen.value == [
        ("moveTo", ((0, 0),)),
        ("lineTo", ((10, 0),)),
        ("lineTo", ((10, 10),)),
        ("closePath", ()),
        ("moveTo", ((30, 30),)),
        ("qCurveTo", ((35, 40), (40, 30))),
        ("closePath", ()),
    ]


def test_truetype_builder_writes_the_merged_glyph_set(tmp_path: Path) -> None:
    arial, courier = _groups()
    output = FontOutputDir(tmp_path / "fonts")

    with output.tempdir() as temp_dir:
        path = TrueTypeFontBuilder().build(arial, output, temp_dir)
        assert not (temp_dir / "arial.ttf").exists()

    assert path == tmp_path / "fonts" / "arial.ttf"
    font = TTFont(path)
    assert font.getBestCmap() == {0x20: "uni0020", 0x61: "uni0061", 0xE000: "uniE000"}
    assert font.getGlyphOrder() == [".notdef", "uni0020", "uni0061", "uniE000"]
    assert font["hmtx"]["uni0061"] == (500, 10)
    assert font["hmtx"]["uniE000"][0] == 650
    assert font["glyf"]["uni0061"].numberOfContours == 1
    assert font["glyf"]["uni0020"].numberOfContours == 0
    assert font["hhea"].ascent == 900
    assert font["hhea"].descent == -200
    assert font["name"].getDebugName(1) == "arial"
    assert font["name"].getDebugName(6) == "arial"


def test_postscript_name_is_slugified() -> None:
    (group,) = FontMerger(enabled=False).merge(
        [Font(FontId(0, 1), "Fancy Sans!", FontMetrics(900, 200), [FontGlyph("a", TRIANGLE)])]
    )

    assert TrueTypeFontBuilder().postscript_name(group) == "fancy-sans"


def test_build_font_files_records_files_and_cleans_up(tmp_path: Path) -> None:
    groups = _groups(keep_names=False)
    output = FontOutputDir(tmp_path / "out")
    steps: list[int] = []

    build_font_files(groups, TrueTypeFontBuilder(), output, workers=2, advance=steps.append)

    assert [group.font_file for group in groups] == [
        tmp_path / "out" / "0.ttf",
        tmp_path / "out" / "1.ttf",
    ]
    assert all(group.font_file.is_file() for group in groups)
    assert not (tmp_path / "out" / TEMP_DIRNAME).exists()
    assert steps == [1, 1]


class _RecordingBuilder:
    def __init__(self) -> None:
        self.calls: list[tuple[str, bool]] = []

    def build(self, group: FontGroup, output: FontOutputDir, temp_dir: Path) -> Path:
        self.calls.append((group.name, temp_dir.is_dir()))
        return output.path(f"{group.name}.bin")


def test_custom_builders_follow_the_protocol(tmp_path: Path) -> None:
    groups = _groups()
    builder = _RecordingBuilder()

    assert isinstance(builder, FontFileBuilder)
    build_font_files(groups, builder, FontOutputDir(tmp_path))

    assert builder.calls == [("arial", True), ("courier", True)]
    assert groups[1].font_file == tmp_path / "courier.bin"


def test_kept_names_with_path_characters_stay_in_fonts_dir(tmp_path: Path) -> None:
    fonts_dir = tmp_path / "fonts"
    documents = [
        SourceDocument("first.swf", [SourceFont(1, "Foo/Bar", [ord("a")], [TRIANGLE])]),
        SourceDocument("second.swf", [SourceFont(1, "../escape", [ord("a")], [CURVE])]),
    ]
    converter = FontConverter(ConvertConfig(fonts_dir=fonts_dir, keep_font_names=True))
    converter.logger.quiet = True

    fonts = converter.convert(documents)

    assert fonts[FontId(0, 1)].font_file == fonts_dir / "foo-bar.ttf"
    assert fonts[FontId(1, 1)].font_file == fonts_dir / "escape.ttf"
    assert sorted(path.name for path in fonts_dir.iterdir()) == ["escape.ttf", "foo-bar.ttf"]
    assert not (tmp_path / "escape.ttf").exists()


@pytest.mark.parametrize("name", ["Foo/Bar", "../escape", "a\\b"])
def test_builder_refuses_names_leaving_the_output_dir(tmp_path: Path, name: str) -> None:
    (group,) = FontMerger(enabled=False).merge(
        [Font(FontId(0, 1), "Arial", FontMetrics(900, 200), [FontGlyph("a", TRIANGLE)])]
    )
    group.name = name
    output = FontOutputDir(tmp_path / "fonts")

    with pytest.raises(FontOutputError):
        build_font_files([group], TrueTypeFontBuilder(), output)

    assert group.font_file is None
    assert sorted(path.name for path in tmp_path.rglob("*")) == ["fonts"]
