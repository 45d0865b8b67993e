"""Batch description files.

A batch lists the source documents of a run and the fonts each one defines,
with glyph outlines already decoded::

    documents:
      - source: first.swf
        fonts:
          - id: 1
            name: Arial
            ascent: 900
            descent: 200
            scale: {x: 1.0, y: 1.0}
            glyphs:
              - code: 97
                advance: 500
                outline: [[M, 0, 0], [L, 100, 0], [Q, 50, 50, 0, 0]]

JSON files use the same structure.
"""

from __future__ import annotations

from collections.abc import Mapping
import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from fontpool.exceptions import BatchFormatError
from fontpool.fonts.extraction import SourceDocument, SourceFont
from fontpool.fonts.models import (
    FontScale,
    FontsMap,
    GlyphData,
    LineTo,
    MoveTo,
    PathCommand,
    QuadTo,
)


_COMMAND_ARITY = {"M": 2, "L": 2, "Q": 4}


def parse_command(raw: Any) -> PathCommand:
    """Parse an outline command such as ``["Q", cx, cy, x, y]``."""
    if not isinstance(raw, (list, tuple)) or not raw:
        raise ValueError(f"outline command must be a non-empty list, got {raw!r}")
    op = str(raw[0]).upper()
    arity = _COMMAND_ARITY.get(op)
    if arity is None:
        raise ValueError(f"unknown outline command {raw[0]!r}")
    args = raw[1:]
    if len(args) != arity:
        raise ValueError(f"outline command {op} expects {arity} values, got {len(args)}")
    values = [float(value) for value in args]
    if op == "M":
        return MoveTo(*values)
    if op == "L":
        return LineTo(*values)
    return QuadTo(*values)


class GlyphEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: int
    advance: float = 0.0
    outline: list[Any] = Field(default_factory=list)

    @field_validator("outline", mode="before")
    @classmethod
    def _parse_outline(cls, value: Any) -> list[PathCommand]:
        if value is None:
            return []
        return [parse_command(item) for item in value]

    def to_glyph_data(self) -> GlyphData:
        return GlyphData(self.advance, tuple(self.outline))


class ScaleEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    x: float = 1.0
    y: float = 1.0


class FontEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: int
    name: str = ""
    ascent: float = 0.0
    descent: float = 0.0
    scale: ScaleEntry = Field(default_factory=ScaleEntry)
    kernings: int = 0
    glyphs: list[GlyphEntry] = Field(default_factory=list)

    def to_source_font(self) -> SourceFont:
        return SourceFont(
            identifier=self.id,
            name=self.name,
            codes=[glyph.code for glyph in self.glyphs],
            glyphs=[glyph.to_glyph_data() for glyph in self.glyphs],
            ascent=self.ascent,
            descent=self.descent,
            scale=FontScale(self.scale.x, self.scale.y),
            kernings=self.kernings,
        )


class DocumentEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    source: str
    fonts: list[FontEntry] = Field(default_factory=list)

    def to_document(self) -> SourceDocument:
        return SourceDocument(self.source, [font.to_source_font() for font in self.fonts])


class Batch(BaseModel):
    model_config = ConfigDict(extra="forbid")

    documents: list[DocumentEntry] = Field(default_factory=list)

    def to_documents(self) -> list[SourceDocument]:
        return [document.to_document() for document in self.documents]


def parse_batch(payload: Any) -> list[SourceDocument]:
    try:
        batch = Batch.model_validate(payload)
    except ValidationError as exc:
        raise BatchFormatError(f"Invalid batch description: {exc}") from exc
    return batch.to_documents()


def load_batch(path: Path) -> list[SourceDocument]:
    """Read the documents listed in a JSON or YAML batch file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise BatchFormatError(f"Unable to read batch file '{path}': {exc}") from exc
    try:
        if path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise BatchFormatError(f"Invalid batch file '{path}': {exc}") from exc
    return parse_batch(payload or {})


def fonts_map_summary(
    fonts: FontsMap, documents: list[SourceDocument] | None = None
) -> dict[str, dict[str, Any]]:
    """Describe a fonts map as plain data, keyed by ``<document>:<font id>``."""
    summary: dict[str, dict[str, Any]] = {}
    for font_id in sorted(fonts):
        font = fonts[font_id]
        if documents is not None:
            key = f"{documents[font_id.document_index].source}:{font_id.identifier}"
        else:
            key = str(font_id)
        summary[key] = {
            "name": font.name,
            "file": str(font.font_file) if font.font_file is not None else None,
            "glyphs": [glyph.code for glyph in font.glyphs],
        }
    return summary


def write_fonts_map(path: Path, summary: Mapping[str, Any]) -> None:
    Path(path).write_text(json.dumps(summary, indent=2) + "\n", encoding="utf-8")


__all__ = [
    "Batch",
    "fonts_map_summary",
    "load_batch",
    "parse_batch",
    "parse_command",
    "write_fonts_map",
]
