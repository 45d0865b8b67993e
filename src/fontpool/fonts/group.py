"""Consolidation units combining compatible fonts."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from fontpool.exceptions import FontConsistencyError
from fontpool.fonts.models import Font, FontGlyph, FontMetrics, GlyphData


def is_compatible(
    first: Mapping[str, GlyphData],
    second: Mapping[str, GlyphData],
    *,
    require_common: bool,
) -> bool:
    """Return whether two character maps agree on every shared character.

    With *require_common*, the maps must also share at least one character.
    """
    if len(first) > len(second):
        first, second = second, first
    common = False
    for char, data in first.items():
        other = second.get(char)
        if other is None:
            continue
        if other != data:
            return False
        common = True
    return common or not require_common


@dataclass(slots=True, eq=False)
class FontGroup:
    """A set of fonts that can share one output font file.

    Members are stored as indices into ``arena``, the tuple of every font of
    the batch, so merging only appends integers.
    """

    name: str
    metrics: FontMetrics
    arena: Sequence[Font] = field(repr=False)
    members: list[int]
    char_map: dict[str, GlyphData]
    font_file: Path | None = None

    @classmethod
    def singleton(cls, arena: Sequence[Font], index: int) -> FontGroup:
        font = arena[index]
        return cls(
            name=font.name,
            metrics=font.metrics,
            arena=arena,
            members=[index],
            char_map=font.char_map,
        )

    @property
    def fonts(self) -> list[Font]:
        return [self.arena[index] for index in self.members]

    @property
    def glyphs(self) -> list[FontGlyph]:
        """Return the merged glyph set, one entry per character."""
        return [FontGlyph(char, data) for char, data in self.char_map.items()]

    def is_compatible_with(self, other: FontGroup, *, require_common: bool) -> bool:
        return is_compatible(self.char_map, other.char_map, require_common=require_common)

    def merge(self, other: FontGroup) -> None:
        """Absorb *other*, whose members and characters are appended to this group."""
        if other.arena is not self.arena:
            raise FontConsistencyError(
                f"Cannot merge font group '{other.name}' built from another batch."
            )
        conflicts = sorted(
            char
            for char, data in other.char_map.items()
            if char in self.char_map and self.char_map[char] != data
        )
        if conflicts:
            codes = ", ".join(f"U+{ord(char):04X}" for char in conflicts)
            raise FontConsistencyError(
                f"Merging font group '{other.name}' into '{self.name}' "
                f"maps {codes} to two different glyphs."
            )
        self.members.extend(other.members)
        for char, data in other.char_map.items():
            self.char_map.setdefault(char, data)


__all__ = ["FontGroup", "is_compatible"]
