"""Cluster compatible fonts into shared font groups.

Each source document carries its own, often subsetted, copy of the same
faces. Grouping fonts whose glyph shapes agree on every common character
reduces the number of output fonts considerably, sometimes by a factor of
50 to 100. The grouping is greedy and depends on the input order, so callers
must pass fonts in a stable order.

Merging runs in two phases:

1. fonts sharing a name are merged when they agree on at least one common
   character and disagree on none;
2. all resulting groups are merged again regardless of name, this time also
   folding groups without any common character.

Each phase repeats full passes over the group list until a pass no longer
reduces the number of groups, since a merge can make two groups that had no
common character compatible.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging

from fontpool.fonts.group import FontGroup
from fontpool.fonts.models import Font


logger = logging.getLogger(__name__)


def merge_pass(groups: Sequence[FontGroup], *, require_common: bool) -> list[FontGroup]:
    """Merge each group into the first compatible group kept so far."""
    merged: list[FontGroup] = []
    for group in groups:
        for target in merged:
            if group.is_compatible_with(target, require_common=require_common):
                target.merge(group)
                break
        else:
            merged.append(group)
    return merged


def merge_font_groups(groups: Sequence[FontGroup], *, require_common: bool) -> list[FontGroup]:
    """Repeat merge passes until the number of groups stops decreasing."""
    current = list(groups)
    while True:
        merged = merge_pass(current, require_common=require_common)
        if len(merged) == len(current):
            return merged
        logger.debug("Merged %d groups into %d groups", len(current), len(merged))
        current = merged


class FontMerger:
    """Two-phase font grouping.

    With ``enabled`` false, every font is returned in its own group.
    """

    def __init__(self, *, enabled: bool = True) -> None:
        self.enabled = enabled

    def create_groups(self, fonts: Sequence[Font]) -> list[FontGroup]:
        arena = tuple(fonts)
        return [FontGroup.singleton(arena, index) for index in range(len(arena))]

    def merge(self, fonts: Sequence[Font]) -> list[FontGroup]:
        groups = self.create_groups(fonts)
        if not self.enabled:
            return groups

        by_name: dict[str, list[FontGroup]] = {}
        for group in groups:
            by_name.setdefault(group.name, []).append(group)

        named_groups: list[FontGroup] = []
        for name, candidates in by_name.items():
            logger.debug("Merging fonts with name %s", name)
            named_groups.extend(merge_font_groups(candidates, require_common=True))

        # Fonts with different names may still be identical, and this last
        # phase also folds fonts that have no character in common.
        logger.debug("Merging fonts ignoring names")
        return merge_font_groups(named_groups, require_common=False)


__all__ = ["FontMerger", "merge_font_groups", "merge_pass"]
