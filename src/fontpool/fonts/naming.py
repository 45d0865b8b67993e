"""Unique naming of font groups."""

from __future__ import annotations

from collections.abc import Collection, Sequence

from slugify import slugify

from fontpool.fonts.group import FontGroup


def font_name_slug(name: str) -> str:
    """Lowercase *name*, joining words with hyphens.

    Accents are transliterated and runs of other characters outside ASCII
    letters and digits become one hyphen, so the slug is a valid file name.
    """
    return slugify(name)


def unique_name(base: str, assigned: Collection[str]) -> str:
    """Suffix *base* with ``-2``, ``-3``... until it is not in *assigned*."""
    if base not in assigned:
        return base
    suffix = 2
    while f"{base}-{suffix}" in assigned:
        suffix += 1
    return f"{base}-{suffix}"


class FontNamer:
    """Give every font group a name no other group uses.

    Groups are named after their index, or after a slug of their source name
    when ``keep_font_names`` is set.
    """

    def __init__(self, *, keep_font_names: bool = False) -> None:
        self.keep_font_names = keep_font_names

    def name_for(self, group: FontGroup, index: int, assigned: Collection[str]) -> str:
        if not self.keep_font_names:
            return str(index)
        base = font_name_slug(group.name) or str(index)
        return unique_name(base, assigned)

    def assign(self, groups: Sequence[FontGroup]) -> list[str]:
        """Rename *groups* in place and return the assigned names in order."""
        assigned: set[str] = set()
        names: list[str] = []
        for index, group in enumerate(groups):
            name = self.name_for(group, index, assigned)
            group.name = name
            assigned.add(name)
            names.append(name)
        return names


__all__ = ["FontNamer", "font_name_slug", "unique_name"]
