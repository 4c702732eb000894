"""Order and render the final attribution."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from prblame.git import AuthorIdentity


@dataclass(frozen=True, slots=True)
class AttributionEntry:
    """One output row: an author and the lines attributed to them."""

    author: AuthorIdentity
    lines: int

    def to_dict(self) -> dict[str, object]:
        return {"lines": self.lines, "name": self.author.name, "email": self.author.email}


def _sort_key(item: tuple[AuthorIdentity, int]) -> tuple[int, str, str]:
    author, lines = item
    return (-lines, author.name or "", author.email or "")


def sort_attribution(counts: Mapping[AuthorIdentity, int]) -> list[AttributionEntry]:
    """Sort by line count descending, then by name and email.

    Authors with a non-positive count are dropped.
    """
    return [
        AttributionEntry(author=author, lines=lines)
        for author, lines in sorted(counts.items(), key=_sort_key)
        if lines > 0
    ]


def format_text_line(author: AuthorIdentity, lines: int) -> str:
    """Render ``<count>\\t<name> <email>``, with ``?`` for missing fields."""
    return f"{lines}\t{author.display_name} <{author.display_email}>"


def format_text(entries: Iterable[AttributionEntry]) -> list[str]:
    return [format_text_line(e.author, e.lines) for e in entries]


def format_json(entries: Iterable[AttributionEntry], *, indent: int | None = 2) -> str:
    """Render entries as a JSON array; missing fields become ``null``."""
    return json.dumps([e.to_dict() for e in entries], indent=indent, ensure_ascii=False)
