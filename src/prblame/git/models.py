"""Immutable data models for git operations.

Models are built from pygit2 objects in the thread that owns the repository
handle; once built they hold only plain values and can be read from any
thread.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Literal

import pygit2

from prblame.git._internal.constants import (
    BLOB_MODES,
    DELTA_ADDED,
    DELTA_COPIED,
    DELTA_DELETED,
    DELTA_MODIFIED,
    DELTA_RENAMED,
    FLAG_BINARY,
    FLAG_EXISTS,
)

DeltaStatus = Literal["added", "deleted", "modified", "renamed", "copied", "unknown"]

_DELTA_STATUS_MAP: dict[int, DeltaStatus] = {
    DELTA_ADDED: "added",
    DELTA_DELETED: "deleted",
    DELTA_MODIFIED: "modified",
    DELTA_RENAMED: "renamed",
    DELTA_COPIED: "copied",
}

UNKNOWN_PLACEHOLDER = "?"


def _decode(raw: bytes | None) -> str | None:
    if not raw:
        return None
    return raw.decode("utf-8", errors="replace")


@dataclass(frozen=True, slots=True)
class AuthorIdentity:
    """Aggregation key for a contributor.

    Two identities are the same contributor iff name and email both compare
    equal, ``None`` included.
    """

    name: str | None
    email: str | None

    @classmethod
    def unknown(cls) -> AuthorIdentity:
        return cls(None, None)

    @property
    def is_unknown(self) -> bool:
        return self.name is None and self.email is None

    @property
    def display_name(self) -> str:
        return self.name if self.name is not None else UNKNOWN_PLACEHOLDER

    @property
    def display_email(self) -> str:
        return self.email if self.email is not None else UNKNOWN_PLACEHOLDER

    @classmethod
    def from_pygit2(cls, sig: pygit2.Signature | None) -> AuthorIdentity | None:
        """Convert a blame signature; None when libgit2 handed back no signature."""
        if sig is None:
            return None
        return cls(_decode(sig.raw_name), _decode(sig.raw_email))


@dataclass(frozen=True, slots=True)
class FileSide:
    """One side (old or new) of a file delta."""

    path: str | None
    exists: bool
    mode: int
    is_binary: bool
    size: int

    @property
    def is_blob(self) -> bool:
        """Regular or executable file (not a symlink, tree or submodule)."""
        return self.mode in BLOB_MODES

    @classmethod
    def from_pygit2(cls, f: pygit2.DiffFile) -> FileSide:
        flags = int(f.flags)
        return cls(
            path=f.path,
            exists=bool(flags & FLAG_EXISTS),
            mode=int(f.mode),
            is_binary=bool(flags & FLAG_BINARY),
            size=int(f.size),
        )


@dataclass(frozen=True, slots=True)
class Hunk:
    """Contiguous old/new line ranges, context lines included."""

    old_start: int
    old_lines: int
    new_start: int
    new_lines: int

    @property
    def old_end(self) -> int:
        """Exclusive end of the old-side range."""
        return self.old_start + self.old_lines

    def old_line_numbers(self) -> range:
        return range(self.old_start, self.old_end)

    @classmethod
    def from_pygit2(cls, hunk: pygit2.DiffHunk) -> Hunk:
        return cls(hunk.old_start, hunk.old_lines, hunk.new_start, hunk.new_lines)


@dataclass(frozen=True, slots=True)
class FileDelta:
    """Single file in a tree-to-tree diff, with its hunks."""

    index: int
    status: DeltaStatus
    old_file: FileSide
    new_file: FileSide
    hunks: tuple[Hunk, ...]

    @property
    def display_path(self) -> str:
        return self.old_file.path or self.new_file.path or UNKNOWN_PLACEHOLDER

    def old_line_span(self) -> tuple[int, int] | None:
        """Inclusive ``(min_line, max_line)`` over all old-side hunk lines.

        None when no hunk covers an old-side line (pure insertions).
        """
        covering = [h for h in self.hunks if h.old_lines > 0]
        if not covering:
            return None
        return (
            min(h.old_start for h in covering),
            max(h.old_end for h in covering) - 1,
        )

    @classmethod
    def from_pygit2(cls, index: int, patch: pygit2.Patch) -> FileDelta:
        delta = patch.delta
        return cls(
            index=index,
            status=_DELTA_STATUS_MAP.get(int(delta.status), "unknown"),
            old_file=FileSide.from_pygit2(delta.old_file),
            new_file=FileSide.from_pygit2(delta.new_file),
            hunks=tuple(Hunk.from_pygit2(h) for h in patch.hunks),
        )


@dataclass(frozen=True, slots=True)
class BlameLine:
    """Attribution of one old-side line.

    ``author`` is None when the backend returned no usable signature.
    """

    line: int
    commit_id: str
    author: AuthorIdentity | None


@dataclass(frozen=True, slots=True)
class BlameHunk:
    """A hunk in blame output."""

    commit_id: str
    author: AuthorIdentity | None
    start_line: int
    line_count: int

    @property
    def end_line(self) -> int:
        return self.start_line + self.line_count


@dataclass(frozen=True, slots=True)
class BlameResult:
    """Git blame result, hunks ordered by start line."""

    path: str
    hunks: tuple[BlameHunk, ...]
    _starts: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.hunks, key=lambda h: h.start_line))
        object.__setattr__(self, "hunks", ordered)
        object.__setattr__(self, "_starts", tuple(h.start_line for h in ordered))

    def line_author(self, line: int) -> BlameLine | None:
        """Blame entry covering ``line``, or None when the line is not covered."""
        pos = bisect_right(self._starts, line) - 1
        if pos < 0:
            return None
        hunk = self.hunks[pos]
        if line >= hunk.end_line:
            return None
        return BlameLine(line, hunk.commit_id, hunk.author)

    @classmethod
    def from_pygit2(cls, path: str, blame: pygit2.Blame) -> BlameResult:
        return cls(
            path=path,
            hunks=tuple(
                BlameHunk(
                    commit_id=str(hunk.final_commit_id),
                    author=AuthorIdentity.from_pygit2(hunk.final_committer),
                    start_line=hunk.final_start_line_number,
                    line_count=hunk.lines_in_hunk,
                )
                for hunk in blame
            ),
        )
