"""Tests for git.models module.

Tests the immutable data models built from pygit2 objects.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from factories import BLOB, LINK, make_delta, side

from prblame.git.models import (
    UNKNOWN_PLACEHOLDER,
    AuthorIdentity,
    BlameHunk,
    BlameResult,
    Hunk,
)


class TestAuthorIdentity:
    """Tests for AuthorIdentity."""

    def test_equality_covers_both_fields(self) -> None:
        """Same name with different email is a different contributor."""
        assert AuthorIdentity("A", "a@x") == AuthorIdentity("A", "a@x")
        assert AuthorIdentity("A", "a@x") != AuthorIdentity("A", "b@x")
        assert AuthorIdentity(None, None) == AuthorIdentity.unknown()

    def test_hashable_as_counter_key(self) -> None:
        """Equal identities collapse to one dict key."""
        counts = {AuthorIdentity("A", "a@x"): 1}
        counts[AuthorIdentity("A", "a@x")] += 1
        assert counts == {AuthorIdentity("A", "a@x"): 2}

    def test_display_placeholders(self) -> None:
        """Missing fields render as the placeholder."""
        ident = AuthorIdentity(None, "a@x")
        assert ident.display_name == UNKNOWN_PLACEHOLDER
        assert ident.display_email == "a@x"
        assert not ident.is_unknown
        assert AuthorIdentity.unknown().is_unknown

    def test_from_pygit2_none_signature(self) -> None:
        """libgit2 hands back no signature for unparsable authors."""
        assert AuthorIdentity.from_pygit2(None) is None

    def test_from_pygit2_decodes_raw_bytes(self) -> None:
        """Raw bytes are decoded leniently; empty values become None."""
        sig = SimpleNamespace(raw_name="Zoë".encode(), raw_email=b"")
        assert AuthorIdentity.from_pygit2(sig) == AuthorIdentity("Zoë", None)  # type: ignore[arg-type]

    def test_from_pygit2_invalid_utf8(self) -> None:
        """Invalid UTF-8 does not raise."""
        sig = SimpleNamespace(raw_name=b"bad\xffname", raw_email=b"x@y")
        ident = AuthorIdentity.from_pygit2(sig)  # type: ignore[arg-type]
        assert ident is not None
        assert ident.name is not None and ident.name.startswith("bad")


class TestFileSide:
    """Tests for FileSide."""

    def test_blob_modes(self) -> None:
        assert side(mode=BLOB).is_blob
        assert not side(mode=LINK).is_blob


class TestHunk:
    """Tests for Hunk line ranges."""

    def test_old_line_numbers(self) -> None:
        """Old-side range includes context lines, end exclusive."""
        hunk = Hunk(old_start=4, old_lines=3, new_start=4, new_lines=5)
        assert hunk.old_end == 7
        assert list(hunk.old_line_numbers()) == [4, 5, 6]

    def test_pure_insertion_has_no_old_lines(self) -> None:
        assert list(Hunk(10, 0, 11, 2).old_line_numbers()) == []


class TestFileDelta:
    """Tests for FileDelta helpers."""

    def test_old_line_span_is_inclusive_bounding_range(self) -> None:
        """Span covers every hunk: first old line to last old line."""
        delta = make_delta(hunks=(Hunk(2, 3, 2, 3), Hunk(14, 3, 14, 3)))
        assert delta.old_line_span() == (2, 16)

    def test_old_line_span_ignores_insertions(self) -> None:
        delta = make_delta(hunks=(Hunk(0, 0, 1, 2), Hunk(5, 1, 7, 1)))
        assert delta.old_line_span() == (5, 5)

    def test_old_line_span_none_without_old_lines(self) -> None:
        assert make_delta(hunks=()).old_line_span() is None
        assert make_delta(hunks=(Hunk(3, 0, 4, 1),)).old_line_span() is None

    def test_display_path_prefers_old_side(self) -> None:
        delta = make_delta(old=side("old.txt"), new=side("new.txt"))
        assert delta.display_path == "old.txt"

    def test_display_path_falls_back_to_new_side(self) -> None:
        delta = make_delta(old=side(None, exists=False), new=side("added.txt"))
        assert delta.display_path == "added.txt"


class TestBlameResult:
    """Tests for BlameResult.line_author lookup."""

    @pytest.fixture
    def result(self) -> BlameResult:
        alice = AuthorIdentity("Alice", "alice@x")
        bob = AuthorIdentity("Bob", "bob@x")
        # Deliberately unordered: construction sorts by start line
        return BlameResult(
            path="f.txt",
            hunks=(
                BlameHunk(commit_id="b" * 40, author=bob, start_line=4, line_count=2),
                BlameHunk(commit_id="a" * 40, author=alice, start_line=1, line_count=3),
            ),
        )

    def test_lookup_inside_hunks(self, result: BlameResult) -> None:
        first = result.line_author(1)
        last = result.line_author(5)
        assert first is not None and first.author == AuthorIdentity("Alice", "alice@x")
        assert last is not None and last.author == AuthorIdentity("Bob", "bob@x")
        assert last.commit_id == "b" * 40
        assert last.line == 5

    def test_hunk_boundaries(self, result: BlameResult) -> None:
        third = result.line_author(3)
        fourth = result.line_author(4)
        assert third is not None and third.commit_id == "a" * 40
        assert fourth is not None and fourth.commit_id == "b" * 40

    def test_uncovered_lines(self, result: BlameResult) -> None:
        """Lines outside every hunk are not covered."""
        assert result.line_author(0) is None
        assert result.line_author(6) is None

    def test_gap_between_hunks(self) -> None:
        result = BlameResult(
            path="f.txt",
            hunks=(
                BlameHunk("a" * 40, None, start_line=1, line_count=1),
                BlameHunk("b" * 40, None, start_line=5, line_count=1),
            ),
        )
        assert result.line_author(3) is None
        hit = result.line_author(5)
        assert hit is not None and hit.author is None
