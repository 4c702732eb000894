"""Tests for per-delta blame eligibility."""

from __future__ import annotations

import pytest
from factories import LINK, make_delta, side

from prblame.attribution.filters import FileDecision, classify_delta


class TestClassifyDelta:
    """classify_delta() decisions."""

    def test_plain_modification(self) -> None:
        decision = classify_delta(make_delta())
        assert decision is FileDecision.PROCESS
        assert not decision.is_skip

    def test_created_file(self) -> None:
        delta = make_delta(old=side(exists=False, size=0), status="added")
        assert classify_delta(delta) is FileDecision.SKIP_CREATED

    def test_deleted_file(self) -> None:
        """Whole-file deletions are never blamed."""
        delta = make_delta(new=side(exists=False, size=0), status="deleted")
        assert classify_delta(delta) is FileDecision.SKIP_DELETED

    def test_symlink(self) -> None:
        assert classify_delta(make_delta(old=side(mode=LINK))) is FileDecision.SKIP_NOT_BLOB

    @pytest.mark.parametrize(("old_binary", "new_binary"), [(True, False), (False, True)])
    def test_binary_on_either_side(self, old_binary: bool, new_binary: bool) -> None:
        delta = make_delta(old=side(binary=old_binary), new=side(binary=new_binary))
        assert classify_delta(delta) is FileDecision.SKIP_BINARY

    def test_deleted_wins_over_binary(self) -> None:
        """Checks run in priority order."""
        delta = make_delta(old=side(binary=True), new=side(exists=False, size=0))
        assert classify_delta(delta) is FileDecision.SKIP_DELETED

    def test_size_limit_uses_larger_side(self) -> None:
        delta = make_delta(old=side(size=10), new=side(size=500))
        assert classify_delta(delta, max_file_size=100) is FileDecision.SKIP_TOO_LARGE
        assert classify_delta(delta, max_file_size=500) is FileDecision.PROCESS

    def test_no_limit_by_default(self) -> None:
        delta = make_delta(old=side(size=10**9), new=side(size=10**9))
        assert classify_delta(delta) is FileDecision.PROCESS

    def test_zero_limit_skips_everything_non_empty(self) -> None:
        assert classify_delta(make_delta(), max_file_size=0) is FileDecision.SKIP_TOO_LARGE
