"""Stop-boundary ancestry check with a per-session memo."""

from __future__ import annotations

from collections.abc import Callable

import structlog

logger = structlog.get_logger()

MergeBaseFn = Callable[[str, str], "str | None"]


class BoundaryChecker:
    """Decides whether a blamed commit falls inside the stop boundary window.

    A line is attributed only if its commit strictly descends from the
    boundary. The boundary commit itself is excluded, and so is any commit
    the boundary is not an ancestor of.

    Results are memoized per ``(boundary, commit)``. A checker belongs to one
    worker session and is never shared between threads.
    """

    def __init__(self, merge_base: MergeBaseFn, boundary: str) -> None:
        self._merge_base = merge_base
        self._boundary = boundary
        self._cache: dict[tuple[str, str], bool] = {}

    @property
    def boundary(self) -> str:
        return self._boundary

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def includes(self, commit_id: str) -> bool:
        if commit_id == self._boundary:
            return False
        key = (self._boundary, commit_id)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        result = self._merge_base(self._boundary, commit_id) == self._boundary
        self._cache[key] = result
        if not result:
            logger.debug("commit_outside_boundary", commit=commit_id, boundary=self._boundary)
        return result
