"""Git operations via pygit2 - returns immutable data models."""

from __future__ import annotations

from pathlib import Path

import pygit2
import structlog

from prblame.git._internal.access import RepoAccess, discover_repo_path
from prblame.git.models import BlameResult, FileDelta

logger = structlog.get_logger()


class GitOps:
    """Thin wrapper around pygit2.Repository with cleaner error handling.

    One instance per thread: pygit2 repository handles are not shared.
    """

    def __init__(self, repo_path: Path | str) -> None:
        self._access = RepoAccess(repo_path)

    @classmethod
    def discover(cls, start: Path | str = ".") -> GitOps:
        """Open the repository enclosing ``start``."""
        return cls(discover_repo_path(start))

    @property
    def repo(self) -> pygit2.Repository:
        """
        Direct access to underlying pygit2 Repository.

        Escape hatch for tests and advanced consumers. Bypasses error mapping
        and model conversion.
        """
        return self._access.repo

    @property
    def path(self) -> Path:
        """Repository root path (git dir for bare repositories)."""
        return self._access.path

    @property
    def git_dir(self) -> Path:
        """Path that reopens this repository in another thread."""
        return self._access.git_dir

    # =========================================================================
    # Read Operations
    # =========================================================================

    def resolve_revision(self, name: str) -> str:
        """Resolve a revision expression to a commit id."""
        return str(self._access.resolve_commit(name).id)

    def merge_base(self, a: str, b: str) -> str | None:
        """Nearest common ancestor of two commits, or None if unrelated."""
        oid = self._access.merge_base(a, b)
        return str(oid) if oid is not None else None

    def diff_trees(self, base: str, target: str, context_lines: int) -> tuple[FileDelta, ...]:
        """Per-file deltas between two commits' trees, in diff order."""
        diff = self._access.diff_trees(base, target, context_lines)
        deltas: list[FileDelta] = []
        for idx in range(len(diff)):
            try:
                patch = diff[idx]
            except pygit2.GitError as e:
                logger.warning("patch_failed", index=idx, error=str(e))
                continue
            if patch is None:
                continue
            deltas.append(FileDelta.from_pygit2(idx, patch))
        return tuple(deltas)

    def blame(
        self,
        path: str,
        *,
        newest_commit: str,
        oldest_commit: str | None = None,
        min_line: int | None = None,
        max_line: int | None = None,
    ) -> BlameResult:
        """Mailmap-normalized blame of ``path`` as of ``newest_commit``."""
        raw = self._access.blame(
            path,
            newest_commit=newest_commit,
            oldest_commit=oldest_commit,
            min_line=min_line,
            max_line=max_line,
        )
        return BlameResult.from_pygit2(path, raw)
