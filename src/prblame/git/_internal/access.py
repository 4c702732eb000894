"""Repository access layer - owns pygit2.Repository and exposes computed facts."""

from __future__ import annotations

from pathlib import Path

import pygit2

from prblame.git._internal.constants import (
    BLAME_USE_MAILMAP,
    DIFF_FIND_RENAMES,
    DIFF_IGNORE_SUBMODULES,
)
from prblame.git._internal.errors import git_operation
from prblame.git.errors import (
    BlameError,
    DiffComputationError,
    NotARepositoryError,
    RevisionNotFoundError,
)


def discover_repo_path(start: Path | str) -> Path:
    """Walk up from ``start`` to the enclosing repository's git dir."""
    found = pygit2.discover_repository(str(start))
    if found is None:
        raise NotARepositoryError(str(start))
    return Path(found)


class RepoAccess:
    """Owns pygit2.Repository and provides normalized access to repo state.

    A RepoAccess is not safe to share between threads; open one per worker.
    """

    def __init__(self, repo_path: Path | str) -> None:
        self._path = Path(repo_path)
        try:
            self._repo = pygit2.Repository(str(self._path))
        except pygit2.GitError as e:
            raise NotARepositoryError(str(self._path)) from e

    @property
    def repo(self) -> pygit2.Repository:
        return self._repo

    @property
    def path(self) -> Path:
        return Path(self._repo.workdir) if self._repo.workdir else Path(self._repo.path)

    @property
    def git_dir(self) -> Path:
        return Path(self._repo.path)

    # =========================================================================
    # Resolution Helpers
    # =========================================================================

    def resolve_commit(self, name: str) -> pygit2.Commit:
        """Resolve a rev-parse expression and peel it to a commit."""
        with git_operation("resolve", factory=lambda msg: RevisionNotFoundError(name, msg)):
            obj = self._repo.revparse_single(name)
            commit = obj.peel(pygit2.Commit)
        if not isinstance(commit, pygit2.Commit):
            raise RevisionNotFoundError(name, "not a commit")
        return commit

    def commit_tree(self, oid: pygit2.Oid | str) -> pygit2.Tree:
        """Tree of a commit. Raises KeyError for unknown ids."""
        return self._repo[oid].peel(pygit2.Tree)  # type: ignore[no-any-return]

    # =========================================================================
    # Merge Base
    # =========================================================================

    def merge_base(self, oid1: pygit2.Oid | str, oid2: pygit2.Oid | str) -> pygit2.Oid | None:
        """Find merge base of two commits. Returns None if unrelated.

        pygit2 reports unrelated histories as None; any other backend failure
        is raised as a GitError.
        """
        with git_operation("merge_base"):
            return self._repo.merge_base(oid1, oid2)

    # =========================================================================
    # Low-level pygit2 Operations (all pygit2 quirks live here)
    # =========================================================================

    def diff_trees(
        self, base: pygit2.Oid | str, target: pygit2.Oid | str, context_lines: int
    ) -> pygit2.Diff:
        """Tree-to-tree diff with rename detection always on."""
        with git_operation(
            "diff",
            factory=lambda msg: DiffComputationError(str(base), str(target), msg),
        ):
            diff = self.commit_tree(base).diff_to_tree(
                self.commit_tree(target),
                flags=DIFF_IGNORE_SUBMODULES,
                context_lines=context_lines,
            )
            diff.find_similar(flags=DIFF_FIND_RENAMES)
        return diff

    def blame(
        self,
        path: str,
        *,
        newest_commit: pygit2.Oid | str,
        oldest_commit: pygit2.Oid | str | None = None,
        min_line: int | None = None,
        max_line: int | None = None,
    ) -> pygit2.Blame:
        kwargs: dict[str, object] = {
            "flags": BLAME_USE_MAILMAP,
            "newest_commit": newest_commit,
        }
        if oldest_commit is not None:
            kwargs["oldest_commit"] = oldest_commit
        if min_line is not None:
            kwargs["min_line"] = min_line
        if max_line is not None:
            kwargs["max_line"] = max_line
        with git_operation("blame", factory=lambda msg: BlameError(path, msg)):
            return self._repo.blame(path, **kwargs)  # type: ignore[arg-type]
