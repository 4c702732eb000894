"""Git module error types."""


class GitError(Exception):
    """Base error for git operations."""

    pass


class NotARepositoryError(GitError):
    """Path is not inside a git repository."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class RevisionNotFoundError(GitError):
    """Revision name could not be resolved to a commit."""

    def __init__(self, name: str, reason: str | None = None) -> None:
        reason_part = f" ({reason})" if reason else ""
        super().__init__(f"Revision not found: {name}{reason_part}")
        self.name = name
        self.reason = reason


class NoCommonAncestorError(GitError):
    """Two revisions share no history."""

    def __init__(self, base: str, compare: str) -> None:
        super().__init__(f"No common ancestor between {base} and {compare}")
        self.base = base
        self.compare = compare


class DiffComputationError(GitError):
    """Tree-to-tree diff could not be computed."""

    def __init__(self, base: str, compare: str, reason: str) -> None:
        super().__init__(f"Error calculating diff {base}..{compare}: {reason}")
        self.base = base
        self.compare = compare
        self.reason = reason


class BlameError(GitError):
    """Blame of a single file failed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Error blaming {path}: {reason}")
        self.path = path
        self.reason = reason

    @property
    def is_bad_signature(self) -> bool:
        """The backend refused an author signature on the blamed history."""
        return "signature" in self.reason.lower()
