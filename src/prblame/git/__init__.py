"""Git operations module."""

from prblame.git.errors import (
    BlameError,
    DiffComputationError,
    GitError,
    NoCommonAncestorError,
    NotARepositoryError,
    RevisionNotFoundError,
)
from prblame.git.models import (
    AuthorIdentity,
    BlameHunk,
    BlameLine,
    BlameResult,
    FileDelta,
    FileSide,
    Hunk,
)
from prblame.git.ops import GitOps

__all__ = [
    # Main class
    "GitOps",
    # Models
    "AuthorIdentity",
    "BlameHunk",
    "BlameLine",
    "BlameResult",
    "FileDelta",
    "FileSide",
    "Hunk",
    # Errors
    "GitError",
    "NotARepositoryError",
    "RevisionNotFoundError",
    "NoCommonAncestorError",
    "DiffComputationError",
    "BlameError",
]
