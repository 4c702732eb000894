"""Internal components for git operations - not part of public API."""

from prblame.git._internal.access import RepoAccess, discover_repo_path
from prblame.git._internal.errors import ErrorMapper, git_operation

__all__ = [
    "ErrorMapper",
    "RepoAccess",
    "discover_repo_path",
    "git_operation",
]
