"""Centralized error mapping for pygit2 exceptions."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager

import pygit2

from prblame.git.errors import GitError


class ErrorMapper:
    """Maps pygit2 exceptions to domain errors."""

    @staticmethod
    @contextmanager
    def guard(
        operation: str,
        *,
        factory: Callable[[str], GitError] | None = None,
    ) -> Iterator[None]:
        """Context manager for consistent exception translation.

        ``factory`` receives the backend message and builds the domain error;
        without it a plain ``GitError`` naming the operation is raised.
        """
        try:
            yield
        except (pygit2.GitError, KeyError, ValueError) as e:
            if factory is not None:
                raise factory(str(e)) from e
            raise GitError(f"{operation} failed: {e}") from e


def git_operation(
    operation: str, *, factory: Callable[[str], GitError] | None = None
) -> AbstractContextManager[None]:
    """Shorthand for ``ErrorMapper.guard``."""
    return ErrorMapper.guard(operation, factory=factory)
