"""Per-delta eligibility policy for blame."""

from __future__ import annotations

from enum import Enum

import structlog

from prblame.git import FileDelta

logger = structlog.get_logger()


class FileDecision(Enum):
    """Outcome of filtering one delta."""

    PROCESS = "process"
    SKIP_CREATED = "created"
    SKIP_DELETED = "deleted"
    SKIP_NOT_BLOB = "not_blob"
    SKIP_BINARY = "binary"
    SKIP_TOO_LARGE = "too_large"

    @property
    def is_skip(self) -> bool:
        return self is not FileDecision.PROCESS


def classify_delta(delta: FileDelta, max_file_size: int | None = None) -> FileDecision:
    """Decide whether ``delta`` is blamed.

    Checks run in priority order so the most informative reason wins: a
    deleted binary file is reported as deleted, not binary. Wholesale
    deletions are skipped on purpose; their lines are not attributed.
    """
    old, new = delta.old_file, delta.new_file
    if not old.exists:
        return FileDecision.SKIP_CREATED
    if not new.exists:
        return FileDecision.SKIP_DELETED
    if not old.is_blob:
        return FileDecision.SKIP_NOT_BLOB
    if old.is_binary or new.is_binary:
        return FileDecision.SKIP_BINARY
    if max_file_size is not None and max(old.size, new.size) > max_file_size:
        return FileDecision.SKIP_TOO_LARGE
    return FileDecision.PROCESS


def log_skip(delta: FileDelta, decision: FileDecision) -> None:
    """Trace a skip decision at debug level."""
    logger.debug(
        "skipping_blame",
        path=delta.new_file.path if decision is FileDecision.SKIP_CREATED else delta.display_path,
        reason=decision.value,
        size=max(delta.old_file.size, delta.new_file.size),
    )
