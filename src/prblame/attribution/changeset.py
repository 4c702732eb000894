"""Build the ordered set of file deltas between the merge base and compare."""

from __future__ import annotations

import structlog

from prblame.git import FileDelta, GitOps

logger = structlog.get_logger()


def build_change_set(
    ops: GitOps,
    merge_base: str,
    compare: str,
    context_lines: int,
) -> tuple[FileDelta, ...]:
    """Diff ``merge_base``'s tree against ``compare``'s with rename detection.

    Deltas are fully materialized here, so the result can be shared read-only
    across worker threads.

    Raises:
        DiffComputationError: The backend could not compute the diff.
    """
    deltas = ops.diff_trees(merge_base, compare, context_lines)
    logger.info(
        "change_set_built",
        merge_base=merge_base,
        compare=compare,
        context_lines=context_lines,
        files=len(deltas),
        hunks=sum(len(d.hunks) for d in deltas),
    )
    return deltas
