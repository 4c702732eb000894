"""Resolve user-supplied revision names into the fixed points of a run."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from prblame.git import GitOps
from prblame.git.errors import NoCommonAncestorError

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class ResolvedRevisions:
    """Commit ids fixed for the whole run."""

    base: str
    compare: str
    merge_base: str
    stop_at: str | None = None


def resolve_stop_boundary(ops: GitOps, merge_base: str, stop_at: str) -> str | None:
    """Normalize a resolved stop boundary against the merge base.

    The boundary must be an ancestor of ``merge_base``. Otherwise their own
    merge base is used instead, with a warning. Unrelated histories drop the
    boundary entirely. Never raises.
    """
    ancestor = ops.merge_base(merge_base, stop_at)
    if ancestor is None:
        logger.warning(
            "stop_boundary_unrelated",
            stop_at=stop_at,
            merge_base=merge_base,
            action="ignoring stop boundary",
        )
        return None
    if ancestor != stop_at:
        logger.warning(
            "stop_boundary_not_ancestor",
            stop_at=stop_at,
            merge_base=merge_base,
            substituted=ancestor,
        )
    return ancestor


def resolve_revisions(
    ops: GitOps,
    base: str,
    compare: str,
    stop_at: str | None = None,
) -> ResolvedRevisions:
    """Resolve base/compare/stop names and compute the merge base.

    Raises:
        RevisionNotFoundError: A name does not resolve to a commit.
        NoCommonAncestorError: ``base`` and ``compare`` share no history.
    """
    base_id = ops.resolve_revision(base)
    logger.info("resolved_base", base=base, commit=base_id)
    compare_id = ops.resolve_revision(compare)
    logger.info("resolved_compare", compare=compare, commit=compare_id)

    stop_id: str | None = None
    if stop_at is not None:
        stop_id = ops.resolve_revision(stop_at)
        logger.info("resolved_stop_at", stop_at=stop_at, commit=stop_id)

    merge_base = ops.merge_base(base_id, compare_id)
    if merge_base is None:
        raise NoCommonAncestorError(base, compare)
    logger.info("merge_base", commit=merge_base)

    if stop_id is not None:
        stop_id = resolve_stop_boundary(ops, merge_base, stop_id)

    return ResolvedRevisions(
        base=base_id,
        compare=compare_id,
        merge_base=merge_base,
        stop_at=stop_id,
    )
