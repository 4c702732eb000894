"""Attribute the old-side lines of one file delta to their last authors."""

from __future__ import annotations

from collections import Counter

import structlog

from prblame.attribution.boundary import BoundaryChecker
from prblame.git import AuthorIdentity, FileDelta, GitOps
from prblame.git.errors import BlameError

logger = structlog.get_logger()


def _log_processing(delta: FileDelta) -> None:
    old_path, new_path = delta.old_file.path, delta.new_file.path
    if new_path is None or old_path == new_path:
        logger.info("processing", path=old_path)
    else:
        logger.info("processing", path=old_path, renamed_to=new_path)


def attribute_delta(
    ops: GitOps,
    delta: FileDelta,
    *,
    merge_base: str,
    boundary: BoundaryChecker | None = None,
) -> Counter[AuthorIdentity]:
    """Count attributed lines per author for one eligible delta.

    Issues a single blame over the span of all hunks, as of ``merge_base``
    and no older than the boundary when one is set. Blame failures are not
    fatal: the file contributes nothing, unless the backend refused an author
    signature, in which case its hunk lines go to the unknown author.
    """
    counts: Counter[AuthorIdentity] = Counter()
    span = delta.old_line_span()
    old_path = delta.old_file.path
    if span is None or old_path is None:
        logger.debug("no_hunks", path=delta.display_path)
        return counts

    _log_processing(delta)
    min_line, max_line = span
    try:
        blame = ops.blame(
            old_path,
            newest_commit=merge_base,
            oldest_commit=boundary.boundary if boundary is not None else None,
            min_line=min_line,
            max_line=max_line,
        )
    except BlameError as e:
        if not e.is_bad_signature:
            logger.debug("blame_failed", path=old_path, error=e.reason)
            return counts
        # The backend rejects the whole file, so no line keeps its author.
        unattributed = sum(hunk.old_lines for hunk in delta.hunks)
        logger.warning(
            "bad_signature",
            path=old_path,
            lines=unattributed,
            error=e.reason,
            hint="blame refused an author signature; whole file counted as unknown",
        )
        if unattributed:
            counts[AuthorIdentity.unknown()] = unattributed
        return counts

    bad_signatures = 0
    for hunk in delta.hunks:
        for line in hunk.old_line_numbers():
            entry = blame.line_author(line)
            if entry is None:
                logger.debug("line_not_blamed", path=old_path, line=line, commit=merge_base)
                continue
            if boundary is not None and not boundary.includes(entry.commit_id):
                continue
            author = entry.author
            if author is None or author.is_unknown:
                bad_signatures += 1
                author = AuthorIdentity.unknown()
            counts[author] += 1

    if bad_signatures:
        logger.warning(
            "bad_signature",
            path=old_path,
            lines=bad_signatures,
            hint="author without a name or email; counted as unknown",
        )
    return counts
