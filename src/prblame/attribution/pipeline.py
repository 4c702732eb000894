"""End-to-end change attribution for one (base, compare) pair.

Flow:
1. Resolve base, compare and the optional stop boundary; compute the merge base
2. Diff the merge base against compare (rename detection, N context lines)
3. Classify every delta in the calling thread; only eligible ones fan out
4. Blame each eligible delta on a per-thread repository session
5. Merge partial counts and sort
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from prblame.attribution.aggregator import (
    AttributionMap,
    SessionPool,
    WorkerSession,
    aggregate,
    resolve_worker_count,
)
from prblame.attribution.blame import attribute_delta
from prblame.attribution.boundary import BoundaryChecker
from prblame.attribution.changeset import build_change_set
from prblame.attribution.filters import FileDecision, classify_delta, log_skip
from prblame.attribution.report import AttributionEntry, sort_attribution
from prblame.attribution.resolver import ResolvedRevisions, resolve_revisions
from prblame.config.models import AttributionConfig
from prblame.core.progress import progress_bar
from prblame.git import FileDelta, GitOps

logger = structlog.get_logger()


@dataclass
class AttributionRun:
    """Everything a caller may want to report about one run."""

    revisions: ResolvedRevisions
    totals: AttributionMap
    entries: list[AttributionEntry]
    files_total: int = 0
    files_blamed: int = 0
    skipped: Counter[FileDecision] = field(default_factory=Counter)
    failed: list[str] = field(default_factory=list)


def select_eligible(
    deltas: tuple[FileDelta, ...],
    max_file_size: int | None,
) -> tuple[list[FileDelta], Counter[FileDecision]]:
    """Split deltas into those to blame and per-reason skip counts."""
    eligible: list[FileDelta] = []
    skipped: Counter[FileDecision] = Counter()
    for delta in deltas:
        decision = classify_delta(delta, max_file_size)
        if decision.is_skip:
            log_skip(delta, decision)
            skipped[decision] += 1
        else:
            eligible.append(delta)
    return eligible, skipped


def attribute_change(
    base: str,
    compare: str,
    *,
    repo: Path | str = ".",
    config: AttributionConfig | None = None,
    show_progress: bool = True,
) -> AttributionRun:
    """Attribute the lines touched between ``base`` and ``compare``.

    Raises:
        NotARepositoryError: No repository encloses ``repo``.
        RevisionNotFoundError: A revision name does not resolve.
        NoCommonAncestorError: ``base`` and ``compare`` are unrelated.
        DiffComputationError: The change set could not be computed.
        WorkerPoolError: The worker pool could not be started.
    """
    config = config or AttributionConfig()
    ops = GitOps.discover(repo)
    logger.debug("repository_opened", path=str(ops.path))

    revisions = resolve_revisions(ops, base, compare, config.stop_at)
    deltas = build_change_set(ops, revisions.merge_base, revisions.compare, config.context_lines)
    eligible, skipped = select_eligible(deltas, config.max_file_size)

    git_dir = ops.git_dir
    stop_at = revisions.stop_at

    def open_session() -> WorkerSession:
        session_ops = GitOps(git_dir)
        boundary = BoundaryChecker(session_ops.merge_base, stop_at) if stop_at else None
        return WorkerSession(ops=session_ops, boundary=boundary)

    sessions: SessionPool[WorkerSession] = SessionPool(open_session)

    def unit(delta: FileDelta) -> AttributionMap:
        session = sessions.get()
        return attribute_delta(
            session.ops,
            delta,
            merge_base=revisions.merge_base,
            boundary=session.boundary,
        )

    logger.info(
        "attribution_started",
        files=len(deltas),
        eligible=len(eligible),
        workers=resolve_worker_count(config.max_concurrency),
    )
    with progress_bar(len(eligible), desc="Blaming", enabled=show_progress) as advance:
        result = aggregate(
            eligible,
            unit,
            max_workers=config.max_concurrency,
            on_progress=advance,
        )

    entries = sort_attribution(result.totals)
    logger.info(
        "attribution_done",
        authors=len(entries),
        lines=sum(result.totals.values()),
        sessions=sessions.opened,
        failed=len(result.failed),
    )
    return AttributionRun(
        revisions=revisions,
        totals=result.totals,
        entries=entries,
        files_total=len(deltas),
        files_blamed=len(eligible),
        skipped=skipped,
        failed=result.failed,
    )
