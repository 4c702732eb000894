"""Fan per-file attribution out over a worker pool and reduce the partials.

Design:
- Each worker thread lazily opens its own WorkerSession (repository handle
  plus boundary memo) and reuses it for every unit it runs
- Units return owned partial counters; nothing is shared while they run
- The collecting thread merges partials as they complete, in any order
- A failing unit is logged and contributes nothing
"""

from __future__ import annotations

import os
import threading
from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

import structlog

from prblame.attribution.boundary import BoundaryChecker
from prblame.core.errors import WorkerPoolError
from prblame.git import AuthorIdentity, FileDelta, GitOps

logger = structlog.get_logger()

AttributionMap = Counter[AuthorIdentity]


@dataclass
class WorkerSession:
    """Backend state owned by exactly one worker thread."""

    ops: GitOps
    boundary: BoundaryChecker | None = None


class SessionPool[S]:
    """Hands every thread its own lazily created session."""

    def __init__(self, factory: Callable[[], S]) -> None:
        self._factory = factory
        self._local = threading.local()
        self._lock = threading.Lock()
        self._opened = 0

    def get(self) -> S:
        session: S | None = getattr(self._local, "session", None)
        if session is None:
            session = self._factory()
            self._local.session = session
            with self._lock:
                self._opened += 1
        return session

    @property
    def opened(self) -> int:
        """Number of sessions created so far (one per thread that ran a unit)."""
        with self._lock:
            return self._opened


@dataclass
class AggregationResult:
    """Reduced totals plus per-unit bookkeeping."""

    totals: AttributionMap = field(default_factory=Counter)
    completed: int = 0
    failed: list[str] = field(default_factory=list)


def resolve_worker_count(max_concurrency: int) -> int:
    """0 means one worker per available CPU."""
    if max_concurrency > 0:
        return max_concurrency
    return os.cpu_count() or 1


def reduce_into(total: AttributionMap, partial: AttributionMap) -> None:
    """Add ``partial`` into ``total`` in place. Absent authors start at zero."""
    for author, lines in partial.items():
        total[author] += lines


def merge_partials(partials: Iterable[AttributionMap]) -> AttributionMap:
    """Sum partial counters per author. Order of partials does not matter."""
    total: AttributionMap = Counter()
    for partial in partials:
        reduce_into(total, partial)
    return total


def aggregate(
    deltas: Sequence[FileDelta],
    unit: Callable[[FileDelta], AttributionMap],
    *,
    max_workers: int,
    on_progress: Callable[[], None] | None = None,
) -> AggregationResult:
    """Run ``unit`` for every delta concurrently and merge the results.

    Raises:
        WorkerPoolError: The pool could not be created or could not start
            its threads.
    """
    result = AggregationResult()
    if not deltas:
        return result

    workers = min(resolve_worker_count(max_workers), len(deltas))
    try:
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="prblame-blame")
    except (ValueError, RuntimeError) as e:
        raise WorkerPoolError.construction_failed(workers, str(e)) from e

    with executor:
        try:
            futures: dict[Future[AttributionMap], FileDelta] = {
                executor.submit(unit, delta): delta for delta in deltas
            }
        except RuntimeError as e:
            raise WorkerPoolError.construction_failed(workers, str(e)) from e
        logger.debug("units_submitted", units=len(futures), workers=workers)

        for future in as_completed(futures):
            delta = futures[future]
            try:
                partial = future.result()
            except Exception as e:
                logger.warning(
                    "unit_failed",
                    path=delta.display_path,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                result.failed.append(delta.display_path)
                partial = Counter()
            reduce_into(result.totals, partial)
            result.completed += 1
            if on_progress is not None:
                on_progress()

    return result
