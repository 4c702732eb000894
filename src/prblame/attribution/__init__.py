"""Change attribution: who last touched the lines a change modifies."""

from prblame.attribution.aggregator import (
    AggregationResult,
    AttributionMap,
    SessionPool,
    WorkerSession,
    aggregate,
    merge_partials,
)
from prblame.attribution.blame import attribute_delta
from prblame.attribution.boundary import BoundaryChecker
from prblame.attribution.changeset import build_change_set
from prblame.attribution.filters import FileDecision, classify_delta
from prblame.attribution.pipeline import AttributionRun, attribute_change
from prblame.attribution.report import (
    AttributionEntry,
    format_json,
    format_text,
    format_text_line,
    sort_attribution,
)
from prblame.attribution.resolver import ResolvedRevisions, resolve_revisions

__all__ = [
    # Entry point
    "attribute_change",
    "AttributionRun",
    # Stages
    "resolve_revisions",
    "ResolvedRevisions",
    "build_change_set",
    "classify_delta",
    "FileDecision",
    "attribute_delta",
    "BoundaryChecker",
    "aggregate",
    "merge_partials",
    "AggregationResult",
    "AttributionMap",
    "SessionPool",
    "WorkerSession",
    # Output
    "AttributionEntry",
    "sort_attribution",
    "format_text",
    "format_text_line",
    "format_json",
]
