"""Scoring, aggregation and comparison of benchmark results."""

from .aggregate import average_score, build_snapshot
from .comparison import (
    ComparisonResult,
    ComparisonRow,
    JoinedComparison,
    SortDirection,
    SortKey,
    compare_snapshots,
    join_snapshots,
)
from .scoring import score, score_result, score_results
from .selection import find_commit, parse_share_query, share_query, short_sha

__all__ = [
    "ComparisonResult",
    "ComparisonRow",
    "JoinedComparison",
    "SortDirection",
    "SortKey",
    "average_score",
    "build_snapshot",
    "compare_snapshots",
    "find_commit",
    "join_snapshots",
    "parse_share_query",
    "score",
    "score_result",
    "score_results",
    "share_query",
    "short_sha",
]
