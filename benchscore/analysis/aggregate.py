"""Commit aggregation: merge commit metadata with scored benchmarks."""

import logging
from collections.abc import Iterable

import numpy as np

from ..storage.models import BenchmarkResult, CommitMetadata, CommitSnapshot

logger = logging.getLogger(__name__)


def average_score(benchmarks: Iterable[BenchmarkResult]) -> float:
    """Arithmetic mean of benchmark scores, 0.0 when there are none."""
    scores = np.array([b.score for b in benchmarks], dtype=np.float64)
    if scores.size == 0:
        return 0.0
    return float(np.mean(scores))


def build_snapshot(
    metadata: CommitMetadata,
    benchmarks: Iterable[BenchmarkResult],
) -> CommitSnapshot:
    """Combine metadata and results into an immutable commit snapshot.

    Args:
        metadata: Commit details (real or fallback)
        benchmarks: Scored results for the commit, any order

    Returns:
        CommitSnapshot with benchmarks sorted by case id
    """
    ordered = tuple(sorted(benchmarks, key=lambda b: b.id))
    avg = average_score(ordered)

    logger.debug(f"Commit {metadata.sha[:7]}: {len(ordered)} benchmarks, average {avg:.2f}")

    return CommitSnapshot(
        **metadata.model_dump(),
        average_score=avg,
        benchmarks=ordered,
    )
