"""Side-by-side comparison of two commit snapshots.

Comparison happens in two steps. ``join_snapshots`` pairs the benchmarks of
both commits by case name and computes the per-case deltas once;
``JoinedComparison.sorted`` orders the joined rows and can be called again
with a different key without repeating the join.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from ..storage.models import BenchmarkResult, CommitSnapshot

logger = logging.getLogger(__name__)


class SortKey(str, Enum):
    """Columns a comparison can be ordered by."""

    ID = "id"
    LEFT_TIME = "left_time"
    RIGHT_TIME = "right_time"
    ABSOLUTE_CHANGE = "absolute_change"
    RELATIVE_CHANGE = "relative_change"
    LEFT_SCORE = "left_score"
    RIGHT_SCORE = "right_score"


class SortDirection(str, Enum):
    """Sort order."""

    ASC = "asc"
    DESC = "desc"

    def reversed(self) -> "SortDirection":
        """Opposite direction."""
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class ComparisonRow(BaseModel):
    """One case present in both compared commits."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    best_time: float
    left_time: float
    right_time: float
    absolute_change: float = Field(description="right_time - left_time (s)")
    relative_change: float | None = Field(
        description="Change relative to left_time (%), None when left_time is zero",
    )
    left_score: float
    right_score: float

    @property
    def score_change(self) -> float:
        """Score difference (right - left)."""
        return self.right_score - self.left_score

    @property
    def has_relative_change(self) -> bool:
        """Check if the relative change is defined."""
        return self.relative_change is not None


class ComparisonResult(BaseModel):
    """Sorted comparison rows with the aggregate change."""

    model_config = ConfigDict(frozen=True)

    left_sha: str
    right_sha: str
    rows: tuple[ComparisonRow, ...] = ()
    avg_relative_change: float = 0.0
    sort_key: SortKey = SortKey.ID
    direction: SortDirection = SortDirection.ASC

    @property
    def improved(self) -> list[ComparisonRow]:
        """Rows whose runtime went down."""
        return [row for row in self.rows if row.absolute_change < 0]

    @property
    def regressed(self) -> list[ComparisonRow]:
        """Rows whose runtime went up."""
        return [row for row in self.rows if row.absolute_change > 0]


def relative_change(left_time: float, right_time: float) -> float | None:
    """Percent change from ``left_time`` to ``right_time``.

    Returns:
        The change in percent, or None when ``left_time`` is zero
    """
    if left_time == 0:
        return None
    return (right_time - left_time) / left_time * 100


def _make_row(left: BenchmarkResult, right: BenchmarkResult) -> ComparisonRow:
    return ComparisonRow(
        id=left.id,
        name=left.name,
        best_time=left.best_time,
        left_time=left.runtime,
        right_time=right.runtime,
        absolute_change=right.runtime - left.runtime,
        relative_change=relative_change(left.runtime, right.runtime),
        left_score=left.score,
        right_score=right.score,
    )


def _sort_value(row: ComparisonRow, key: SortKey) -> tuple[bool, Any]:
    value = getattr(row, key.value)
    # Undefined relative changes order after every defined value.
    if value is None:
        return True, 0.0
    return False, value


@dataclass(frozen=True)
class JoinedComparison:
    """Joined rows of two snapshots in the left snapshot's benchmark order."""

    left_sha: str
    right_sha: str
    rows: tuple[ComparisonRow, ...]
    avg_relative_change: float

    def sorted(
        self,
        key: SortKey | str = SortKey.ID,
        direction: SortDirection | str = SortDirection.ASC,
    ) -> ComparisonResult:
        """Order the joined rows.

        Ascending order is stable, so ties keep join order. Descending order
        is the exact reverse of ascending order, so ties come out in reverse
        join order.

        Args:
            key: Column to sort by
            direction: ``asc`` or ``desc``

        Returns:
            ComparisonResult with the ordered rows
        """
        key = SortKey(key)
        direction = SortDirection(direction)

        ordered = sorted(self.rows, key=lambda row: _sort_value(row, key))
        if direction is SortDirection.DESC:
            ordered.reverse()

        return ComparisonResult(
            left_sha=self.left_sha,
            right_sha=self.right_sha,
            rows=tuple(ordered),
            avg_relative_change=self.avg_relative_change,
            sort_key=key,
            direction=direction,
        )


def join_snapshots(left: CommitSnapshot, right: CommitSnapshot) -> JoinedComparison:
    """Inner-join two snapshots by case name.

    Cases present in only one snapshot are left out. Rows follow the order of
    ``left.benchmarks``.

    Args:
        left: Base commit
        right: Commit compared against the base

    Returns:
        JoinedComparison ready to be sorted
    """
    left_by_name = {bench.name: bench for bench in left.benchmarks}
    right_by_name = {bench.name: bench for bench in right.benchmarks}

    rows = []
    for name, bench in left_by_name.items():
        other = right_by_name.get(name)
        if other is not None:
            rows.append(_make_row(bench, other))

    defined = np.array(
        [row.relative_change for row in rows if row.relative_change is not None],
        dtype=np.float64,
    )
    avg = float(np.mean(defined)) if defined.size else 0.0

    undefined = len(rows) - int(defined.size)
    if undefined:
        logger.debug(f"{undefined} cases have zero base time, relative change unavailable")

    logger.debug(f"Joined {left.sha[:7]} and {right.sha[:7]}: {len(rows)} common cases")

    return JoinedComparison(
        left_sha=left.sha,
        right_sha=right.sha,
        rows=tuple(rows),
        avg_relative_change=avg,
    )


def compare_snapshots(
    left: CommitSnapshot,
    right: CommitSnapshot,
    key: SortKey | str = SortKey.ID,
    direction: SortDirection | str = SortDirection.ASC,
) -> ComparisonResult:
    """Join two snapshots and sort the result in one call."""
    return join_snapshots(left, right).sorted(key, direction)
