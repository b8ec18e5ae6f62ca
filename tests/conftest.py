"""Shared fixtures for benchscore tests."""

from datetime import datetime, timezone

import pytest

from benchscore.analysis.aggregate import build_snapshot
from benchscore.storage.models import BenchmarkResult, CommitMetadata, ReferenceEntry


@pytest.fixture
def reference() -> dict[str, ReferenceEntry]:
    """Three-case reference table, one with a zero best time."""
    return {
        "loop": ReferenceEntry.from_recorded(1, 2.0),
        "sort": ReferenceEntry.from_recorded(2, 0.5),
        "zero": ReferenceEntry.from_recorded(3, 0.0),
    }


@pytest.fixture
def make_metadata():
    """Factory for commit metadata."""

    def _make(sha: str, day: int = 1, message: str = "Commit message") -> CommitMetadata:
        return CommitMetadata(
            sha=sha,
            message=message,
            author="Ada",
            author_email="ada@example.com",
            date=datetime(2024, 1, day, 12, 0, tzinfo=timezone.utc),
            url=f"https://github.com/example/repo/commit/{sha}",
            parent_sha=None,
        )

    return _make


@pytest.fixture
def make_bench():
    """Factory for scored benchmark results."""

    def _make(
        case_id: int,
        name: str,
        runtime: float,
        score: float = 100.0,
        best_time: float = 1.0,
    ) -> BenchmarkResult:
        return BenchmarkResult(
            id=case_id,
            name=name,
            runtime=runtime,
            best_time=best_time,
            score=score,
            status="PASS",
        )

    return _make


@pytest.fixture
def make_snapshot(make_metadata):
    """Factory for commit snapshots."""

    def _make(sha: str, benchmarks, day: int = 1, message: str = "Commit message"):
        return build_snapshot(make_metadata(sha, day, message), benchmarks)

    return _make
