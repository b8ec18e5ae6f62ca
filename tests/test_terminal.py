"""Tests for terminal presentation helpers."""

from datetime import datetime, timedelta, timezone

import pytest
from rich.console import Console

from benchscore.analysis.comparison import compare_snapshots
from benchscore.config import DisplayThresholds
from benchscore.visualization.terminal import (
    ChangeClass,
    ComparisonReport,
    change_class,
    commit_label,
    relative_time,
    score_change_class,
    score_style,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class TestChangeClass:
    """Test change classification."""

    @pytest.mark.parametrize(
        ("change", "expected"),
        [
            (0.0, ChangeClass.NEUTRAL),
            (2.0, ChangeClass.NEUTRAL),
            (-2.0, ChangeClass.NEUTRAL),
            (-2.5, ChangeClass.POSITIVE),
            (2.5, ChangeClass.NEGATIVE),
            (None, ChangeClass.NEUTRAL),
        ],
    )
    def test_runtime_change(self, change, expected):
        """Test classification with default thresholds."""
        assert change_class(change, DisplayThresholds()) is expected

    def test_custom_threshold(self):
        """Test that thresholds are configurable."""
        strict = DisplayThresholds(neutral_change_percent=0.1)

        assert change_class(1.0, strict) is ChangeClass.NEGATIVE

    def test_score_change(self):
        """Test score classification around the threshold."""
        thresholds = DisplayThresholds()

        assert score_change_class(50.0, 50.4, thresholds) is ChangeClass.NEUTRAL
        assert score_change_class(50.0, 50.5, thresholds) is ChangeClass.POSITIVE
        assert score_change_class(50.0, 49.0, thresholds) is ChangeClass.NEGATIVE

    def test_score_style(self):
        """Test score badge colours."""
        assert score_style(75.0) == "green"
        assert score_style(45.0) == "dark_orange"
        assert score_style(40.0) == "red"


class TestRelativeTime:
    """Test human-readable ages."""

    @pytest.mark.parametrize(
        ("delta", "expected"),
        [
            (timedelta(seconds=30), "just now"),
            (timedelta(minutes=1), "1 minute ago"),
            (timedelta(minutes=5), "5 minutes ago"),
            (timedelta(hours=3), "3 hours ago"),
            (timedelta(days=1), "1 day ago"),
            (timedelta(days=14), "2 weeks ago"),
            (timedelta(days=65), "2 months ago"),
            (timedelta(days=800), "2 years ago"),
        ],
    )
    def test_ages(self, delta, expected):
        """Test each unit."""
        assert relative_time(NOW - delta, NOW) == expected

    def test_future_is_just_now(self):
        """Test timestamps after the reference time."""
        assert relative_time(NOW + timedelta(hours=1), NOW) == "just now"


def test_commit_label(make_snapshot, make_bench) -> None:
    """Test the one-line commit description."""
    snapshot = make_snapshot(
        "0123456789",
        [make_bench(1, "a", 1.0, score=42.3)],
        message="A very long commit message that keeps on going forever\nbody",
    )
    now = snapshot.date + timedelta(days=2)

    label = commit_label(snapshot, now)

    assert label == "0123456 • 42.3 pts • 2 days ago • A very long commit message that keeps on..."


def test_report_renders(make_snapshot, make_bench) -> None:
    """Test that the comparison report prints every common case."""
    left = make_snapshot("aaaaaaa111", [make_bench(1, "loop", 4.0, score=50.0), make_bench(2, "z", 0.0)], day=1)
    right = make_snapshot("bbbbbbb222", [make_bench(1, "loop", 2.0), make_bench(2, "z", 1.0)], day=2)
    console = Console(record=True, width=200)

    report = ComparisonReport(console=console)
    report.print_comparison(left, right, compare_snapshots(left, right))
    report.print_commits([left, right], NOW)
    text = console.export_text()

    assert "aaaaaaa" in text
    assert "loop" in text
    assert "-50.00%" in text
    assert "n/a" in text
    assert "Average relative change" in text
