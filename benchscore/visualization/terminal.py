"""Rich terminal rendering for commit lists and comparisons."""

from datetime import datetime, timezone
from enum import Enum

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..analysis.comparison import ComparisonResult, SortDirection
from ..analysis.selection import short_sha
from ..config import DisplayThresholds
from ..storage.models import CommitSnapshot

LABEL_MESSAGE_WIDTH = 40


class ChangeClass(str, Enum):
    """Display classification of a change."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


CHANGE_STYLES = {
    ChangeClass.POSITIVE: "green",
    ChangeClass.NEGATIVE: "red",
    ChangeClass.NEUTRAL: "white",
}


def change_class(
    relative_change: float | None,
    thresholds: DisplayThresholds,
) -> ChangeClass:
    """Classify a runtime change; faster is positive."""
    if relative_change is None or abs(relative_change) <= thresholds.neutral_change_percent:
        return ChangeClass.NEUTRAL
    return ChangeClass.POSITIVE if relative_change < 0 else ChangeClass.NEGATIVE


def score_change_class(
    old_score: float,
    new_score: float,
    thresholds: DisplayThresholds,
) -> ChangeClass:
    """Classify a score change; higher is positive."""
    change = new_score - old_score
    if abs(change) < thresholds.score_change:
        return ChangeClass.NEUTRAL
    return ChangeClass.POSITIVE if change > 0 else ChangeClass.NEGATIVE


def score_style(score: float) -> str:
    """Badge colour for an average score."""
    if score > 50:
        return "green"
    if score > 40:
        return "dark_orange"
    return "red"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''} ago"


def relative_time(date: datetime, now: datetime | None = None) -> str:
    """Human-readable age of ``date``, e.g. ``3 days ago``."""
    now = now or datetime.now(timezone.utc)
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)

    seconds = int((now - date).total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    for count, unit in (
        (days // 365, "year"),
        (days // 30, "month"),
        (days // 7, "week"),
        (days, "day"),
        (hours, "hour"),
        (minutes, "minute"),
    ):
        if count > 0:
            return _plural(count, unit)
    return "just now"


def commit_label(commit: CommitSnapshot, now: datetime | None = None) -> str:
    """One-line description of a commit for pickers and listings."""
    summary = commit.summary
    if len(summary) > LABEL_MESSAGE_WIDTH:
        summary = summary[:LABEL_MESSAGE_WIDTH] + "..."
    return (
        f"{short_sha(commit.sha)} • {commit.average_score:.1f} pts • "
        f"{relative_time(commit.date, now)} • {summary}"
    )


def _format_relative(value: float | None) -> str:
    if value is None:
        return "n/a"
    return f"{value:+.2f}%"


class ComparisonReport:
    """Renders commits and comparisons to the terminal."""

    def __init__(
        self,
        thresholds: DisplayThresholds | None = None,
        console: Console | None = None,
    ) -> None:
        self.thresholds = thresholds or DisplayThresholds()
        self.console = console or Console()

    def print_commits(self, commits: list[CommitSnapshot], now: datetime | None = None) -> None:
        """Print a table of commits with their average scores."""
        table = Table(title="Commits", show_header=True, header_style="bold magenta")
        table.add_column("Commit", style="cyan")
        table.add_column("Score", justify="right")
        table.add_column("Date")
        table.add_column("Author")
        table.add_column("Message", style="white")

        for commit in commits:
            style = score_style(commit.average_score)
            table.add_row(
                short_sha(commit.sha),
                f"[{style}]{commit.average_score:.1f}[/{style}]",
                relative_time(commit.date, now),
                commit.author,
                commit.summary[:60],
            )

        self.console.print(table)

    def print_comparison(
        self,
        left: CommitSnapshot,
        right: CommitSnapshot,
        result: ComparisonResult,
    ) -> None:
        """Print the per-case comparison table and the summary panel."""
        self.console.print()
        self.console.print(
            Panel.fit(
                f"[bold cyan]Benchmark Comparison[/bold cyan]\n"
                f"Base:    {short_sha(left.sha)} ({left.average_score:.1f} pts) {left.summary}\n"
                f"Compare: {short_sha(right.sha)} ({right.average_score:.1f} pts) {right.summary}",
                border_style="cyan",
            )
        )

        arrow = "↑" if result.direction is SortDirection.ASC else "↓"
        table = Table(
            title=f"Sorted by {result.sort_key.value} {arrow}",
            show_header=True,
            header_style="bold yellow",
        )
        table.add_column("ID", justify="right")
        table.add_column("Case", style="cyan")
        table.add_column("Best (s)", justify="right")
        table.add_column("Base (s)", justify="right")
        table.add_column("Compare (s)", justify="right")
        table.add_column("Δ (s)", justify="right")
        table.add_column("Δ %", justify="right")
        table.add_column("Base score", justify="right")
        table.add_column("Compare score", justify="right")

        for row in result.rows:
            change_style = CHANGE_STYLES[change_class(row.relative_change, self.thresholds)]
            score_cls = score_change_class(row.left_score, row.right_score, self.thresholds)
            score_color = CHANGE_STYLES[score_cls]
            table.add_row(
                str(row.id),
                row.name,
                f"{row.best_time:.4f}",
                f"{row.left_time:.4f}",
                f"{row.right_time:.4f}",
                f"[{change_style}]{row.absolute_change:+.4f}[/{change_style}]",
                f"[{change_style}]{_format_relative(row.relative_change)}[/{change_style}]",
                f"{row.left_score:.2f}",
                f"[{score_color}]{row.right_score:.2f}[/{score_color}]",
            )

        self.console.print(table)

        avg_style = CHANGE_STYLES[change_class(result.avg_relative_change, self.thresholds)]
        self.console.print(
            f"\n[bold]Cases compared:[/bold] {len(result.rows)}  "
            f"[green]faster: {len(result.improved)}[/green]  "
            f"[red]slower: {len(result.regressed)}[/red]"
        )
        self.console.print(
            f"[bold]Average relative change:[/bold] "
            f"[{avg_style}]{result.avg_relative_change:+.2f}%[/{avg_style}]"
        )
        self.console.print(
            f"[bold]Average score:[/bold] {left.average_score:.2f} → {right.average_score:.2f}"
        )
        self.console.print()

