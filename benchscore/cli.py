"""Command-line interface for benchscore."""

import json
import logging
import sys
from pathlib import Path

import click
import pandas as pd

from . import __version__
from .analysis.comparison import SortDirection, SortKey, compare_snapshots
from .analysis.selection import find_commit, share_query
from .config import PipelineConfig
from .errors import BenchscoreError
from .pipeline import run_pipeline
from .storage.dataset import read_dataset
from .storage.models import CommitSnapshot, Dataset
from .visualization.terminal import ComparisonReport

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load_dataset(config: PipelineConfig, data: Path | None) -> Dataset:
    try:
        return read_dataset(data or config.output_file)
    except BenchscoreError as e:
        _fail(str(e))


def _select(dataset: Dataset, prefix: str) -> CommitSnapshot:
    commit = find_commit(dataset, prefix)
    if commit is None:
        _fail(f"Commit {prefix} not found")
    return commit


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
    help="JSON configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """Per-commit benchmark scoring and comparison."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = PipelineConfig.load(config_path) if config_path else PipelineConfig()


@cli.command()
@click.option("--results-dir", type=click.Path(path_type=Path), help="Directory of .tsv result files")
@click.option("--reference", type=click.Path(path_type=Path), help="Best-time reference CSV")
@click.option("--output", type=click.Path(path_type=Path), help="Dataset output path")
@click.option("--repository", help="GitHub repository slug (owner/name)")
@click.option("--workers", type=int, help="Concurrent metadata lookups")
@click.option("--timeout", type=float, help="Metadata request timeout in seconds")
@click.option("--offline", is_flag=True, help="Skip metadata lookups")
@click.pass_context
def build(
    ctx: click.Context,
    results_dir: Path | None,
    reference: Path | None,
    output: Path | None,
    repository: str | None,
    workers: int | None,
    timeout: float | None,
    offline: bool,
) -> None:
    """Score all result files and write the dataset."""
    config: PipelineConfig = ctx.obj["config"].with_overrides(
        results_dir=results_dir,
        reference_file=reference,
        output_file=output,
        repository=repository,
        workers=workers,
        timeout=timeout,
        offline=offline or None,
    )

    try:
        dataset = run_pipeline(config)
    except BenchscoreError as e:
        logger.error(f"Error processing benchmarks: {e}")
        _fail(str(e))

    click.echo(f"✓ Processed {len(dataset.commits)} commits")
    click.echo(f"✓ Data saved to {config.output_file}")


@cli.command("list-commits")
@click.option("--data", type=click.Path(path_type=Path), help="Dataset path")
@click.option("--limit", default=20, type=int, help="Number of commits to display")
@click.pass_context
def list_commits(ctx: click.Context, data: Path | None, limit: int) -> None:
    """List commits in the dataset, newest first."""
    config: PipelineConfig = ctx.obj["config"]
    dataset = _load_dataset(config, data)

    if not dataset.commits:
        click.echo("No commits found")
        return

    commits = list(reversed(dataset.commits))[:limit]
    ComparisonReport(config.thresholds).print_commits(commits)
    click.echo(f"\nTotal: {len(dataset.commits)} commits")


@cli.command()
@click.argument("left")
@click.argument("right")
@click.option("--data", type=click.Path(path_type=Path), help="Dataset path")
@click.option(
    "--sort",
    "sort_key",
    type=click.Choice([k.value for k in SortKey]),
    default=SortKey.ID.value,
    show_default=True,
    help="Sort column",
)
@click.option(
    "--direction",
    type=click.Choice([d.value for d in SortDirection]),
    default=SortDirection.ASC.value,
    show_default=True,
    help="Sort direction",
)
@click.option("--output", type=click.Path(path_type=Path), help="Save comparison to JSON file")
@click.pass_context
def compare(
    ctx: click.Context,
    left: str,
    right: str,
    data: Path | None,
    sort_key: str,
    direction: str,
    output: Path | None,
) -> None:
    """Compare two commits given by sha prefix (LEFT is the base)."""
    config: PipelineConfig = ctx.obj["config"]
    dataset = _load_dataset(config, data)

    left_commit = _select(dataset, left)
    right_commit = _select(dataset, right)

    result = compare_snapshots(left_commit, right_commit, sort_key, direction)
    ComparisonReport(config.thresholds).print_comparison(left_commit, right_commit, result)

    if output:
        with output.open("w") as f:
            json.dump(result.model_dump(mode="json"), f, indent=2)
        click.echo(f"✓ Report saved to {output}")


@cli.command()
@click.argument("left")
@click.argument("right")
@click.option("--data", type=click.Path(path_type=Path), help="Dataset path")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["csv", "json"]),
    default="csv",
    help="Export format",
)
@click.option(
    "--output",
    type=click.Path(path_type=Path),
    required=True,
    help="Output file path",
)
@click.pass_context
def export(
    ctx: click.Context,
    left: str,
    right: str,
    data: Path | None,
    fmt: str,
    output: Path,
) -> None:
    """Export a comparison table to CSV or JSON."""
    config: PipelineConfig = ctx.obj["config"]
    dataset = _load_dataset(config, data)

    result = compare_snapshots(_select(dataset, left), _select(dataset, right))
    if not result.rows:
        _fail("No common benchmarks between the two commits")

    df = pd.DataFrame([row.model_dump() for row in result.rows])

    if fmt == "csv":
        df.to_csv(output, index=False)
    else:
        df.to_json(output, orient="records", indent=2)

    click.echo(f"✓ Exported {len(result.rows)} rows to {output}")


@cli.command()
@click.argument("left")
@click.argument("right")
@click.option("--data", type=click.Path(path_type=Path), help="Dataset path")
@click.pass_context
def link(ctx: click.Context, left: str, right: str, data: Path | None) -> None:
    """Print the shareable query string for a comparison."""
    config: PipelineConfig = ctx.obj["config"]
    dataset = _load_dataset(config, data)
    click.echo(f"?{share_query(_select(dataset, left), _select(dataset, right))}")


if __name__ == "__main__":
    cli()
