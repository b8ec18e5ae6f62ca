"""End-to-end build: result files to persisted dataset."""

import logging
from pathlib import Path

from .analysis.aggregate import build_snapshot
from .analysis.scoring import score_results
from .collectors.github import CommitSource, GitHubCommitSource, OfflineCommitSource
from .config import PipelineConfig
from .errors import MissingFileError
from .parsers.reference import load_reference_table
from .parsers.results import load_results
from .storage.dataset import build_dataset, write_dataset
from .storage.models import BenchmarkResult, Dataset

logger = logging.getLogger(__name__)

RESULT_SUFFIX = ".tsv"


def discover_result_files(results_dir: Path | str) -> list[Path]:
    """List result files in ``results_dir``, sorted by name.

    Raises:
        MissingFileError: If the directory does not exist
    """
    results_dir = Path(results_dir)
    if not results_dir.is_dir():
        raise MissingFileError(results_dir, "results directory")
    return sorted(p for p in results_dir.iterdir() if p.is_file() and p.suffix == RESULT_SUFFIX)


def make_source(config: PipelineConfig) -> CommitSource:
    """Commit metadata source for ``config``."""
    if config.offline:
        return OfflineCommitSource(config.repository)
    return GitHubCommitSource(
        repository=config.repository,
        token=config.github_token,
        timeout=config.timeout,
    )


def build(config: PipelineConfig, source: CommitSource | None = None) -> Dataset:
    """Parse, score and aggregate every result file into a dataset.

    Args:
        config: Pipeline configuration
        source: Metadata source (default: derived from ``config``)

    Returns:
        Dataset with commits ordered by date

    Raises:
        MissingFileError: If the reference table, results directory or a
            result file is missing
        ParseError: If the reference table has a short row
    """
    logger.info(f"Reading best times from {config.reference_file}")
    reference = load_reference_table(config.reference_file)

    files = discover_result_files(config.results_dir)
    logger.info(f"Found {len(files)} result files to process")

    scored: dict[str, list[BenchmarkResult]] = {}
    for path in files:
        sha = path.stem
        logger.info(f"Processing {sha}...")
        scored[sha] = score_results(load_results(path, reference), reference)

    source = source or make_source(config)
    metadata = source.fetch_many(scored, workers=config.workers)

    snapshots = [build_snapshot(metadata[sha], benchmarks) for sha, benchmarks in scored.items()]
    return build_dataset(snapshots, reference)


def run_pipeline(config: PipelineConfig, source: CommitSource | None = None) -> Dataset:
    """Build the dataset and write it to ``config.output_file``."""
    dataset = build(config, source)
    write_dataset(dataset, config.output_file)
    logger.info(f"Processed {len(dataset.commits)} commits")
    return dataset
