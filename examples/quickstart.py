#!/usr/bin/env python3
"""Quickstart example for benchscore.

This example demonstrates basic usage:
1. Build a dataset from results/ (offline, no GitHub lookups)
2. Pick the two newest commits
3. Compare them, sorted by relative change
"""

import logging
from pathlib import Path

from benchscore.analysis.comparison import SortDirection, SortKey, join_snapshots
from benchscore.analysis.selection import share_query
from benchscore.config import PipelineConfig
from benchscore.pipeline import run_pipeline
from benchscore.visualization.terminal import ComparisonReport

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Run the build and comparison example."""
    config = PipelineConfig(
        results_dir=Path("results"),
        reference_file=Path("results/best.csv"),
        output_file=Path("data/benchmark_data.json"),
        offline=True,
    )

    dataset = run_pipeline(config)
    if len(dataset.commits) < 2:
        logger.info("Need at least two commits to compare")
        return

    left, right = dataset.commits[-2], dataset.commits[-1]
    joined = join_snapshots(left, right)

    report = ComparisonReport(config.thresholds)
    report.print_comparison(left, right, joined.sorted(SortKey.RELATIVE_CHANGE, SortDirection.DESC))

    logger.info(f"Share link: ?{share_query(left, right)}")


if __name__ == "__main__":
    main()
