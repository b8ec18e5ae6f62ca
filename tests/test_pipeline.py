"""End-to-end tests for the build pipeline."""

import time
from datetime import datetime, timezone

import pytest

from benchscore.collectors.github import CommitSource, OfflineCommitSource
from benchscore.config import PipelineConfig
from benchscore.errors import MetadataFetchError, MissingFileError, ParseError
from benchscore.pipeline import build, discover_result_files, make_source, run_pipeline
from benchscore.storage.dataset import read_dataset
from benchscore.storage.models import CommitMetadata

REFERENCE = "id,name,best_time\n1,loop,2.0\n2,sort,0.5\n3,zero,0.00\n"
HEADER = "id\tname\tstatus\ttime\tmemory\n"


class DatedSource(CommitSource):
    """Source returning fixed dates; shas listed in ``missing`` fail."""

    def __init__(self, dates, missing=()):
        super().__init__("owner/repo")
        self.dates = dates
        self.missing = set(missing)

    def fetch(self, sha):
        if sha in self.missing:
            raise MetadataFetchError(sha, "not found")
        return CommitMetadata(
            sha=sha,
            message=f"commit {sha}",
            author="Ada",
            author_email="ada@example.com",
            date=self.dates[sha],
            url=f"https://github.com/owner/repo/commit/{sha}",
            parent_sha=None,
        )


@pytest.fixture
def workspace(tmp_path):
    """Results directory with a reference table and two commits."""
    results = tmp_path / "results"
    results.mkdir()
    (results / "best.csv").write_text(REFERENCE)
    (results / "aaa.tsv").write_text(
        HEADER
        + "1\tloop\tPASS\t2.0\t0\n"
        + "2\tsort\tPASS\t1.0\t0\n"
        + "3\tzero\tPASS\t0.0005\t0\n"
        + "4\tghost\tPASS\t1.0\t0\n"
    )
    (results / "bbb.tsv").write_text(HEADER + "2\tsort\tPASS\t0.5\t0\n1\tloop\tTIMEOUT\tn/a\t0\n")
    (results / "notes.txt").write_text("ignored")
    return tmp_path


@pytest.fixture
def config(workspace):
    """Config pointing into the workspace."""
    return PipelineConfig(
        results_dir=workspace / "results",
        reference_file=workspace / "results" / "best.csv",
        output_file=workspace / "data" / "benchmark_data.json",
        workers=2,
    )


def test_discover_result_files(workspace) -> None:
    """Test that only .tsv files are picked up, in name order."""
    files = discover_result_files(workspace / "results")

    assert [f.name for f in files] == ["aaa.tsv", "bbb.tsv"]


def test_build_scores_and_orders(config) -> None:
    """Test the full build with metadata dates out of file order."""
    source = DatedSource(
        {
            "aaa": datetime(2024, 2, 1, tzinfo=timezone.utc),
            "bbb": datetime(2024, 1, 1, tzinfo=timezone.utc),
        }
    )

    dataset = build(config, source)

    assert [c.sha for c in dataset.commits] == ["bbb", "aaa"]
    newer = dataset.commits[1]
    assert [b.name for b in newer.benchmarks] == ["loop", "sort", "zero"]
    assert [b.score for b in newer.benchmarks] == pytest.approx([100, 50, 20])
    assert newer.average_score == pytest.approx((100 + 50 + 20) / 3)

    older = dataset.commits[0]
    assert [b.name for b in older.benchmarks] == ["sort"]
    assert older.average_score == 100
    assert set(dataset.best_times) == {"loop", "sort", "zero"}


def test_failed_metadata_does_not_abort(config) -> None:
    """Test that failed lookups produce placeholder commits."""
    source = DatedSource({"aaa": datetime(2024, 2, 1, tzinfo=timezone.utc)}, missing={"bbb"})

    dataset = build(config, source)

    by_sha = {c.sha: c for c in dataset.commits}
    assert by_sha["bbb"].message == "Unknown"
    assert by_sha["bbb"].url.endswith("/commit/bbb")
    assert len(by_sha["bbb"].benchmarks) == 1


class SlowFailingSource(CommitSource):
    """Source whose lookups all fail, earlier shas taking longer."""

    def __init__(self, delays):
        super().__init__("owner/repo")
        self.delays = delays

    def fetch(self, sha):
        time.sleep(self.delays[sha])
        raise MetadataFetchError(sha, "unavailable")


def test_failed_lookups_keep_file_order(workspace, config) -> None:
    """Test that placeholder commits follow file order, not completion order."""
    (workspace / "results" / "ccc.tsv").write_text(HEADER + "1\tloop\tPASS\t2.0\t0\n")
    source = SlowFailingSource({"aaa": 0.3, "bbb": 0.2, "ccc": 0.1})

    dataset = build(config.with_overrides(workers=3), source)

    assert [c.sha for c in dataset.commits] == ["aaa", "bbb", "ccc"]
    assert len({c.date for c in dataset.commits}) == 1


def test_run_pipeline_writes_dataset(config) -> None:
    """Test that the dataset artifact is written and readable."""
    dataset = run_pipeline(config, OfflineCommitSource("owner/repo"))

    assert config.output_file.exists()
    assert read_dataset(config.output_file) == dataset


def test_overflowing_runtime_keeps_dataset_readable(workspace, config) -> None:
    """Test that an infinite runtime is dropped before it reaches the artifact."""
    (workspace / "results" / "ccc.tsv").write_text(HEADER + "1\tloop\tPASS\t1e400\t0\n2\tsort\tPASS\t0.5\t0\n")

    dataset = run_pipeline(config, OfflineCommitSource("owner/repo"))

    ccc = next(c for c in dataset.commits if c.sha == "ccc")
    assert [b.name for b in ccc.benchmarks] == ["sort"]
    assert read_dataset(config.output_file) == dataset


def test_missing_reference_is_fatal(config) -> None:
    """Test that a missing reference table aborts the run."""
    config.reference_file.unlink()

    with pytest.raises(MissingFileError):
        build(config, OfflineCommitSource())


def test_missing_results_dir_is_fatal(tmp_path) -> None:
    """Test that a missing results directory aborts the run."""
    (tmp_path / "best.csv").write_text(REFERENCE)
    config = PipelineConfig(results_dir=tmp_path / "nope", reference_file=tmp_path / "best.csv")

    with pytest.raises(MissingFileError):
        build(config, OfflineCommitSource())


def test_short_reference_row_is_fatal(config) -> None:
    """Test that a truncated reference row aborts the run."""
    config.reference_file.write_text("id,name,best_time\n1,loop\n")

    with pytest.raises(ParseError):
        build(config, OfflineCommitSource())


def test_empty_results_dir(tmp_path) -> None:
    """Test a run with no result files."""
    results = tmp_path / "results"
    results.mkdir()
    (results / "best.csv").write_text(REFERENCE)
    config = PipelineConfig(results_dir=results, reference_file=results / "best.csv")

    dataset = build(config, OfflineCommitSource())

    assert dataset.commits == ()


def test_make_source(config) -> None:
    """Test choosing the metadata source from config."""
    assert isinstance(make_source(config.with_overrides(offline=True)), OfflineCommitSource)
    assert make_source(config).repository == config.repository
