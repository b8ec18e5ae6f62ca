"""Dataset assembly and JSON persistence."""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from ..errors import MissingFileError, ParseError
from .models import CommitSnapshot, Dataset, ReferenceEntry

logger = logging.getLogger(__name__)


def build_dataset(
    snapshots: Iterable[CommitSnapshot],
    best_times: Mapping[str, ReferenceEntry],
    generated_at: datetime | None = None,
) -> Dataset:
    """Collect snapshots into a dataset ordered by commit date.

    The sort is stable: commits with equal dates keep their input order.

    Args:
        snapshots: Commit snapshots in any order
        best_times: Reference table used for scoring
        generated_at: Generation timestamp (default: current UTC time)

    Returns:
        Dataset ready to be written
    """
    commits = tuple(sorted(snapshots, key=lambda c: c.date))
    return Dataset(
        commits=commits,
        best_times=dict(best_times),
        generated_at=generated_at or datetime.now(timezone.utc),
    )


def write_dataset(dataset: Dataset, path: Path | str) -> Path:
    """Serialize a dataset to indented JSON.

    Args:
        dataset: Dataset to write
        path: Output file; parent directories are created

    Returns:
        Path of the written file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dataset.model_dump_json(indent=2), encoding="utf-8")
    logger.info(f"Data saved to {path} ({len(dataset.commits)} commits)")
    return path


def read_dataset(path: Path | str) -> Dataset:
    """Load a dataset written by ``write_dataset``.

    Raises:
        MissingFileError: If ``path`` does not exist
        ParseError: If the file is not a valid dataset document
    """
    path = Path(path)
    if not path.is_file():
        raise MissingFileError(path, "dataset")

    try:
        return Dataset.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        msg = f"invalid dataset {path}: {e.error_count()} validation errors"
        raise ParseError(msg) from e
