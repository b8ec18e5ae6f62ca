"""Parser for per-commit tab-separated benchmark result files."""

import logging
from collections.abc import Mapping
from pathlib import Path

from ..errors import MalformedRowError, MissingFileError, NotANumber, UnknownCaseError
from ..storage.models import RawResult, ReferenceEntry
from .numbers import parse_float

logger = logging.getLogger(__name__)

MIN_COLUMNS = 5
NAME_COLUMN = 1
STATUS_COLUMN = 2
RUNTIME_COLUMN = 3


def _parse_row(line_number: int, columns: list[str]) -> RawResult:
    name = columns[NAME_COLUMN].strip()
    status = columns[STATUS_COLUMN].strip()
    runtime_text = columns[RUNTIME_COLUMN].strip()

    try:
        runtime = parse_float(runtime_text)
    except NotANumber as e:
        msg = f"cannot parse time for {name}: {runtime_text!r}"
        raise MalformedRowError(line_number, msg) from e

    if runtime < 0:
        msg = f"negative time for {name}: {runtime_text!r}"
        raise MalformedRowError(line_number, msg)

    return RawResult(name=name, status=status, runtime=runtime)


def parse_results(
    text: str,
    reference: Mapping[str, ReferenceEntry],
) -> list[RawResult]:
    """Parse one commit's result table.

    The first line is a header. Rows with fewer than five columns are
    ignored. Rows with an unusable runtime or an unknown case name are
    dropped with a warning.

    Args:
        text: Contents of the ``.tsv`` file
        reference: Reference table used to filter unknown cases

    Returns:
        Parsed rows in file order
    """
    results: list[RawResult] = []
    lines = text.strip().splitlines()

    for line_number, line in enumerate(lines[1:], start=2):
        columns = line.split("\t")
        if len(columns) < MIN_COLUMNS:
            continue

        try:
            raw = _parse_row(line_number, columns)
            if raw.name not in reference:
                raise UnknownCaseError(raw.name)
        except (MalformedRowError, UnknownCaseError) as e:
            logger.warning(f"Skipping result row: {e}")
            continue

        results.append(raw)

    return results


def load_results(
    path: Path | str,
    reference: Mapping[str, ReferenceEntry],
) -> list[RawResult]:
    """Read and parse a result file from disk.

    Raises:
        MissingFileError: If ``path`` does not exist
    """
    path = Path(path)
    if not path.is_file():
        raise MissingFileError(path, "result file")
    return parse_results(path.read_text(encoding="utf-8"), reference)
