"""Parser for the best-time reference table (``best.csv``)."""

import csv
import logging
from pathlib import Path

from ..errors import MalformedRowError, MissingFileError, NotANumber
from ..storage.models import ReferenceEntry
from .numbers import parse_float, parse_int

logger = logging.getLogger(__name__)

REFERENCE_COLUMNS = 3


def parse_reference_table(text: str) -> dict[str, ReferenceEntry]:
    """Parse comma-separated reference rows into a name lookup.

    The first line is a header. Each following row is ``id,name,best_time``.

    Args:
        text: Contents of the reference file

    Returns:
        Mapping of case name to ReferenceEntry

    Raises:
        MalformedRowError: If a row has fewer than three columns
    """
    entries: dict[str, ReferenceEntry] = {}
    lines = text.strip().splitlines()

    for line_number, row in enumerate(csv.reader(lines[1:]), start=2):
        if not row or not "".join(row).strip():
            continue
        if len(row) < REFERENCE_COLUMNS:
            msg = f"expected {REFERENCE_COLUMNS} columns, got {len(row)}"
            raise MalformedRowError(line_number, msg)

        raw_id, name, raw_time = (field.strip() for field in row[:REFERENCE_COLUMNS])
        try:
            case_id = parse_int(raw_id)
            recorded = parse_float(raw_time)
        except NotANumber as e:
            logger.warning(f"Skipping reference row {line_number} ({name}): {e}")
            continue

        if recorded < 0:
            logger.warning(f"Skipping reference row {line_number} ({name}): negative best time")
            continue

        if name in entries:
            logger.warning(f"Duplicate reference case {name} on line {line_number}, keeping last")

        entries[name] = ReferenceEntry.from_recorded(case_id, recorded)

    logger.debug(f"Loaded {len(entries)} reference cases")
    return entries


def load_reference_table(path: Path | str) -> dict[str, ReferenceEntry]:
    """Read and parse a reference table from disk.

    Raises:
        MissingFileError: If ``path`` does not exist
        MalformedRowError: If a row has fewer than three columns
    """
    path = Path(path)
    if not path.is_file():
        raise MissingFileError(path, "reference table")
    return parse_reference_table(path.read_text(encoding="utf-8"))
