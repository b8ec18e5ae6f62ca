"""Lenient numeric parsing for benchmark text tables.

Result files are produced by shell scripts and occasionally carry units or
trailing junk after the number (``"1.25s"``). Only the leading numeric prefix
is read; a field with no such prefix, or whose value overflows to
infinity (``"1e400"``), raises ``NotANumber``.
"""

import math
import re

from ..errors import NotANumber

_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def parse_float(text: str) -> float:
    """Parse the leading decimal number of ``text``.

    Raises:
        NotANumber: If ``text`` does not start with a finite number
    """
    match = _FLOAT_PREFIX.match(text)
    if not match:
        raise NotANumber(text)
    value = float(match.group(1))
    if not math.isfinite(value):
        raise NotANumber(text)
    return value


def parse_int(text: str) -> int:
    """Parse the leading integer of ``text``.

    Raises:
        NotANumber: If ``text`` does not start with an integer
    """
    match = _INT_PREFIX.match(text)
    if not match:
        raise NotANumber(text)
    return int(match.group(1))
