"""Parsers for reference tables and per-commit result files."""

from .numbers import parse_float, parse_int
from .reference import load_reference_table, parse_reference_table
from .results import load_results, parse_results

__all__ = [
    "load_reference_table",
    "load_results",
    "parse_float",
    "parse_int",
    "parse_reference_table",
    "parse_results",
]
