"""Terminal presentation of commits and comparisons."""

from .terminal import ComparisonReport, change_class, commit_label, relative_time, score_change_class

__all__ = [
    "ComparisonReport",
    "change_class",
    "commit_label",
    "relative_time",
    "score_change_class",
]
