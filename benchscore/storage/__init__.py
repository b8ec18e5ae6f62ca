"""Data models and dataset persistence."""

from .dataset import build_dataset, read_dataset, write_dataset
from .models import (
    BenchmarkResult,
    CommitMetadata,
    CommitSnapshot,
    Dataset,
    RawResult,
    ReferenceEntry,
)

__all__ = [
    "BenchmarkResult",
    "CommitMetadata",
    "CommitSnapshot",
    "Dataset",
    "RawResult",
    "ReferenceEntry",
    "build_dataset",
    "read_dataset",
    "write_dataset",
]
