"""Configuration for pipeline runs and comparison display."""

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from .collectors.github import DEFAULT_REPOSITORY


@dataclass(frozen=True)
class DisplayThresholds:
    """Thresholds used to classify changes in comparison output."""

    # Relative runtime change (%) treated as noise, inclusive
    neutral_change_percent: float = 2.0
    # Score change below which a case counts as unchanged
    score_change: float = 0.5


@dataclass
class PipelineConfig:
    """Complete configuration for building and comparing datasets."""

    results_dir: Path = Path("results")
    reference_file: Path = Path("results/best.csv")
    output_file: Path = Path("data/benchmark_data.json")

    repository: str = DEFAULT_REPOSITORY
    github_token: str | None = None
    timeout: float = 10.0
    workers: int = 8
    offline: bool = False

    thresholds: DisplayThresholds = field(default_factory=DisplayThresholds)

    def __post_init__(self):
        """Normalize paths and pick up the token from the environment."""
        self.results_dir = Path(self.results_dir)
        self.reference_file = Path(self.reference_file)
        self.output_file = Path(self.output_file)

        if self.github_token is None:
            self.github_token = os.environ.get("GITHUB_TOKEN")

        if isinstance(self.thresholds, dict):
            self.thresholds = DisplayThresholds(**self.thresholds)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        The API token is never written out.
        """
        d = asdict(self)
        d["results_dir"] = str(self.results_dir)
        d["reference_file"] = str(self.reference_file)
        d["output_file"] = str(self.output_file)
        d.pop("github_token")
        return d

    def save(self, path: Path):
        """Save configuration to JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Path) -> "PipelineConfig":
        """Load configuration from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)

        return cls(**data)

    def with_overrides(self, **overrides: Any) -> "PipelineConfig":
        """Copy of this config with non-None overrides applied."""
        data = asdict(self)
        data["thresholds"] = self.thresholds
        data.update({k: v for k, v in overrides.items() if v is not None})
        return PipelineConfig(**data)
