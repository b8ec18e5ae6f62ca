"""benchscore: per-commit benchmark scoring and commit-to-commit comparison."""

__version__ = "0.1.0"
