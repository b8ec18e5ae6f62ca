"""Exception hierarchy for the benchscore pipeline.

Only ``ParseError`` (and its ``MissingFileError`` subclass) aborts a run.
Everything else is raised locally, caught by the caller and logged.
"""

from pathlib import Path


class BenchscoreError(Exception):
    """Base class for all benchscore errors."""


class ParseError(BenchscoreError):
    """Input could not be parsed into the expected shape."""


class MissingFileError(ParseError):
    """A reference, result or dataset file does not exist."""

    def __init__(self, path: Path | str, kind: str = "file") -> None:
        self.path = Path(path)
        self.kind = kind
        super().__init__(f"{kind} not found: {self.path}")


class MalformedRowError(ParseError):
    """A single input row has the wrong shape or an unusable value."""

    def __init__(self, line_number: int, reason: str) -> None:
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}")


class NotANumber(ValueError):
    """A numeric field does not start with a parsable number."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"not a number: {text!r}")


class UnknownCaseError(BenchscoreError):
    """A result row names a case missing from the reference table."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"case {name!r} not found in reference table")


class MetadataFetchError(BenchscoreError):
    """Commit metadata could not be retrieved from the hosting API."""

    def __init__(self, sha: str, reason: str) -> None:
        self.sha = sha
        self.reason = reason
        super().__init__(f"metadata for {sha}: {reason}")
