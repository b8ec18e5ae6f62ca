"""Pydantic models for reference times, commit snapshots and the dataset artifact."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

EPSILON = 0.0001
UNKNOWN = "Unknown"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class ReferenceEntry(BaseModel):
    """Best recorded time for one benchmark case.

    ``best_time`` is the value used as the scoring denominator; a recorded
    time of exactly zero is stored there as ``EPSILON`` while
    ``original_best_time`` keeps the recorded value.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Ordinal case id")
    best_time: float = Field(gt=0, allow_inf_nan=False, description="Effective best time (s)")
    original_best_time: float = Field(ge=0, allow_inf_nan=False, description="Best time as recorded (s)")

    @classmethod
    def from_recorded(cls, case_id: int, recorded: float) -> "ReferenceEntry":
        """Build an entry, remapping a zero best time to ``EPSILON``."""
        best_time = EPSILON if recorded == 0.0 else recorded
        return cls(id=case_id, best_time=best_time, original_best_time=recorded)


class RawResult(BaseModel):
    """One parsed row of a commit's result file."""

    model_config = ConfigDict(frozen=True)

    name: str
    status: str
    runtime: float = Field(ge=0, allow_inf_nan=False)


class BenchmarkResult(BaseModel):
    """Scored result for one case in one commit."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Case id copied from the reference table")
    name: str
    runtime: float = Field(ge=0, allow_inf_nan=False, description="Measured runtime (s)")
    best_time: float = Field(allow_inf_nan=False, description="Effective best time (s)")
    score: float = Field(ge=0, le=100)
    status: str


class CommitMetadata(BaseModel):
    """Commit details supplied by the code hosting service."""

    model_config = ConfigDict(frozen=True)

    sha: str
    message: str
    author: str
    author_email: str
    date: datetime
    url: str
    parent_sha: str | None = None

    @field_validator("date")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """Interpret naive timestamps as UTC."""
        return _as_utc(v)

    @classmethod
    def fallback(
        cls,
        sha: str,
        repository: str,
        now: datetime | None = None,
    ) -> "CommitMetadata":
        """Placeholder metadata used when the real lookup fails.

        Args:
            sha: Commit id, the only known field
            repository: ``owner/name`` slug used to build the commit URL
            now: Timestamp to record (default: current UTC time)

        Returns:
            CommitMetadata with ``Unknown`` sentinels
        """
        return cls(
            sha=sha,
            message=UNKNOWN,
            author=UNKNOWN,
            author_email=UNKNOWN,
            date=now or datetime.now(timezone.utc),
            url=f"https://github.com/{repository}/commit/{sha}",
            parent_sha=None,
        )

    @property
    def is_fallback(self) -> bool:
        """Check whether this record carries placeholder values."""
        return self.message == UNKNOWN and self.author == UNKNOWN

    @property
    def summary(self) -> str:
        """First line of the commit message."""
        return self.message.split("\n")[0]


class CommitSnapshot(CommitMetadata):
    """Commit metadata plus the scored benchmarks for that commit."""

    average_score: float = Field(ge=0, le=100)
    benchmarks: tuple[BenchmarkResult, ...] = ()

    @property
    def metadata(self) -> CommitMetadata:
        """Metadata portion of the snapshot."""
        return CommitMetadata(
            sha=self.sha,
            message=self.message,
            author=self.author,
            author_email=self.author_email,
            date=self.date,
            url=self.url,
            parent_sha=self.parent_sha,
        )


class Dataset(BaseModel):
    """Root artifact consumed by the comparison views."""

    model_config = ConfigDict(frozen=True)

    commits: tuple[CommitSnapshot, ...] = ()
    best_times: dict[str, ReferenceEntry] = Field(default_factory=dict)
    generated_at: datetime

    @field_validator("generated_at")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """Interpret naive timestamps as UTC."""
        return _as_utc(v)
