"""Commit lookup by short id and shareable comparison links."""

from urllib.parse import parse_qs, urlencode

from ..storage.models import CommitSnapshot, Dataset

SHORT_SHA_LENGTH = 7


def short_sha(sha: str) -> str:
    """Abbreviated commit id used in links and labels."""
    return sha[:SHORT_SHA_LENGTH]


def find_commit(dataset: Dataset, prefix: str | None) -> CommitSnapshot | None:
    """Return the first commit whose id starts with ``prefix``.

    Commits are searched in dataset order (oldest first). An empty prefix
    matches nothing.
    """
    if not prefix:
        return None
    prefix = prefix.strip().lower()
    for commit in dataset.commits:
        if commit.sha.lower().startswith(prefix):
            return commit
    return None


def share_query(
    left: CommitSnapshot | None,
    right: CommitSnapshot | None,
) -> str:
    """Build the ``left=...&right=...`` query for a comparison view."""
    params = {}
    if left is not None:
        params["left"] = short_sha(left.sha)
    if right is not None:
        params["right"] = short_sha(right.sha)
    return urlencode(params)


def parse_share_query(query: str) -> tuple[str | None, str | None]:
    """Extract the left and right commit prefixes from a query string."""
    params = parse_qs(query.lstrip("?"))
    left = params.get("left", [None])[0]
    right = params.get("right", [None])[0]
    return left, right


def left_candidates(
    dataset: Dataset,
    right: CommitSnapshot | None,
) -> list[CommitSnapshot]:
    """Commits that may serve as the base for ``right`` (strictly older)."""
    if right is None:
        return list(dataset.commits)
    return [c for c in dataset.commits if c.date < right.date]


def right_candidates(
    dataset: Dataset,
    left: CommitSnapshot | None,
) -> list[CommitSnapshot]:
    """Commits that may be compared against ``left`` (strictly newer)."""
    if left is None:
        return list(dataset.commits)
    return [c for c in dataset.commits if c.date > left.date]
