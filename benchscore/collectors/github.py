"""Commit metadata collectors backed by the GitHub REST API."""

import logging
import os
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from typing import Any

import requests
from pydantic import ValidationError

from ..errors import MetadataFetchError
from ..storage.models import CommitMetadata

logger = logging.getLogger(__name__)

DEFAULT_REPOSITORY = "BUPT-a-out/compiler"
GITHUB_API_URL = "https://api.github.com"
USER_AGENT = "benchscore"


class CommitSource:
    """Base class for commit metadata lookups.

    Subclasses implement ``fetch``. Failed lookups never abort a run:
    ``fetch_or_fallback`` and ``fetch_many`` substitute placeholder metadata.
    """

    def __init__(self, repository: str = DEFAULT_REPOSITORY) -> None:
        self.repository = repository

    def fetch(self, sha: str) -> CommitMetadata:
        """Look up metadata for one commit.

        Raises:
            MetadataFetchError: If the lookup fails
        """
        raise NotImplementedError

    def fallback(self, sha: str, now: datetime | None = None) -> CommitMetadata:
        """Placeholder metadata for ``sha``, dated ``now``."""
        return CommitMetadata.fallback(sha, self.repository, now=now)

    def fetch_or_fallback(self, sha: str, now: datetime | None = None) -> CommitMetadata:
        """Look up metadata, substituting the placeholder on failure."""
        try:
            return self.fetch(sha)
        except MetadataFetchError as e:
            logger.warning(f"Using default commit info: {e}")
            return self.fallback(sha, now)

    def fetch_many(
        self,
        shas: Iterable[str],
        workers: int = 8,
    ) -> dict[str, CommitMetadata]:
        """Look up several commits concurrently.

        Args:
            shas: Commit ids
            workers: Maximum concurrent lookups

        Returns:
            Mapping of sha to metadata, one entry per distinct sha.
            Placeholders share one timestamp taken before the lookups start,
            so a stable date sort keeps them in input order.
        """
        unique = list(dict.fromkeys(shas))
        results: dict[str, CommitMetadata] = {}
        if not unique:
            return results

        run_now = datetime.now(timezone.utc)
        with ThreadPoolExecutor(max_workers=max(1, workers)) as ex:
            futures = {ex.submit(self.fetch_or_fallback, sha, run_now): sha for sha in unique}
            for fut in as_completed(futures):
                results[futures[fut]] = fut.result()

        fallbacks = sum(1 for meta in results.values() if meta.is_fallback)
        logger.info(f"Fetched metadata for {len(results)} commits ({fallbacks} defaults)")
        return results


class OfflineCommitSource(CommitSource):
    """Source that never contacts the network; every commit gets placeholders."""

    def fetch(self, sha: str) -> CommitMetadata:
        raise MetadataFetchError(sha, "offline mode")

    def fetch_or_fallback(self, sha: str, now: datetime | None = None) -> CommitMetadata:
        return self.fallback(sha, now)


def parse_commit_payload(sha: str, payload: dict[str, Any]) -> CommitMetadata:
    """Convert a ``GET /repos/{repo}/commits/{sha}`` response body.

    Raises:
        MetadataFetchError: If required fields are missing or invalid
    """
    try:
        commit = payload["commit"]
        author = commit["author"]
        parents = payload.get("parents") or []
        return CommitMetadata(
            sha=sha,
            message=commit["message"],
            author=author["name"],
            author_email=author["email"],
            date=author["date"],
            url=payload["html_url"],
            parent_sha=parents[0].get("sha") if parents else None,
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise MetadataFetchError(sha, f"unexpected response shape ({e!r})") from e
    except ValidationError as e:
        raise MetadataFetchError(sha, f"invalid response ({e.error_count()} errors)") from e


class GitHubCommitSource(CommitSource):
    """Fetch commit details from the GitHub REST API.

    Each request carries its own timeout; a slow or failing commit only
    affects that commit.
    """

    def __init__(
        self,
        repository: str = DEFAULT_REPOSITORY,
        token: str | None = None,
        timeout: float = 10.0,
        session: requests.Session | None = None,
        api_url: str = GITHUB_API_URL,
    ) -> None:
        """Initialize the GitHub collector.

        Args:
            repository: ``owner/name`` slug
            token: API token (default: ``GITHUB_TOKEN`` environment variable)
            timeout: Per-request timeout in seconds
            session: Optional requests session to reuse
            api_url: API base URL
        """
        super().__init__(repository)
        self.token = token if token is not None else os.environ.get("GITHUB_TOKEN")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.api_url = api_url.rstrip("/")

    @property
    def headers(self) -> dict[str, str]:
        """Request headers for the commits endpoint."""
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    def commit_url(self, sha: str) -> str:
        """API URL for one commit."""
        return f"{self.api_url}/repos/{self.repository}/commits/{sha}"

    def fetch(self, sha: str) -> CommitMetadata:
        """Fetch metadata for one commit.

        Raises:
            MetadataFetchError: On network errors, timeouts, non-200
                responses or malformed bodies
        """
        try:
            response = self.session.get(
                self.commit_url(sha),
                headers=self.headers,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise MetadataFetchError(sha, f"timeout after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise MetadataFetchError(sha, str(e)) from e

        if response.status_code != 200:
            raise MetadataFetchError(sha, f"GitHub API returned status {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise MetadataFetchError(sha, "response is not JSON") from e

        return parse_commit_payload(sha, payload)
