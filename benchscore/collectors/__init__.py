"""Collectors for commit metadata."""

from .github import CommitSource, GitHubCommitSource, OfflineCommitSource

__all__ = ["CommitSource", "GitHubCommitSource", "OfflineCommitSource"]
