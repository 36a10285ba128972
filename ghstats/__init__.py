"""Typed GitHub repository statistics client."""

from __future__ import annotations

from .client import GitHubRestClient, repo_path
from .config import GitHubStatsConfig
from .errors import (
    DecodeError,
    FieldError,
    FieldMissingError,
    FieldTypeMismatchError,
    GitHubStatsConfigError,
    GitHubStatsError,
    NotFoundError,
    TransportError,
)
from .fields import FieldKind
from .issues import IssueCounts, count_issues
from .languages import LanguageMap, fetch_languages
from .releases import Release, fetch_latest_release
from .repo import Repo, fetch_repo
from .search import Query

__all__ = [
    "DecodeError",
    "FieldError",
    "FieldKind",
    "FieldMissingError",
    "FieldTypeMismatchError",
    "GitHubRestClient",
    "GitHubStatsConfig",
    "GitHubStatsConfigError",
    "GitHubStatsError",
    "IssueCounts",
    "LanguageMap",
    "NotFoundError",
    "Query",
    "Release",
    "Repo",
    "TransportError",
    "count_issues",
    "fetch_languages",
    "fetch_latest_release",
    "fetch_repo",
    "repo_path",
]
