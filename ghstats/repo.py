"""Aggregated repository statistics.

:func:`fetch_repo` combines the base repository metadata with the language
breakdown, the issue/pull request counts and the latest release into one
immutable :class:`Repo`. Each piece is a separate request issued in sequence;
the first failure aborts the whole fetch and no partial record is returned.

Examples
--------
>>> from ghstats import GitHubRestClient, GitHubStatsConfig, fetch_repo
>>> with GitHubRestClient(GitHubStatsConfig.from_env()) as client:
...     repo = fetch_repo(client, "rust-lang", "rust")  # doctest: +SKIP
>>> repo.human_size(1)  # doctest: +SKIP
'1.2 GiB'

"""

from __future__ import annotations

import datetime as dt  # noqa: TC003
import typing as typ

import msgspec

from .client import repo_path
from .fields import (
    FieldKind,
    get_field,
    get_optional_string,
    get_timestamp,
    require_object,
)
from .issues import count_issues
from .languages import LanguageMap, fetch_languages
from .logging import get_logger, log_info
from .releases import Release, fetch_latest_release

if typ.TYPE_CHECKING:
    from .client import GitHubRestClient

logger = get_logger(__name__)

_SIZE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB")
_SIZE_BASE = 1024


class Repo(msgspec.Struct, kw_only=True, frozen=True):
    """Statistics of a single GitHub repository.

    Attributes
    ----------
    name : str
        Repository name without the owner.
    full_name : str
        ``owner/name`` identifier.
    created_at, updated_at : datetime
        Creation and last-update timestamps in UTC.
    language : str
        Primary language as reported by GitHub.
    languages : LanguageMap
        Bytes of source per detected language.
    homepage : str, optional
        Project homepage; ``None`` when unset or blank.
    size : float
        Repository size in kilobytes.
    stargazers_count, forks : int
        Star and fork counts.
    open_issues, closed_issues : int
        Plain issues in the counted listing page, by state.
    open_pull_requests, closed_pull_requests : int
        Pull requests in the counted listing page, by state.
    latest_release : Release, optional
        Latest published release; ``None`` when there has never been one.
    fork : bool
        Whether the repository is itself a fork.

    """

    name: str
    full_name: str
    created_at: dt.datetime
    updated_at: dt.datetime
    language: str
    languages: LanguageMap
    homepage: str | None
    size: float
    stargazers_count: int
    forks: int
    open_issues: int
    closed_issues: int
    open_pull_requests: int
    closed_pull_requests: int
    latest_release: Release | None
    fork: bool

    @classmethod
    def fetch(cls, client: GitHubRestClient, owner: str, name: str) -> Repo:
        """Fetch and assemble a repository record; see :func:`fetch_repo`."""
        return fetch_repo(client, owner, name)

    @property
    def total_issues(self) -> int:
        """Return the number of plain issues counted."""
        return self.open_issues + self.closed_issues

    @property
    def total_pull_requests(self) -> int:
        """Return the number of pull requests counted."""
        return self.open_pull_requests + self.closed_pull_requests

    def language_share(self, language: str) -> float:
        """Return the fraction of source bytes written in ``language``."""
        total = sum(self.languages.values())
        if not total:
            return 0.0
        return self.languages.get(language, 0) / total

    def human_size(self, precision: int = 2) -> str:
        """Return the repository size as a base-1024 magnitude string.

        ``size`` is in kilobytes, so 1024.0 renders as ``"1.00 MiB"`` with the
        default precision. The unit is picked after rounding, so a value that
        rounds up to 1024 moves to the next unit.

        Raises
        ------
        ValueError
            If ``precision`` is negative.

        """
        if precision < 0:
            msg = f"precision must be non-negative, got: {precision}"
            raise ValueError(msg)
        value = self.size * _SIZE_BASE
        unit_index = 0
        while (
            round(value, precision) >= _SIZE_BASE
            and unit_index < len(_SIZE_UNITS) - 1
        ):
            value /= _SIZE_BASE
            unit_index += 1
        return f"{value:.{precision}f} {_SIZE_UNITS[unit_index]}"


def fetch_repo(client: GitHubRestClient, owner: str, name: str) -> Repo:
    """Fetch every statistic for ``owner/name`` and assemble a :class:`Repo`.

    Parameters
    ----------
    client
        REST client used for all four requests.
    owner, name
        Repository identifier. Not validated locally.

    Returns
    -------
    Repo
        The assembled record.

    Raises
    ------
    TransportError
        If any request fails, including a 404 for the repository itself.
    DecodeError
        If any body is not valid JSON.
    FieldMissingError, FieldTypeMismatchError
        If any required field is absent or of the wrong type.

    """
    log_info(logger, "Fetching repository statistics for %s/%s", owner, name)
    metadata = require_object(client.get_json(repo_path(owner, name)), "repository")

    repo_name = get_field(metadata, "name", FieldKind.STRING)
    full_name = get_field(metadata, "full_name", FieldKind.STRING)
    created_at = get_timestamp(metadata, "created_at")
    updated_at = get_timestamp(metadata, "updated_at")
    language = get_field(metadata, "language", FieldKind.STRING)
    homepage = get_optional_string(metadata, "homepage")
    size = get_field(metadata, "size", FieldKind.FLOAT)
    stargazers_count = get_field(metadata, "stargazers_count", FieldKind.UNSIGNED)
    forks = get_field(metadata, "forks", FieldKind.UNSIGNED)
    fork = get_field(metadata, "fork", FieldKind.BOOLEAN)
    languages_url = get_field(metadata, "languages_url", FieldKind.STRING)

    languages = fetch_languages(client, languages_url)
    issue_counts = count_issues(client, owner, name)
    latest_release = fetch_latest_release(client, owner, name)

    repo = Repo(
        name=repo_name,
        full_name=full_name,
        created_at=created_at,
        updated_at=updated_at,
        language=language,
        languages=languages,
        homepage=homepage,
        size=size,
        stargazers_count=stargazers_count,
        forks=forks,
        open_issues=issue_counts.open_issues,
        closed_issues=issue_counts.closed_issues,
        open_pull_requests=issue_counts.open_pull_requests,
        closed_pull_requests=issue_counts.closed_pull_requests,
        latest_release=latest_release,
        fork=fork,
    )
    log_info(
        logger,
        "Fetched %s: %d stars, %d issues, %d pull requests",
        repo.full_name,
        repo.stargazers_count,
        repo.total_issues,
        repo.total_pull_requests,
    )
    return repo


__all__ = ["Repo", "fetch_repo"]
