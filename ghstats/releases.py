"""Latest release lookup."""

from __future__ import annotations

import datetime as dt  # noqa: TC003
import typing as typ

import msgspec

from .client import repo_path
from .errors import NotFoundError

if typ.TYPE_CHECKING:
    from .client import GitHubRestClient


class Release(msgspec.Struct, kw_only=True, frozen=True):
    """A published release of a repository.

    Attributes
    ----------
    tag_name : str
        Git tag the release points at.
    name : str, optional
        Release title; GitHub allows it to be empty.
    body : str, optional
        Release notes in Markdown.
    published_at : datetime
        When the release was published.
    created_at : datetime, optional
        When the release object was created.
    html_url : str, optional
        Browser URL of the release page.
    draft : bool
        Whether the release is a draft.
    prerelease : bool
        Whether the release is marked as a pre-release.

    """

    tag_name: str
    published_at: dt.datetime
    created_at: dt.datetime | None = None
    html_url: str | None = None
    name: str | None = None
    body: str | None = None
    draft: bool = False
    prerelease: bool = False


def fetch_latest_release(
    client: GitHubRestClient, owner: str, name: str
) -> Release | None:
    """Return the repository's latest release, or ``None`` if it has none.

    GitHub answers 404 both for repositories without releases and for
    repositories that do not exist; the base metadata request is what
    distinguishes the two.
    """
    try:
        return client.get_json(
            repo_path(owner, name, "releases", "latest"), into=Release
        )
    except NotFoundError:
        return None


__all__ = ["Release", "fetch_latest_release"]
