"""Open/closed counts for a repository's issues and pull requests."""

from __future__ import annotations

import typing as typ

from .client import repo_path
from .errors import FieldTypeMismatchError
from .fields import FieldKind, get_field, require_object

if typ.TYPE_CHECKING:
    from .client import GitHubRestClient

# GitHub lists pull requests through the issues endpoint and marks them with
# this key.
_PULL_REQUEST_MARKER = "pull_request"

# Single page only; GitHub caps per_page at 100 and pagination is not followed.
_LISTING_PARAMS = {"state": "all", "per_page": "100"}


class IssueCounts(typ.NamedTuple):
    """Issue and pull request counts partitioning one issue listing."""

    open_issues: int
    closed_issues: int
    open_pull_requests: int
    closed_pull_requests: int

    @property
    def total(self) -> int:
        """Return the number of listing entries the counts were built from."""
        return sum(self)


def _classify(entry: object, index: int) -> tuple[bool, bool]:
    """Return ``(is_pull_request, is_open)`` for one listing entry."""
    item = require_object(entry, f"[{index}]")
    state = get_field(item, "state", FieldKind.STRING)
    if state not in {"open", "closed"}:
        raise FieldTypeMismatchError.mismatch("state", "'open' or 'closed'", state)
    return (_PULL_REQUEST_MARKER in item, state == "open")


def tally_issues(entries: typ.Iterable[object]) -> IssueCounts:
    """Partition listing entries into the four open/closed issue/PR counts.

    Examples
    --------
    >>> counts = tally_issues([
    ...     {"state": "open"},
    ...     {"state": "closed", "pull_request": {}},
    ... ])
    >>> counts.open_issues, counts.closed_pull_requests
    (1, 1)

    """
    counts = {
        (False, True): 0,
        (False, False): 0,
        (True, True): 0,
        (True, False): 0,
    }
    for index, entry in enumerate(entries):
        counts[_classify(entry, index)] += 1
    return IssueCounts(
        open_issues=counts[(False, True)],
        closed_issues=counts[(False, False)],
        open_pull_requests=counts[(True, True)],
        closed_pull_requests=counts[(True, False)],
    )


def count_issues(client: GitHubRestClient, owner: str, name: str) -> IssueCounts:
    """Fetch one page of the repository's issue listing and count it.

    Only the first page (up to 100 entries) is counted; larger repositories
    are undercounted.

    Raises
    ------
    TransportError
        If the listing cannot be fetched.
    DecodeError
        If the body is not valid JSON.
    FieldMissingError, FieldTypeMismatchError
        If the body is not an array of entries with a valid ``state``.

    """
    listing = client.get_json(
        repo_path(owner, name, "issues"), params=dict(_LISTING_PARAMS)
    )
    if not isinstance(listing, list):
        raise FieldTypeMismatchError.mismatch("issues", "array", listing)
    return tally_issues(listing)


__all__ = ["IssueCounts", "count_issues", "tally_issues"]
