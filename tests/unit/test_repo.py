"""Unit tests for repository statistics aggregation."""

from __future__ import annotations

import datetime as dt

import msgspec
import pytest

from ghstats import Repo, fetch_repo
from ghstats.errors import (
    DecodeError,
    FieldMissingError,
    FieldTypeMismatchError,
    NotFoundError,
    TransportError,
)
from tests.helpers.github_api import (
    ISSUES_PATH,
    LANGUAGES_PATH,
    NAME,
    OWNER,
    RELEASE_PATH,
    REPO_PATH,
    full_repo_api,
    issue_entry,
    release_payload,
    repo_metadata,
)

_HTTP_ERROR_STATUS = 500


def _issues() -> list[dict[str, object]]:
    return [
        issue_entry(1, state="open"),
        issue_entry(2, state="closed"),
        issue_entry(3, state="closed"),
        issue_entry(4, state="open", pull_request=True),
        issue_entry(5, state="closed", pull_request=True),
    ]


def test_fetch_repo_assembles_every_statistic() -> None:
    """All four endpoints are combined into one record."""
    fake = full_repo_api(issues=_issues(), release=release_payload())

    with fake.client() as client:
        repo = fetch_repo(client, OWNER, NAME)

    assert repo.name == NAME
    assert repo.full_name == f"{OWNER}/{NAME}"
    assert repo.created_at == dt.datetime(2011, 1, 26, 19, 1, 12, tzinfo=dt.UTC)
    assert repo.updated_at == dt.datetime(2024, 5, 1, 8, 30, tzinfo=dt.UTC)
    assert repo.language == "Python"
    assert dict(repo.languages) == {"Python": 3000, "Rust": 1000}
    assert repo.homepage == "https://reef.example.test"
    assert repo.size == 2048.0
    assert isinstance(repo.size, float), "Expected size stored as float."
    assert repo.stargazers_count == 80
    assert repo.forks == 9
    assert repo.fork is False
    assert (
        repo.open_issues,
        repo.closed_issues,
        repo.open_pull_requests,
        repo.closed_pull_requests,
    ) == (1, 2, 1, 1)
    assert repo.latest_release is not None
    assert repo.latest_release.tag_name == "v1.2.0"
    assert fake.paths() == [REPO_PATH, LANGUAGES_PATH, ISSUES_PATH, RELEASE_PATH]


def test_repo_fetch_classmethod_matches_function() -> None:
    """Repo.fetch delegates to fetch_repo."""
    fake = full_repo_api(release=release_payload())

    with fake.client() as client:
        repo = Repo.fetch(client, OWNER, NAME)

    assert repo.full_name == f"{OWNER}/{NAME}"


def test_counts_partition_the_listing() -> None:
    """Issue and pull request totals add up to the listing length."""
    fake = full_repo_api(issues=_issues())

    with fake.client() as client:
        repo = fetch_repo(client, OWNER, NAME)

    assert repo.total_issues == 3
    assert repo.total_pull_requests == 2
    assert repo.total_issues + repo.total_pull_requests == len(_issues())


def test_missing_release_is_not_an_error() -> None:
    """Repositories without releases get ``latest_release=None``."""
    with full_repo_api().client() as client:
        repo = fetch_repo(client, OWNER, NAME)

    assert repo.latest_release is None


def test_empty_language_breakdown_still_succeeds() -> None:
    """An empty languages object yields an empty map."""
    fake = full_repo_api(languages={})

    with fake.client() as client:
        repo = fetch_repo(client, OWNER, NAME)

    assert len(repo.languages) == 0
    assert repo.language_share("Python") == 0.0


@pytest.mark.parametrize("homepage", ["", None])
def test_blank_homepage_is_unset(homepage: str | None) -> None:
    """Empty and null homepages both read as unset."""
    fake = full_repo_api(metadata=repo_metadata(homepage=homepage))

    with fake.client() as client:
        repo = fetch_repo(client, OWNER, NAME)

    assert repo.homepage is None


def test_absent_homepage_is_unset() -> None:
    """A metadata payload without ``homepage`` is accepted."""
    metadata = repo_metadata()
    del metadata["homepage"]
    fake = full_repo_api(metadata=metadata)

    with fake.client() as client:
        repo = fetch_repo(client, OWNER, NAME)

    assert repo.homepage is None


@pytest.mark.parametrize(
    "field",
    [
        "name",
        "full_name",
        "created_at",
        "updated_at",
        "language",
        "size",
        "stargazers_count",
        "forks",
        "fork",
        "languages_url",
    ],
)
def test_missing_required_field_aborts(field: str) -> None:
    """Any missing required field fails the whole fetch."""
    metadata = repo_metadata()
    del metadata[field]
    fake = full_repo_api(metadata=metadata)

    with fake.client() as client, pytest.raises(FieldMissingError) as excinfo:
        fetch_repo(client, OWNER, NAME)

    assert excinfo.value.field == field, f"Expected error to name {field}."
    assert fake.paths() == [REPO_PATH], "Expected no sub-fetches after failure."


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("stargazers_count", None),
        ("stargazers_count", -3),
        ("size", "big"),
        ("fork", "no"),
        ("language", 7),
        ("language", None),
    ],
)
def test_mistyped_field_aborts(field: str, value: object) -> None:
    """Null or wrongly typed required fields fail the whole fetch."""
    fake = full_repo_api(metadata=repo_metadata(**{field: value}))

    with fake.client() as client, pytest.raises(FieldTypeMismatchError) as excinfo:
        fetch_repo(client, OWNER, NAME)

    assert excinfo.value.field == field


def test_unknown_repository_raises_not_found() -> None:
    """A 404 for the repository itself is surfaced, not swallowed."""
    fake = full_repo_api()
    del fake.routes[REPO_PATH]

    with fake.client() as client, pytest.raises(NotFoundError):
        fetch_repo(client, OWNER, NAME)


@pytest.mark.parametrize("failing_path", [LANGUAGES_PATH, ISSUES_PATH, RELEASE_PATH])
def test_sub_fetch_failure_aborts(failing_path: str) -> None:
    """A server error on any sub-request aborts the aggregation."""
    fake = full_repo_api(release=release_payload())
    fake.route(failing_path, {}, status=_HTTP_ERROR_STATUS)

    with fake.client() as client, pytest.raises(TransportError) as excinfo:
        fetch_repo(client, OWNER, NAME)

    assert excinfo.value.status_code == _HTTP_ERROR_STATUS
    assert fake.paths()[-1] == failing_path, "Expected no requests after failure."


def test_invalid_metadata_json_raises_decode_error() -> None:
    """A metadata body that is not JSON raises DecodeError."""
    fake = full_repo_api()
    fake.route(REPO_PATH, b"not json")

    with fake.client() as client, pytest.raises(DecodeError):
        fetch_repo(client, OWNER, NAME)


def _repo_with(**changes: object) -> Repo:
    with full_repo_api().client() as client:
        repo = fetch_repo(client, OWNER, NAME)
    return msgspec.structs.replace(repo, **changes)


@pytest.mark.parametrize(
    ("size_kb", "precision", "expected"),
    [
        (1024.0, 2, "1.00 MiB"),
        (1.0, 2, "1.00 KiB"),
        (0.5, 0, "512 B"),
        (1536.0, 1, "1.5 MiB"),
        (1024.0 * 1024 * 3, 3, "3.000 GiB"),
        (0.0, 2, "0.00 B"),
        (1023.999, 2, "1.00 MiB"),
        (1023.999, 3, "1023.999 KiB"),
        (1024.0 * 1024 - 0.001, 2, "1.00 GiB"),
    ],
)
def test_human_size(size_kb: float, precision: int, expected: str) -> None:
    """Kilobyte sizes render in base-1024 units at the given precision."""
    assert _repo_with(size=size_kb).human_size(precision) == expected


def test_language_share() -> None:
    """Language share is the fraction of total language bytes."""
    repo = _repo_with()

    assert repo.language_share("Python") == pytest.approx(0.75)
    assert repo.language_share("Go") == 0.0


def test_repo_is_immutable() -> None:
    """Assembled records cannot be mutated."""
    repo = _repo_with()

    with pytest.raises(AttributeError):
        repo.forks = 10  # type: ignore[misc]


def test_language_map_is_frozen_on_repo() -> None:
    """The language map on a record is read-only."""
    repo = _repo_with()

    with pytest.raises(TypeError):
        repo.languages["Go"] = 1  # type: ignore[index]


def test_human_size_rejects_negative_precision() -> None:
    """Negative precision is rejected with a message naming the argument."""
    repo = _repo_with()

    with pytest.raises(ValueError, match="precision"):
        repo.human_size(-1)
