"""Synchronous GitHub REST client used by the statistics fetchers."""

from __future__ import annotations

import re
import typing as typ

import httpx
import msgspec

from .errors import (
    DecodeError,
    FieldMissingError,
    FieldTypeMismatchError,
    NotFoundError,
    TransportError,
)
from .logging import get_logger, log_debug

if typ.TYPE_CHECKING:
    from types import TracebackType

    from .config import GitHubStatsConfig

logger = get_logger(__name__)

_HTTP_ERROR_STATUS_THRESHOLD = 400
_HTTP_NOT_FOUND = 404

_MISSING_FIELD_RE = re.compile(r"missing required field `(?P<field>[^`]+)`")
_EXPECTED_RE = re.compile(r"Expected `(?P<expected>[^`]+)`")
_PATH_RE = re.compile(r"at `\$\.?(?P<path>[^`]*)`")


def repo_path(owner: str, name: str, *suffix: str) -> str:
    """Return the relative API path for a repository or one of its resources.

    Owner and name are not validated; GitHub rejects bad identifiers itself.

    >>> repo_path("rust-lang", "rust", "releases", "latest")
    'repos/rust-lang/rust/releases/latest'

    """
    return "/".join(("repos", owner, name, *suffix))


def _field_error_from_validation(exc: msgspec.ValidationError) -> Exception:
    """Translate a msgspec validation error into a field error.

    The field is taken from msgspec's error text: a struct attribute name such
    as ``tag_name``, a dotted path for nested attributes, or ``$`` when the
    whole document has the wrong shape. Array and mapping positions appear as
    msgspec renders them (``[0]``, ``[...]``) and do not name a mapping key.
    """
    message = str(exc)
    path_match = _PATH_RE.search(message)
    path = path_match.group("path") if path_match else ""

    missing = _MISSING_FIELD_RE.search(message)
    if missing is not None:
        field = missing.group("field")
        if path:
            field = f"{path}.{field}"
        return FieldMissingError.missing(field, "present")

    expected_match = _EXPECTED_RE.search(message)
    expected = expected_match.group("expected") if expected_match else "valid value"
    return FieldTypeMismatchError.from_message(path or "$", expected, message)


class GitHubRestClient:
    """Issue GET requests against the GitHub REST API and decode the JSON.

    Parameters
    ----------
    config
        API root, credentials and timeouts.
    http_client
        Optional ``httpx.Client`` for testing. If not provided, the instance
        creates and owns its own client.

    Examples
    --------
    >>> from ghstats import GitHubRestClient, GitHubStatsConfig
    >>> with GitHubRestClient(GitHubStatsConfig()) as client:
    ...     payload = client.get_json("repos/rust-lang/rust")  # doctest: +SKIP

    """

    def __init__(
        self,
        config: GitHubStatsConfig,
        *,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialise the client with the provided API configuration."""
        self._config = config
        self._headers = self._default_headers(config)
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=config.timeout_s)

    @staticmethod
    def _default_headers(config: GitHubStatsConfig) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": config.user_agent,
            "X-GitHub-Api-Version": config.api_version,
        }
        if config.token:
            headers["Authorization"] = f"Bearer {config.token}"
        return headers

    @property
    def config(self) -> GitHubStatsConfig:
        """Read-only access to the client configuration."""
        return self._config

    def close(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> GitHubRestClient:
        """Return the client for use as a context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close owned HTTP resources on context exit."""
        self.close()

    def resolve(self, url: str) -> str:
        """Return ``url`` unchanged if absolute, else joined to the API root."""
        if url.startswith(("http://", "https://")):
            return url
        return f"{self._config.api_root.rstrip('/')}/{url.lstrip('/')}"

    def get(self, url: str, *, params: dict[str, str] | None = None) -> httpx.Response:
        """Issue a single GET and return the successful response.

        Raises
        ------
        NotFoundError
            If GitHub answers 404.
        TransportError
            On timeouts, network failures and any other HTTP error status.

        """
        target = self.resolve(url)
        log_debug(logger, "GET %s", target)
        try:
            response = self._client.get(
                target, params=params, headers=self._headers
            )
        except httpx.TimeoutException as exc:
            raise TransportError.timeout(target) from exc
        except httpx.RequestError as exc:
            raise TransportError.network_error(target, str(exc)) from exc

        if response.status_code == _HTTP_NOT_FOUND:
            raise NotFoundError.for_url(target)
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise TransportError.http_error(target, response.status_code)
        return response

    @typ.overload
    def get_json(
        self, url: str, *, params: dict[str, str] | None = None
    ) -> typ.Any: ...
    @typ.overload
    def get_json[T](
        self, url: str, *, into: type[T], params: dict[str, str] | None = None
    ) -> T: ...
    def get_json(
        self,
        url: str,
        *,
        into: typ.Any = typ.Any,
        params: dict[str, str] | None = None,
    ) -> typ.Any:
        """GET ``url`` and decode its JSON body, optionally into ``into``.

        Parameters
        ----------
        url
            Absolute URL, or a path relative to the configured API root.
        into
            Target type for msgspec's typed decode. Defaults to untyped JSON.
        params
            Optional query-string parameters.

        Raises
        ------
        DecodeError
            If the body is not valid JSON.
        FieldMissingError
            If typed decoding finds a required field absent.
        FieldTypeMismatchError
            If typed decoding finds a field of the wrong type.

        """
        response = self.get(url, params=params)
        try:
            return msgspec.json.decode(response.content, type=into)
        except msgspec.ValidationError as exc:
            raise _field_error_from_validation(exc) from exc
        except msgspec.DecodeError as exc:
            raise DecodeError.invalid_json(str(response.url), response.text) from exc


__all__ = ["GitHubRestClient", "repo_path"]
