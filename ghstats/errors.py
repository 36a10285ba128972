"""Errors raised while fetching and decoding GitHub repository statistics."""

from __future__ import annotations


class GitHubStatsError(Exception):
    """Base exception for all ghstats errors.

    This provides a single catch point for callers that do not care which
    stage of a fetch failed.
    """


class TransportError(GitHubStatsError):
    """Raised when an endpoint cannot be reached or answers with an error.

    Attributes
    ----------
    url
        The URL that was requested, if known.
    status_code
        HTTP status code from the response, if one was received.

    """

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialise with a message plus the request URL and status code."""
        self.url = url
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(cls, url: str, status_code: int) -> TransportError:
        """Return an error for non-2xx HTTP responses."""
        return cls(
            f"GitHub API HTTP {status_code} for {url}",
            url=url,
            status_code=status_code,
        )

    @classmethod
    def timeout(cls, url: str) -> TransportError:
        """Return an error for a request that timed out."""
        return cls(f"GitHub API request timed out: {url}", url=url)

    @classmethod
    def network_error(cls, url: str, detail: str) -> TransportError:
        """Return an error for DNS, connection or TLS failures."""
        return cls(f"GitHub API network error for {url}: {detail}", url=url)


class NotFoundError(TransportError):
    """Raised when GitHub answers 404 for a resource.

    Only the latest-release lookup treats this as a valid outcome; every other
    caller sees it as an ordinary transport failure.
    """

    @classmethod
    def for_url(cls, url: str) -> NotFoundError:
        """Return an error for a resource GitHub reports as absent."""
        return cls(
            f"GitHub API resource not found: {url}", url=url, status_code=404
        )


# Body preview length for decode error messages
_BODY_PREVIEW_LIMIT = 100


class DecodeError(GitHubStatsError):
    """Raised when a response body is not valid JSON."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        """Initialise with a message and the URL whose body failed to decode."""
        self.url = url
        super().__init__(message)

    @classmethod
    def invalid_json(cls, url: str, body: str) -> DecodeError:
        """Return an error carrying a truncated preview of the bad body."""
        if len(body) > _BODY_PREVIEW_LIMIT:
            preview = body[:_BODY_PREVIEW_LIMIT] + "..."
        else:
            preview = body
        return cls(f"Invalid JSON from {url}: {preview}", url=url)


class FieldError(GitHubStatsError):
    """Base for errors about a single field of a decoded JSON document.

    Attributes
    ----------
    field
        Name of the offending field. Errors from typed msgspec decoding carry
        the msgspec path instead, e.g. ``author.login`` or ``$``.
    expected
        Description of the value kind that was expected.

    """

    def __init__(self, message: str, *, field: str, expected: str) -> None:
        """Initialise with a message, the field name and the expected kind."""
        self.field = field
        self.expected = expected
        super().__init__(message)


class FieldMissingError(FieldError):
    """Raised when a required field is absent from a JSON object."""

    @classmethod
    def missing(cls, field: str, expected: str) -> FieldMissingError:
        """Return an error for an absent required field."""
        return cls(
            f"GitHub response missing expected field: {field} ({expected})",
            field=field,
            expected=expected,
        )


class FieldTypeMismatchError(FieldError):
    """Raised when a field is present but holds the wrong kind of value."""

    @classmethod
    def mismatch(
        cls, field: str, expected: str, value: object
    ) -> FieldTypeMismatchError:
        """Return an error for a field holding an unexpected value."""
        return cls(
            f"GitHub response field {field} expected {expected}, "
            f"got {type(value).__name__}: {value!r}",
            field=field,
            expected=expected,
        )

    @classmethod
    def from_message(
        cls, field: str, expected: str, detail: str
    ) -> FieldTypeMismatchError:
        """Return an error built from a decoder's own description."""
        return cls(
            f"GitHub response field {field} expected {expected}: {detail}",
            field=field,
            expected=expected,
        )


class GitHubStatsConfigError(GitHubStatsError):
    """Raised when client configuration is invalid."""

    @classmethod
    def invalid_timeout(cls, value: str) -> GitHubStatsConfigError:
        """Return an error for a timeout that is not a positive number."""
        return cls(f"GHSTATS_TIMEOUT_S must be a positive number, got: {value!r}")

    @classmethod
    def empty_api_root(cls) -> GitHubStatsConfigError:
        """Return an error when the API root URL is blank."""
        return cls("GitHub API root URL must be non-empty")
