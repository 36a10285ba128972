"""Configuration for the GitHub REST client.

Usage
-----
Create a configuration with defaults:

>>> config = GitHubStatsConfig()
>>> config.api_root
'https://api.github.com'

Or load from environment variables:

>>> import os
>>> os.environ["GHSTATS_API_ROOT"] = "https://github.example.com/api/v3"
>>> GitHubStatsConfig.from_env().api_root
'https://github.example.com/api/v3'

"""

from __future__ import annotations

import dataclasses
import os

from .errors import GitHubStatsConfigError

# Default configuration values - single source of truth
_DEFAULT_API_ROOT = "https://api.github.com"
_DEFAULT_TIMEOUT_S = 20.0
_DEFAULT_USER_AGENT = "ghstats/0.1"
_DEFAULT_API_VERSION = "2022-11-28"


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubStatsConfig:
    """Configuration for the GitHub REST API client.

    Attributes
    ----------
    api_root
        Base URL that relative endpoint paths are resolved against.
    token
        Optional bearer token. Unauthenticated requests work against public
        repositories but are heavily rate limited by GitHub.
    timeout_s
        Request timeout in seconds.
    user_agent
        Value of the ``User-Agent`` header, which GitHub requires.
    api_version
        Value of the ``X-GitHub-Api-Version`` header.

    """

    api_root: str = _DEFAULT_API_ROOT
    token: str | None = None
    timeout_s: float = _DEFAULT_TIMEOUT_S
    user_agent: str = _DEFAULT_USER_AGENT
    api_version: str = _DEFAULT_API_VERSION

    def __post_init__(self) -> None:
        """Reject a blank API root."""
        if not self.api_root.strip():
            raise GitHubStatsConfigError.empty_api_root()

    @staticmethod
    def _parse_timeout_from_env() -> float:
        """Read ``GHSTATS_TIMEOUT_S``, falling back to the default."""
        raw = os.environ.get("GHSTATS_TIMEOUT_S", "")
        if not raw.strip():
            return _DEFAULT_TIMEOUT_S
        try:
            value = float(raw)
        except ValueError as exc:
            raise GitHubStatsConfigError.invalid_timeout(raw) from exc
        if value <= 0:
            raise GitHubStatsConfigError.invalid_timeout(raw)
        return value

    @classmethod
    def from_env(cls) -> GitHubStatsConfig:
        """Create configuration from environment variables.

        Reads the following environment variables:

        - ``GHSTATS_GITHUB_TOKEN``: Optional bearer token. Blank means
          unauthenticated.
        - ``GHSTATS_API_ROOT``: API base URL, e.g. for GitHub Enterprise.
        - ``GHSTATS_TIMEOUT_S``: Request timeout in seconds. Must be a
          positive number.

        Returns
        -------
        GitHubStatsConfig
            Configuration instance with values from environment or defaults.

        Raises
        ------
        GitHubStatsConfigError
            If GHSTATS_TIMEOUT_S is not a positive number.

        """
        token = os.environ.get("GHSTATS_GITHUB_TOKEN", "").strip() or None
        api_root = (
            os.environ.get("GHSTATS_API_ROOT", "").strip() or _DEFAULT_API_ROOT
        )
        return cls(
            api_root=api_root,
            token=token,
            timeout_s=cls._parse_timeout_from_env(),
        )
