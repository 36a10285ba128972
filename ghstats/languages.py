"""Per-language byte counts for a repository."""

from __future__ import annotations

import types
import typing as typ

from .fields import FieldKind, get_field, require_object

if typ.TYPE_CHECKING:
    from .client import GitHubRestClient

LanguageMap = types.MappingProxyType[str, int]


def fetch_languages(client: GitHubRestClient, url: str) -> LanguageMap:
    """Return the language breakdown served at ``url``.

    ``url`` is the ``languages_url`` GitHub embeds in repository metadata. A
    repository with no detected source yields an empty map. Each byte count
    is checked individually, so a bad value raises
    :class:`~ghstats.errors.FieldTypeMismatchError` naming its language.
    """
    breakdown = require_object(client.get_json(url), "languages")
    return types.MappingProxyType(
        {
            language: get_field(breakdown, language, FieldKind.UNSIGNED)
            for language in breakdown
        }
    )


__all__ = ["LanguageMap", "fetch_languages"]
