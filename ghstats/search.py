"""Builder for GitHub search query strings.

Terms are rendered as ``<prefix>:<term>`` and joined with ``+`` after a
leading ``q=``, in the fixed category order repo, is, type, state regardless
of the order they were added in.

Terms are not URL-encoded. A term containing ``+``, ``&``, ``#`` or spaces
produces a string GitHub will misread; callers passing such terms must encode
them first.

Examples
--------
>>> str(Query().repo("rust-lang", "rust").type_("pr").is_("merged"))
'q=repo:rust-lang/rust+is:merged+type:pr'
>>> str(Query())
'q='

"""

from __future__ import annotations

import dataclasses
import typing as typ

if typ.TYPE_CHECKING:
    from .repo import Repo


@dataclasses.dataclass(slots=True)
class Query:
    """Accumulates search filter terms; see the module docstring.

    Adding a term never removes or deduplicates existing ones, and rendering
    leaves the builder untouched, so it can be extended and rendered again.
    """

    repos: list[str] = dataclasses.field(default_factory=list)
    is_terms: list[str] = dataclasses.field(default_factory=list)
    type_terms: list[str] = dataclasses.field(default_factory=list)
    state_terms: list[str] = dataclasses.field(default_factory=list)

    @classmethod
    def from_repo(cls, repo: Repo) -> Query:
        """Return a builder seeded with ``repo:<full_name>`` for ``repo``."""
        return cls(repos=[repo.full_name])

    def repo(self, owner: str, name: str) -> Query:
        """Add ``repo:owner/name``."""
        self.repos.append(f"{owner}/{name}")
        return self

    def is_(self, term: str) -> Query:
        """Add ``is:term``."""
        self.is_terms.append(term)
        return self

    def type_(self, term: str) -> Query:
        """Add ``type:term``."""
        self.type_terms.append(term)
        return self

    def state(self, term: str) -> Query:
        """Add ``state:term``."""
        self.state_terms.append(term)
        return self

    def terms(self) -> tuple[str, ...]:
        """Return every term rendered with its prefix, in category order."""
        return (
            *(f"repo:{term}" for term in self.repos),
            *(f"is:{term}" for term in self.is_terms),
            *(f"type:{term}" for term in self.type_terms),
            *(f"state:{term}" for term in self.state_terms),
        )

    def render(self) -> str:
        """Return the ``q=`` query string."""
        return "q=" + "+".join(self.terms())

    def __str__(self) -> str:
        """Render the query string."""
        return self.render()


__all__ = ["Query"]
