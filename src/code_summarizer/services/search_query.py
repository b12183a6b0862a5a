"""Repository search — translate filter options into host query syntax."""

from __future__ import annotations

from dataclasses import dataclass

from code_summarizer.domain.exceptions import InvalidArgumentError


@dataclass(frozen=True, slots=True)
class SearchFilters:
    """Human-facing search options, as sent by the search form."""

    query: str
    min_stars: int | None = None
    language: str | None = None
    license: str | None = None
    has_issues: bool = False
    has_wiki: bool = False
    has_good_first_issues: bool = False
    is_open_source: bool = False
    sort: str = "stars"


def build_search_query(filters: SearchFilters) -> str:
    """Return the ``q`` parameter for the repository search endpoint."""
    query = filters.query.strip()
    if not query:
        raise InvalidArgumentError("Search query is required.")

    parts = [query]
    if filters.min_stars is not None:
        parts.append(f"stars:>={filters.min_stars}")
    if filters.language:
        parts.append(f"language:{filters.language}")
    if filters.license:
        parts.append(f"license:{filters.license}")
    if filters.has_issues:
        parts.append("has:issues")
    if filters.has_wiki:
        parts.append("has:wiki")
    if filters.has_good_first_issues:
        parts.append("label:good-first-issue")
    if filters.is_open_source:
        parts.append("topic:open-source")
    return " ".join(parts)
