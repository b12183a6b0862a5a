"""Port: repository host — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Any, Protocol

from code_summarizer.domain.value_objects import RepositoryCoordinate


class RepoHost(Protocol):
    """Abstract contract for reading a remote repository host."""

    async def get_contents(self, coordinate: RepositoryCoordinate, path: str) -> Any:
        """Return the decoded JSON of the contents endpoint for *path*.

        A file yields a single entry object, a directory yields a list of
        entry objects.  Shape validation is left to the caller.
        """
        ...

    async def search_repositories(
        self, query: str, sort: str = "stars", order: str = "desc"
    ) -> dict[str, Any]:
        """Return the raw repository search response."""
        ...
