"""Summarize-code use case — the three input modes of the service.

This is the single entry point for the business logic.  It depends only on
the two ports (:class:`RepoHost` and :class:`LlmGateway`) through the core
services.  The interface layer injects concrete adapters at runtime.
"""

from __future__ import annotations

import logging
from typing import Any

from code_summarizer.domain.entities import AggregatedBlob, SummaryReport
from code_summarizer.domain.exceptions import EmptyContentError, InvalidArgumentError
from code_summarizer.domain.ports.repo_host import RepoHost
from code_summarizer.domain.value_objects import RepositoryCoordinate
from code_summarizer.services.aggregator import Aggregator
from code_summarizer.services.search_query import SearchFilters, build_search_query
from code_summarizer.services.summarizer import Summarizer

logger = logging.getLogger(__name__)


class SummarizeCodeUseCase:
    """Compose aggregation and summarisation for each input mode."""

    def __init__(
        self,
        aggregator: Aggregator,
        summarizer: Summarizer,
        repo_host: RepoHost,
    ) -> None:
        self._aggregator = aggregator
        self._summarizer = summarizer
        self._host = repo_host

    # ── Summaries ───────────────────────────────────────────────────────

    async def summarize_code_block(self, code: str) -> SummaryReport:
        """Summarise a pasted code block; no repository access."""
        if not code or not code.strip():
            raise InvalidArgumentError("Provide a code block to summarise.")
        summary = await self._summarizer.summarize(code)
        return SummaryReport(summary=summary)

    async def summarize_file(
        self, coordinate: RepositoryCoordinate, path: str
    ) -> SummaryReport:
        """Summarise a single repository file."""
        if not path or not path.strip():
            raise InvalidArgumentError("A file path is required.")
        logger.info("Summarising %s/%s", coordinate.full_name, path)
        blob = await self._aggregator.aggregate(coordinate, [path.strip()])
        return await self._summarize_blob(blob)

    async def summarize_priority_files(
        self, coordinate: RepositoryCoordinate
    ) -> SummaryReport:
        """Summarise every priority file of a repository."""
        logger.info("Summarising priority files of %s", coordinate.full_name)
        blob = await self._aggregator.aggregate_repository(coordinate)
        return await self._summarize_blob(blob)

    async def _summarize_blob(self, blob: AggregatedBlob) -> SummaryReport:
        if not blob.text:
            raise EmptyContentError(
                "The requested files are empty or their content could not be "
                "retrieved from GitHub.",
                skipped_files=blob.skipped_files,
            )
        summary = await self._summarizer.summarize(blob.text)
        return SummaryReport(summary=summary, skipped_files=list(blob.skipped_files))

    # ── Search ──────────────────────────────────────────────────────────

    async def search_repositories(self, filters: SearchFilters) -> dict[str, Any]:
        """Run a repository search and return the host's response unchanged."""
        query = build_search_query(filters)
        logger.info("Searching repositories: %s", query)
        return await self._host.search_repositories(query, sort=filters.sort or "stars")
