"""Aggregation pipeline — turn candidate paths into one summarisable blob."""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from code_summarizer.domain.entities import AggregatedBlob, FetchOutcome
from code_summarizer.domain.exceptions import NoMatchingFilesError
from code_summarizer.domain.value_objects import RepositoryCoordinate
from code_summarizer.services.content_fetcher import ContentFetcher
from code_summarizer.services.fan_out import gather_all
from code_summarizer.services.priority_filter import filter_priority, is_priority
from code_summarizer.services.tree_walker import TreeWalker

logger = logging.getLogger(__name__)

SECTION_SEPARATOR = "\n\n"


def format_section(path: str, content: str) -> str:
    """Prefix *content* with a marker naming the file it came from."""
    return f"// File: {path}\n{content}"


class Aggregator:
    """Fetch candidate files concurrently and fold them into an :class:`AggregatedBlob`.

    Parameters
    ----------
    fetcher:
        Reads single files from the repository host.
    walker:
        Enumerates the repository tree for whole-repository mode.
    concurrency:
        Maximum number of file fetches in flight at once.
    sort_paths:
        Sort candidates by path before fetching, for output that does not
        depend on the host's listing order.
    """

    def __init__(
        self,
        fetcher: ContentFetcher,
        walker: TreeWalker,
        concurrency: int = 8,
        sort_paths: bool = False,
    ) -> None:
        self._fetcher = fetcher
        self._walker = walker
        self._concurrency = max(1, concurrency)
        self._sort_paths = sort_paths

    async def aggregate(
        self, coordinate: RepositoryCoordinate, paths: Sequence[str]
    ) -> AggregatedBlob:
        """Fetch *paths* and concatenate their contents in input order."""
        candidates = list(paths)
        if not candidates:
            raise NoMatchingFilesError(
                f"No priority files or folders found in {coordinate.full_name}."
            )
        if self._sort_paths:
            candidates.sort()

        logger.info("Fetching %d files from %s", len(candidates), coordinate.full_name)
        outcomes = await self._fetch_all(coordinate, candidates)
        return self._fold(outcomes)

    async def aggregate_repository(self, coordinate: RepositoryCoordinate) -> AggregatedBlob:
        """Walk the whole repository and aggregate its priority files."""
        logger.info("Fetching all files for %s", coordinate.full_name)
        listed = await self._walker.list_files(coordinate, predicate=is_priority)
        return await self.aggregate(coordinate, filter_priority(listed))

    async def _fetch_all(
        self, coordinate: RepositoryCoordinate, paths: list[str]
    ) -> list[FetchOutcome]:
        """Fetch with a concurrency semaphore; results keep the order of *paths*."""
        sem = asyncio.Semaphore(self._concurrency)

        async def _fetch_one(path: str) -> FetchOutcome:
            async with sem:
                return await self._fetcher.fetch(coordinate, path)

        return await gather_all(*(_fetch_one(path) for path in paths))

    @staticmethod
    def _fold(outcomes: list[FetchOutcome]) -> AggregatedBlob:
        blob = AggregatedBlob()
        sections: list[str] = []
        for outcome in outcomes:
            if outcome.skipped:
                blob.skipped_files.append(outcome.path)
                continue
            sections.append(format_section(outcome.path, outcome.content))
            blob.included_files.append(outcome.path)

        blob.text = SECTION_SEPARATOR.join(sections)
        if blob.skipped_files:
            logger.warning(
                "Skipped %d file(s): %s", len(blob.skipped_files), ", ".join(blob.skipped_files)
            )
        return blob
