"""Tree walker — enumerate a repository's files through the contents API.

Directories are listed round by round from an explicit worklist: every
directory discovered in one round is listed concurrently in the next.  The
per-directory listings are then flattened depth-first, in host listing
order, so the result matches a plain recursive walk.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from code_summarizer.domain.entities import EntryKind, TreeEntry
from code_summarizer.domain.exceptions import RemoteProtocolError
from code_summarizer.domain.ports.repo_host import RepoHost
from code_summarizer.domain.value_objects import RepositoryCoordinate, validate_repo_path
from code_summarizer.services.fan_out import gather_all

logger = logging.getLogger(__name__)

PathPredicate = Callable[[str], bool]


def parse_listing(path: str, payload: Any) -> list[TreeEntry]:
    """Validate a directory listing and convert it to :class:`TreeEntry` values."""
    if not isinstance(payload, list):
        raise RemoteProtocolError(
            f"Invalid response from GitHub API: expected an array of files at '{path or '/'}'"
        )
    entries: list[TreeEntry] = []
    for item in payload:
        if not isinstance(item, dict) or "path" not in item:
            raise RemoteProtocolError(
                f"Invalid response from GitHub API: malformed entry in listing of '{path or '/'}'"
            )
        entries.append(TreeEntry(path=item["path"], kind=str(item.get("type", ""))))
    return entries


class TreeWalker:
    """List files under a root path, descending into directories."""

    def __init__(self, host: RepoHost, concurrency: int = 8) -> None:
        self._host = host
        self._concurrency = max(1, concurrency)

    async def list_files(
        self,
        coordinate: RepositoryCoordinate,
        root: str = "",
        predicate: PathPredicate | None = None,
    ) -> list[str]:
        """Return every file path under *root* accepted by *predicate*.

        With no predicate every file is returned.  Submodules and
        unsupported entry kinds are skipped with a warning.  A failure to
        list any directory aborts the whole walk.
        """
        validate_repo_path(root)
        sem = asyncio.Semaphore(self._concurrency)

        async def _list_one(path: str) -> list[TreeEntry]:
            async with sem:
                payload = await self._host.get_contents(coordinate, path)
            return parse_listing(path, payload)

        listings: dict[str, list[TreeEntry]] = {}
        pending = [root]
        while pending:
            results = await gather_all(*(_list_one(path) for path in pending))
            next_round: list[str] = []
            for path, entries in zip(pending, results):
                listings[path] = entries
                next_round.extend(
                    e.path for e in entries if e.kind == EntryKind.DIRECTORY.value
                )
            pending = next_round

        logger.debug(
            "Listed %d directories in %s", len(listings), coordinate.full_name
        )
        return self._flatten(listings, root, predicate)

    @staticmethod
    def _flatten(
        listings: dict[str, list[TreeEntry]],
        root: str,
        predicate: PathPredicate | None,
    ) -> list[str]:
        """Depth-first, pre-order walk over the collected listings."""
        files: list[str] = []
        stack = [iter(listings[root])]
        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue

            if entry.kind == EntryKind.FILE.value:
                if predicate is None or predicate(entry.path):
                    files.append(entry.path)
            elif entry.kind == EntryKind.DIRECTORY.value:
                stack.append(iter(listings[entry.path]))
            elif entry.kind == EntryKind.SUBMODULE.value:
                logger.warning(
                    "Skipping submodule: %s (submodules are not supported)", entry.path
                )
            elif entry.kind == EntryKind.SYMLINK.value:
                logger.warning("Skipping symlink: %s (symlinks are not followed)", entry.path)
            else:
                logger.warning(
                    "Skipping unsupported type: %s at %s", entry.kind or "unknown", entry.path
                )
        return files
