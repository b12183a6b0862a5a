"""Content fetcher — read one file from the repository host.

Every response shape the contents endpoint can return is reduced to a
:class:`ResponseShape` and then resolved through ``_OUTCOMES``: either a
:class:`FetchOutcome` (content, or a recoverable skip) or a raised
:class:`RemoteProtocolError`.  Transport failures are raised by the host
adapter as :class:`RemoteUnavailableError` and pass through untouched.
"""

from __future__ import annotations

import base64
import binascii
import logging
from enum import Enum
from typing import Any, Callable

from code_summarizer.domain.entities import EntryKind, FetchOutcome, FetchStatus
from code_summarizer.domain.exceptions import InvalidArgumentError, RemoteProtocolError
from code_summarizer.domain.ports.repo_host import RepoHost
from code_summarizer.domain.value_objects import RepositoryCoordinate, validate_repo_path

logger = logging.getLogger(__name__)


class ResponseShape(str, Enum):
    """Every distinguishable shape of a contents-endpoint response."""

    FILE_WITH_CONTENT = "file_with_content"
    FILE_EMPTY = "file_empty"
    FILE_MISSING_CONTENT = "file_missing_content"
    SUBMODULE = "submodule"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    UNSUPPORTED_KIND = "unsupported_kind"
    LISTING = "listing"
    MALFORMED = "malformed"


def classify_response(payload: Any) -> ResponseShape:
    """Map a decoded contents response to exactly one :class:`ResponseShape`."""
    if isinstance(payload, list):
        return ResponseShape.LISTING
    if not isinstance(payload, dict):
        return ResponseShape.MALFORMED

    kind = payload.get("type")
    if kind == EntryKind.SUBMODULE.value:
        return ResponseShape.SUBMODULE
    if kind == EntryKind.DIRECTORY.value:
        return ResponseShape.DIRECTORY
    if kind == EntryKind.SYMLINK.value:
        return ResponseShape.SYMLINK
    if kind != EntryKind.FILE.value:
        return ResponseShape.UNSUPPORTED_KIND

    if payload.get("content"):
        return ResponseShape.FILE_WITH_CONTENT
    if payload.get("size") == 0:
        return ResponseShape.FILE_EMPTY
    return ResponseShape.FILE_MISSING_CONTENT


def _decode(path: str, payload: dict[str, Any]) -> FetchOutcome:
    encoded = payload["content"]
    try:
        raw = base64.b64decode(encoded)
        text = raw.decode("utf-8")
    except (binascii.Error, ValueError, TypeError) as exc:
        raise RemoteProtocolError(f"Could not decode content of {path}: {exc}") from exc
    return FetchOutcome(path=path, status=FetchStatus.CONTENT, content=text)


def _skip_empty(path: str, payload: Any) -> FetchOutcome:
    logger.warning("Skipping file: %s (file is empty)", path)
    return FetchOutcome(path=path, status=FetchStatus.SKIPPED_EMPTY)


def _skip_submodule(path: str, payload: Any) -> FetchOutcome:
    logger.warning("Skipping submodule: %s (submodules are not supported)", path)
    return FetchOutcome(path=path, status=FetchStatus.SKIPPED_SUBMODULE)


def _protocol_error(template: str) -> Callable[[str, Any], FetchOutcome]:
    def _raise(path: str, payload: Any) -> FetchOutcome:
        kind = payload.get("type") if isinstance(payload, dict) else type(payload).__name__
        raise RemoteProtocolError(template.format(path=path, kind=kind))

    return _raise


_OUTCOMES: dict[ResponseShape, Callable[[str, Any], FetchOutcome]] = {
    ResponseShape.FILE_WITH_CONTENT: _decode,
    ResponseShape.FILE_EMPTY: _skip_empty,
    ResponseShape.SUBMODULE: _skip_submodule,
    ResponseShape.FILE_MISSING_CONTENT: _protocol_error(
        "Invalid response from GitHub API: missing content field for {path}"
    ),
    ResponseShape.DIRECTORY: _protocol_error(
        "Invalid response from GitHub API: expected a file at {path} but received a directory"
    ),
    ResponseShape.SYMLINK: _protocol_error(
        "Invalid response from GitHub API: expected a file at {path} but received a symlink"
    ),
    ResponseShape.UNSUPPORTED_KIND: _protocol_error(
        "Invalid response from GitHub API: expected a file at {path} but received a {kind}"
    ),
    ResponseShape.LISTING: _protocol_error(
        "Invalid response from GitHub API: expected a file at {path} but received a listing"
    ),
    ResponseShape.MALFORMED: _protocol_error(
        "Invalid response from GitHub API: unexpected {kind} payload for {path}"
    ),
}


class ContentFetcher:
    """Fetch and decode single files through a :class:`RepoHost`."""

    def __init__(self, host: RepoHost) -> None:
        self._host = host

    async def fetch(self, coordinate: RepositoryCoordinate, path: str) -> FetchOutcome:
        """Return the content of *path*, or the reason it was skipped."""
        if not coordinate.owner or not coordinate.repo:
            raise InvalidArgumentError("Repository owner and name are required.")
        if not path or not path.strip():
            raise InvalidArgumentError("A file path is required.")
        validate_repo_path(path)

        logger.debug("Fetching content for %s/%s", coordinate.full_name, path)
        payload = await self._host.get_contents(coordinate, path)
        return _OUTCOMES[classify_response(payload)](path, payload)
