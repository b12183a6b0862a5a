"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class EntryKind(str, Enum):
    """Node type as reported by the repository host contents API."""

    FILE = "file"
    DIRECTORY = "dir"
    SUBMODULE = "submodule"
    SYMLINK = "symlink"


@dataclass(frozen=True, slots=True)
class TreeEntry:
    """A single node of a directory listing."""

    path: str
    kind: str  # usually one of EntryKind; unknown kinds are kept verbatim


class FetchStatus(str, Enum):
    """Non-error outcomes of a single file fetch."""

    CONTENT = "content"
    SKIPPED_EMPTY = "skipped_empty"
    SKIPPED_SUBMODULE = "skipped_submodule"


@dataclass(frozen=True, slots=True)
class FetchOutcome:
    """Result of fetching one file: its content, or the reason it was skipped."""

    path: str
    status: FetchStatus
    content: str = ""

    @property
    def skipped(self) -> bool:
        return self.status is not FetchStatus.CONTENT


@dataclass(slots=True)
class AggregatedBlob:
    """Concatenated file sections plus the paths that were skipped."""

    text: str = ""
    skipped_files: list[str] = field(default_factory=list)
    included_files: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class SummaryResult:
    """The three-part structured summary returned by the generation backend."""

    overview: str
    key_components: str
    technical_details: str


@dataclass(frozen=True, slots=True)
class SummaryReport:
    """A summary together with the files that could not be included."""

    summary: SummaryResult
    skipped_files: list[str] = field(default_factory=list)
