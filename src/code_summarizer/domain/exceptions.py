"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.

Skipped files (empty files, submodules) are *not* exceptions: they are
carried as :class:`~code_summarizer.domain.entities.FetchOutcome` values.
"""

from __future__ import annotations


class CodeSummarizerError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidArgumentError(CodeSummarizerError):
    """Malformed caller input, detected before any remote call is made."""


class ConfigurationError(CodeSummarizerError):
    """The process configuration cannot produce a working service."""


# ── Aggregation outcomes ────────────────────────────────────────────────────


class NoMatchingFilesError(CodeSummarizerError):
    """The priority filter matched no files in the repository."""


class EmptyContentError(CodeSummarizerError):
    """Every candidate file was skipped, so there is nothing to summarise."""

    def __init__(self, message: str, skipped_files: list[str]) -> None:
        super().__init__(message)
        self.skipped_files = skipped_files


# ── Remote API errors ───────────────────────────────────────────────────────


class RemoteUnavailableError(CodeSummarizerError):
    """Transport failure or non-2xx status from an external API."""

    def __init__(self, status_code: int | None, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"


class RemoteProtocolError(CodeSummarizerError):
    """A successful response whose shape violates the expected contract."""


class LlmError(RemoteUnavailableError):
    """Any error originating from the text-generation backend."""
