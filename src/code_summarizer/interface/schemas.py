"""Pydantic request / response DTOs for the API boundary.

Field names are snake_case in Python and camelCase on the wire, which is
what the browser frontend sends and expects.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from code_summarizer.domain.entities import SummaryReport


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SummarizeCodeRequest(_CamelModel):
    """Request body for ``POST /summarize-code``.

    Exactly one mode applies, checked in this order: ``summarize_all`` with
    owner and repo, then owner + repo + ``file_path``, then ``code_block``.
    """

    code_block: str | None = None
    owner: str | None = None
    repo: str | None = None
    file_path: str | None = None
    summarize_all: bool = False

    @property
    def has_repository(self) -> bool:
        return bool(self.owner and self.repo)


class PriorityFilesRequest(_CamelModel):
    """Request body for ``POST /summarize-priority-files``."""

    owner: str | None = None
    repo: str | None = None


class SummarizeResponse(_CamelModel):
    """Successful response from both summarize endpoints."""

    overview: str
    key_components: str
    technical_details: str
    skipped_files: list[str]

    @classmethod
    def from_report(cls, report: SummaryReport) -> SummarizeResponse:
        return cls(
            overview=report.summary.overview,
            key_components=report.summary.key_components,
            technical_details=report.summary.technical_details,
            skipped_files=report.skipped_files,
        )


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
