"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from code_summarizer.domain.exceptions import InvalidArgumentError
from code_summarizer.domain.value_objects import RepositoryCoordinate
from code_summarizer.interface.dependencies import get_use_case
from code_summarizer.interface.schemas import (
    PriorityFilesRequest,
    SummarizeCodeRequest,
    SummarizeResponse,
)
from code_summarizer.services.search_query import SearchFilters
from code_summarizer.services.summarize_code import SummarizeCodeUseCase

router = APIRouter()

_SUMMARY_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"description": "Invalid request"},
    404: {"description": "No priority files found"},
    422: {"description": "Every candidate file was empty or skipped"},
    502: {"description": "GitHub or generation backend error"},
}


@router.post(
    "/summarize-code",
    response_model=SummarizeResponse,
    response_model_by_alias=True,
    responses=_SUMMARY_RESPONSES,
)
async def summarize_code(
    body: SummarizeCodeRequest,
    use_case: SummarizeCodeUseCase = Depends(get_use_case),
) -> SummarizeResponse:
    """Summarise a code block, one repository file, or all priority files."""
    if body.summarize_all and body.has_repository:
        coordinate = RepositoryCoordinate.from_parts(body.owner, body.repo)
        report = await use_case.summarize_priority_files(coordinate)
    elif body.has_repository and body.file_path:
        coordinate = RepositoryCoordinate.from_parts(body.owner, body.repo)
        report = await use_case.summarize_file(coordinate, body.file_path)
    elif body.code_block:
        report = await use_case.summarize_code_block(body.code_block)
    else:
        raise InvalidArgumentError(
            "Invalid request: provide a code block or repository details."
        )
    return SummarizeResponse.from_report(report)


@router.post(
    "/summarize-priority-files",
    response_model=SummarizeResponse,
    response_model_by_alias=True,
    responses=_SUMMARY_RESPONSES,
)
async def summarize_priority_files(
    body: PriorityFilesRequest,
    use_case: SummarizeCodeUseCase = Depends(get_use_case),
) -> SummarizeResponse:
    """Summarise every priority file of a repository."""
    coordinate = RepositoryCoordinate.from_parts(body.owner, body.repo)
    report = await use_case.summarize_priority_files(coordinate)
    return SummarizeResponse.from_report(report)


@router.get("/search-repos")
async def search_repos(
    query: str = Query(""),
    min_stars: int | None = Query(None, alias="minStars", ge=0),
    language: str | None = None,
    sort: str = "stars",
    license: str | None = None,
    has_issues: bool = Query(False, alias="hasIssues"),
    has_wiki: bool = Query(False, alias="hasWiki"),
    has_good_first_issues: bool = Query(False, alias="hasGoodFirstIssues"),
    is_open_source: bool = Query(False, alias="isOpenSource"),
    use_case: SummarizeCodeUseCase = Depends(get_use_case),
) -> dict[str, Any]:
    """Search GitHub repositories; the host's response is passed through."""
    filters = SearchFilters(
        query=query,
        min_stars=min_stars,
        language=language,
        license=license,
        has_issues=has_issues,
        has_wiki=has_wiki,
        has_good_first_issues=has_good_first_issues,
        is_open_source=is_open_source,
        sort=sort,
    )
    return await use_case.search_repositories(filters)
