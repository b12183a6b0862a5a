"""GitHub REST API adapter — implements the RepoHost port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import httpx

from code_summarizer.domain.exceptions import RemoteProtocolError, RemoteUnavailableError
from code_summarizer.domain.value_objects import RepositoryCoordinate

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"


class GitHubRestAdapter:
    """Concrete RepoHost backed by the GitHub v3 REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        api_url: str = _GITHUB_API,
    ) -> None:
        self._client = client
        self._api_url = api_url.rstrip("/")
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "code-summarizer/1.0",
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    async def get_contents(self, coordinate: RepositoryCoordinate, path: str) -> Any:
        """GET /repos/{owner}/{repo}/contents/{path} → decoded JSON."""
        endpoint = f"/repos/{coordinate.owner}/{coordinate.repo}/contents"
        if path:
            endpoint += "/" + quote(path.strip("/"))
        resp = await self._api_get(endpoint)
        return self._json(resp)

    async def search_repositories(
        self, query: str, sort: str = "stars", order: str = "desc"
    ) -> dict[str, Any]:
        """GET /search/repositories?q=… → raw search response."""
        resp = await self._api_get(
            "/search/repositories",
            params={"q": query, "sort": sort, "order": order},
        )
        data = self._json(resp)
        if not isinstance(data, dict):
            raise RemoteProtocolError("Invalid response from GitHub search API: expected an object")
        return data

    @staticmethod
    def _json(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise RemoteProtocolError(
                f"GitHub API returned a non-JSON body for {resp.request.url}"
            ) from exc

    async def _api_get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform a GitHub API GET request with error translation."""
        url = f"{self._api_url}{endpoint}"
        try:
            resp = await self._client.get(
                url, headers=self._api_headers, params=params
            )
        except httpx.HTTPError as exc:
            logger.error("Network error fetching %s: %s", url, exc)
            raise RemoteUnavailableError(
                None, f"GitHub API Error: network error fetching {url}: {exc}"
            ) from exc

        if resp.is_success:
            return resp

        message = _upstream_message(resp)
        logger.error("GitHub API returned HTTP %d for %s: %s", resp.status_code, url, message)

        if resp.status_code == 403 and resp.headers.get("x-ratelimit-remaining", "") == "0":
            reset_raw = resp.headers.get("x-ratelimit-reset", "")
            try:
                reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                    "%Y-%m-%d %H:%M:%S UTC"
                )
            except (ValueError, OSError):
                reset_str = reset_raw or "unknown"
            message = (
                f"{message}. Resets at {reset_str}. "
                "Set the GITHUB_TOKEN environment variable to increase the limit"
            )

        raise RemoteUnavailableError(resp.status_code, f"GitHub API Error: {message}")


def _upstream_message(resp: httpx.Response) -> str:
    """Best-effort extraction of GitHub's ``message`` field."""
    try:
        data = resp.json()
    except ValueError:
        return resp.reason_phrase or f"HTTP {resp.status_code}"
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return resp.reason_phrase or f"HTTP {resp.status_code}"
