"""In-memory stand-ins for the RepoHost and LlmGateway ports."""

from __future__ import annotations

import asyncio
import base64
from typing import Any

from code_summarizer.domain.exceptions import LlmError
from code_summarizer.domain.value_objects import RepositoryCoordinate


def file_payload(path: str, content: str | None, size: int | None = None) -> dict[str, Any]:
    """Build a contents-API object for a file, base64-encoding *content*."""
    raw = (content or "").encode("utf-8")
    return {
        "type": "file",
        "path": path,
        "name": path.rsplit("/", 1)[-1],
        "size": len(raw) if size is None else size,
        "encoding": "base64",
        "content": base64.b64encode(raw).decode("ascii"),
    }


def entry(path: str, kind: str) -> dict[str, Any]:
    return {"type": kind, "path": path, "name": path.rsplit("/", 1)[-1]}


class FakeRepoHost:
    """Serve canned contents responses keyed by path.

    A value that is an exception instance is raised instead of returned.
    ``delays`` lets a test make some paths answer later than others.
    """

    def __init__(
        self,
        responses: dict[str, Any],
        delays: dict[str, float] | None = None,
        search_response: dict[str, Any] | None = None,
    ) -> None:
        self._responses = responses
        self._delays = delays or {}
        self._search_response = search_response or {"total_count": 0, "items": []}
        self.calls: list[str] = []
        self.search_calls: list[tuple[str, str, str]] = []

    async def get_contents(self, coordinate: RepositoryCoordinate, path: str) -> Any:
        self.calls.append(path)
        delay = self._delays.get(path)
        if delay:
            await asyncio.sleep(delay)
        value = self._responses[path]
        if isinstance(value, BaseException):
            raise value
        return value

    async def search_repositories(
        self, query: str, sort: str = "stars", order: str = "desc"
    ) -> dict[str, Any]:
        self.search_calls.append((query, sort, order))
        return self._search_response


class FakeLlm:
    """Answer prompts by their first line; fail on prompts containing ``fail_on``."""

    def __init__(self, fail_on: str | None = None, reply: str | None = None) -> None:
        self._fail_on = fail_on
        self._reply = reply
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        await asyncio.sleep(0)
        if self._fail_on and self._fail_on in prompt:
            raise LlmError(500, "Ollama API Error: model 'llama3.2' not found")
        if self._reply is not None:
            return self._reply
        return f"  {prompt.splitlines()[0]}  \n"
