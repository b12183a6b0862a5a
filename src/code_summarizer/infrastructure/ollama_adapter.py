"""Ollama adapter — implements the LlmGateway port over ``/api/generate``."""

from __future__ import annotations

import logging

import httpx

from code_summarizer.domain.exceptions import LlmError

logger = logging.getLogger(__name__)


class OllamaAdapter:
    """Concrete ``LlmGateway`` backed by a local or remote Ollama server."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str = "http://localhost:11434",
        model: str = "llama3.2",
    ) -> None:
        self._client = client
        self._url = f"{base_url.rstrip('/')}/api/generate"
        self._model = model

    async def generate(self, prompt: str) -> str:
        """POST one non-streaming generation request and return ``response``."""
        payload = {"model": self._model, "prompt": prompt, "stream": False}
        try:
            resp = await self._client.post(self._url, json=payload)
        except httpx.HTTPError as exc:
            logger.error("Ollama request failed: %s", exc)
            raise LlmError(None, f"Ollama API Error: {exc}") from exc

        if not resp.is_success:
            detail = _error_detail(resp)
            logger.error("Ollama returned HTTP %d: %s", resp.status_code, detail)
            raise LlmError(resp.status_code, f"Ollama API Error: {detail}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise LlmError(resp.status_code, "Ollama API Error: response is not JSON") from exc

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str):
            raise LlmError(resp.status_code, "Ollama API Error: response field is missing")
        return text


def _error_detail(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return resp.text or resp.reason_phrase
