"""OpenAI adapter — implements the LlmGateway port."""

from __future__ import annotations

import logging

from openai import APIConnectionError, APIStatusError, AsyncOpenAI, OpenAIError

from code_summarizer.domain.exceptions import LlmError

logger = logging.getLogger(__name__)


class OpenAIAdapter:
    """Concrete ``LlmGateway`` backed by an OpenAI-compatible chat-completions API."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
    ) -> None:
        # Retries are disabled; a failed request fails the summary outright.
        self._client = AsyncOpenAI(api_key=api_key, base_url=base_url, max_retries=0)
        self._model = model

    async def generate(self, prompt: str) -> str:
        """Send *prompt* as a single user message and return the completion text."""
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
            )
        except APIStatusError as exc:
            logger.error("OpenAI returned HTTP %d: %s", exc.status_code, exc.message)
            raise LlmError(exc.status_code, f"OpenAI API Error: {exc.message}") from exc
        except APIConnectionError as exc:
            logger.error("OpenAI connection error: %s", exc)
            raise LlmError(None, f"OpenAI API Error: {exc}") from exc
        except OpenAIError as exc:
            raise LlmError(None, f"OpenAI API Error: {exc}") from exc

        content = response.choices[0].message.content if response.choices else None
        if content is None:
            raise LlmError(None, "OpenAI API Error: completion has no content")
        return content

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.close()
