"""Port: LLM gateway — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol


class LlmGateway(Protocol):
    """Abstract contract for a non-streaming text-generation backend."""

    async def generate(self, prompt: str) -> str:
        """Send one prompt and return the raw generated text."""
        ...
