"""Summarization fan-out — three concurrent prompts joined into one result."""

from __future__ import annotations

import logging

from code_summarizer.domain.entities import SummaryResult
from code_summarizer.domain.exceptions import InvalidArgumentError, LlmError
from code_summarizer.domain.ports.llm_gateway import LlmGateway
from code_summarizer.services.fan_out import gather_all

logger = logging.getLogger(__name__)

# ── Prompt templates ────────────────────────────────────────────────────────

OVERVIEW_PROMPT = """\
Provide a brief 2-3 sentence overview of what this code does:

{code}"""

COMPONENTS_PROMPT = """\
List the main components, functions, or classes in this code. \
Keep it concise and bullet-pointed:

{code}"""

TECHNICAL_PROMPT = """\
What are the key technical aspects, patterns, or notable implementation \
details in this code? Keep it focused on technical specifics:

{code}"""


class Summarizer:
    """Produce a :class:`SummaryResult` from one blob of code."""

    def __init__(self, llm_gateway: LlmGateway) -> None:
        self._llm = llm_gateway

    async def summarize(self, text: str) -> SummaryResult:
        """Run the overview, components and technical prompts concurrently.

        The first failing request fails the whole call; the other two
        requests are cancelled and nothing is returned.
        """
        if not text.strip():
            raise InvalidArgumentError("There is no code to summarise.")

        logger.info("Generating summary for %d characters of code", len(text))
        overview, components, technical = await gather_all(
            self._generate("overview", OVERVIEW_PROMPT.format(code=text)),
            self._generate("key components", COMPONENTS_PROMPT.format(code=text)),
            self._generate("technical details", TECHNICAL_PROMPT.format(code=text)),
        )
        logger.info("Generation backend responses received")

        return SummaryResult(
            overview=overview,
            key_components=components,
            technical_details=technical,
        )

    async def _generate(self, section: str, prompt: str) -> str:
        text = (await self._llm.generate(prompt)).strip()
        if not text:
            raise LlmError(None, f"Generation backend returned an empty {section} section.")
        return text
