"""Tests for the three-way summarization fan-out."""

import asyncio

import pytest

from code_summarizer.domain.exceptions import InvalidArgumentError, LlmError
from code_summarizer.services.summarizer import (
    COMPONENTS_PROMPT,
    OVERVIEW_PROMPT,
    TECHNICAL_PROMPT,
    Summarizer,
)
from fakes import FakeLlm


def test_all_three_sections_are_populated_and_trimmed():
    llm = FakeLlm()
    result = asyncio.run(Summarizer(llm).summarize("def f(): pass"))

    assert result.overview == OVERVIEW_PROMPT.splitlines()[0]
    assert result.key_components == COMPONENTS_PROMPT.splitlines()[0]
    assert result.technical_details == TECHNICAL_PROMPT.splitlines()[0]
    assert len(llm.prompts) == 3
    assert all(p.endswith("def f(): pass") for p in llm.prompts)


def test_requests_run_concurrently():
    started = []

    class BarrierLlm:
        def __init__(self):
            self.release = asyncio.Event()

        async def generate(self, prompt):
            started.append(prompt)
            if len(started) == 3:
                self.release.set()
            await asyncio.wait_for(self.release.wait(), timeout=1)
            return "ok"

    async def run():
        return await Summarizer(BarrierLlm()).summarize("x = 1")

    result = asyncio.run(run())
    assert len(started) == 3
    assert result.overview == result.key_components == result.technical_details == "ok"


def test_second_request_failing_fails_whole_summary():
    llm = FakeLlm(fail_on="List the main components")
    with pytest.raises(LlmError) as info:
        asyncio.run(Summarizer(llm).summarize("x = 1"))
    assert "model 'llama3.2' not found" in str(info.value)


def test_blank_generation_is_an_error():
    llm = FakeLlm(reply="   \n")
    with pytest.raises(LlmError, match="empty"):
        asyncio.run(Summarizer(llm).summarize("x = 1"))


def test_blank_text_is_rejected_before_any_request():
    llm = FakeLlm()
    with pytest.raises(InvalidArgumentError):
        asyncio.run(Summarizer(llm).summarize("  \n "))
    assert llm.prompts == []


def test_failure_cancels_remaining_requests():
    cancelled = []

    class OneFailsLlm:
        async def generate(self, prompt):
            if "overview" in prompt:
                raise LlmError(500, "Ollama API Error: out of memory")
            try:
                await asyncio.sleep(5)
            except asyncio.CancelledError:
                cancelled.append(prompt.splitlines()[0])
                raise
            return "late"

    async def run():
        with pytest.raises(LlmError, match="out of memory"):
            await Summarizer(OneFailsLlm()).summarize("x = 1")
        await asyncio.sleep(0.01)
        assert len(cancelled) == 2

    asyncio.run(run())
