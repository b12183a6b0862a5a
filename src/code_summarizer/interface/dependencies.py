"""FastAPI dependency injection wiring."""

from __future__ import annotations

import logging

import httpx

from code_summarizer.domain.exceptions import ConfigurationError
from code_summarizer.domain.ports.llm_gateway import LlmGateway
from code_summarizer.infrastructure.config import Settings, get_settings
from code_summarizer.infrastructure.github_rest_adapter import GitHubRestAdapter
from code_summarizer.infrastructure.ollama_adapter import OllamaAdapter
from code_summarizer.infrastructure.openai_adapter import OpenAIAdapter
from code_summarizer.services.aggregator import Aggregator
from code_summarizer.services.content_fetcher import ContentFetcher
from code_summarizer.services.summarize_code import SummarizeCodeUseCase
from code_summarizer.services.summarizer import Summarizer
from code_summarizer.services.tree_walker import TreeWalker

logger = logging.getLogger(__name__)

_http_client: httpx.AsyncClient | None = None
_llm_gateway: LlmGateway | None = None


def build_llm_gateway(settings: Settings, client: httpx.AsyncClient) -> LlmGateway:
    """Select the generation backend named by ``settings.llm_backend``."""
    if settings.llm_backend == "openai":
        if settings.openai_api_key is None:
            raise ConfigurationError(
                "LLM_BACKEND=openai requires the OPENAI_API_KEY environment variable."
            )
        return OpenAIAdapter(
            api_key=settings.openai_api_key.get_secret_value(),
            model=settings.openai_model,
            base_url=settings.openai_base_url,
        )
    return OllamaAdapter(client, base_url=settings.ollama_url, model=settings.ollama_model)


def build_use_case(
    settings: Settings, client: httpx.AsyncClient, llm_gateway: LlmGateway
) -> SummarizeCodeUseCase:
    """Assemble the use case from explicit configuration and adapters."""
    token = settings.github_token.get_secret_value() if settings.github_token else None
    github_adapter = GitHubRestAdapter(client=client, token=token, api_url=settings.github_api_url)

    aggregator = Aggregator(
        fetcher=ContentFetcher(github_adapter),
        walker=TreeWalker(github_adapter, concurrency=settings.fetch_concurrency),
        concurrency=settings.fetch_concurrency,
        sort_paths=settings.sort_paths,
    )
    return SummarizeCodeUseCase(
        aggregator=aggregator,
        summarizer=Summarizer(llm_gateway),
        repo_host=github_adapter,
    )


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _llm_gateway  # noqa: PLW0603

    settings = get_settings()
    logger.info("GitHub token configured: %s", settings.github_token is not None)
    logger.info("Generation backend: %s", settings.llm_backend)

    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout))
    _llm_gateway = build_llm_gateway(settings, _http_client)


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _llm_gateway  # noqa: PLW0603

    if isinstance(_llm_gateway, OpenAIAdapter):
        await _llm_gateway.close()
    _llm_gateway = None
    if _http_client:
        await _http_client.aclose()
        _http_client = None


def get_use_case() -> SummarizeCodeUseCase:
    """Build a per-request use case on top of the shared adapters."""
    assert _http_client is not None, "startup() was not called"
    assert _llm_gateway is not None, "startup() was not called"

    return build_use_case(get_settings(), _http_client, _llm_gateway)
