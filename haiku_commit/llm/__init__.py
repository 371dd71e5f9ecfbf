"""LLM Client Package"""

from typing import Awaitable, Callable

import httpx

from haiku_commit.cancellation import CancellationToken, GenerationAborted
from haiku_commit.llm.base import (
    DEFAULT_MAX_TOKENS,
    RETRY_DELAYS,
    TRANSIENT_STATUSES,
    HaikuClient,
    LLMError,
    ProviderConfigError,
    ProviderError,
    ProviderOptions,
    ProviderStatusError,
)
from haiku_commit.llm.claude import ClaudeClient
from haiku_commit.llm.gemini import GeminiClient
from haiku_commit.llm.openai import OpenAIClient

# Uniform shape every backend is reduced to: (diff, corrective?) -> haiku
HaikuGenerator = Callable[..., Awaitable[str]]

PROVIDERS: dict[str, type[HaikuClient]] = {
    "anthropic": ClaudeClient,
    "openai": OpenAIClient,
    "gemini": GeminiClient,
}


def _failing(error: LLMError) -> HaikuGenerator:
    async def generate(diff: str, corrective_instruction: str | None = None) -> str:
        raise error
    return generate


def _lookup(provider: str) -> type[HaikuClient]:
    if not provider:
        raise ProviderConfigError("No AI provider configured. Please set a provider in settings.")
    client_class = PROVIDERS.get(provider)
    if client_class is None:
        raise ProviderConfigError(
            f"Provider \"{provider}\" is not implemented. Use one of: {', '.join(PROVIDERS)}."
        )
    return client_class


def get_client(options: ProviderOptions, http_client: httpx.AsyncClient | None = None) -> HaikuClient:
    """Build the client for `options.provider`. Raises ProviderConfigError if unset or unknown."""
    return _lookup(options.provider).from_options(options, http_client=http_client)


def resolve_provider(options: ProviderOptions, http_client: httpx.AsyncClient | None = None) -> HaikuGenerator:
    """
    Bind a provider's `generate` to fixed options.

    An empty or unknown provider still yields a callable; it fails when awaited,
    so callers handle configuration problems on the same path as provider errors.
    A missing API key raises immediately.

    Examples:
        generate = resolve_provider(ProviderOptions(provider="openai", api_key=key))
        haiku = await generate(diff)
    """
    try:
        _lookup(options.provider)
    except ProviderConfigError as e:
        return _failing(e)
    return get_client(options, http_client).generate


__all__ = [
    "CancellationToken",
    "ClaudeClient",
    "DEFAULT_MAX_TOKENS",
    "GeminiClient",
    "GenerationAborted",
    "HaikuClient",
    "HaikuGenerator",
    "LLMError",
    "OpenAIClient",
    "PROVIDERS",
    "ProviderConfigError",
    "ProviderError",
    "ProviderOptions",
    "ProviderStatusError",
    "RETRY_DELAYS",
    "TRANSIENT_STATUSES",
    "get_client",
    "resolve_provider",
]
