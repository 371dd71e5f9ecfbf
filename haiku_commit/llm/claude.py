"""Anthropic (Claude) Haiku Client"""

from anthropic import APIConnectionError, APIResponseValidationError, APIStatusError, AsyncAnthropic

from haiku_commit.llm.base import HaikuClient, ProviderStatusError


class ClaudeClient(HaikuClient):
    """
    Claude via the Messages API. SDK retries are disabled; backoff is ours.

    The SDK brings its own HTTP stack, so an injected `http_client` is not
    used here. One SDK client is opened and closed per attempt.
    """

    PROVIDER = "anthropic"
    DEFAULT_MODEL = "claude-sonnet-4-20250514"

    TRANSIENT_EXCEPTIONS = HaikuClient.TRANSIENT_EXCEPTIONS + (
        APIConnectionError, APIResponseValidationError,
    )

    async def _call_api(self, prompt: str) -> str:
        async with AsyncAnthropic(api_key=self.api_key, max_retries=0, timeout=self.DEFAULT_TIMEOUT) as client:
            try:
                response = await client.messages.create(
                    model=self.model,
                    max_tokens=self.max_tokens,
                    messages=[{"role": "user", "content": prompt}],
                )
            except APIStatusError as e:
                raise ProviderStatusError(self.PROVIDER, e.status_code) from e

        for block in response.content:
            if block.type == "text":
                return block.text
        return ""
