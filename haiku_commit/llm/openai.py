"""OpenAI Haiku Client (Responses API)"""

from haiku_commit.llm.base import HaikuClient

RESPONSES_URL = "https://api.openai.com/v1/responses"


def _collect_text(node, texts: list[str]) -> None:
    if not node:
        return
    if isinstance(node, str):
        texts.append(node)
    elif isinstance(node, list):
        for child in node:
            _collect_text(child, texts)
    elif isinstance(node, dict):
        if isinstance(node.get("text"), str):
            texts.append(node["text"])
        else:
            _collect_text(node.get("content"), texts)


def extract_response_text(data: dict) -> str:
    """Pull the generated text out of a Responses API payload.

    Prefers the `output_text` convenience field; otherwise gathers every text
    fragment from the `output` items (and a top-level `content`, if any).
    """
    if not isinstance(data, dict):
        raise ValueError(f"Unexpected OpenAI response: {type(data).__name__}")

    output_text = data.get("output_text")
    if isinstance(output_text, str) and output_text.strip():
        return output_text

    texts: list[str] = []
    _collect_text(data.get("output"), texts)
    _collect_text(data.get("content"), texts)
    return '\n'.join(texts).strip()


class OpenAIClient(HaikuClient):
    """OpenAI via the Responses API with minimal reasoning and low verbosity."""

    PROVIDER = "openai"
    DEFAULT_MODEL = "gpt-5-mini"

    async def _call_api(self, prompt: str) -> str:
        response = await self._post(
            RESPONSES_URL,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self.api_key}",
            },
            json={
                "model": self.model,
                "input": prompt,
                "max_output_tokens": self.max_tokens,
                "reasoning": {"effort": "minimal"},
                "text": {"verbosity": "low"},
            },
        )
        self._check_status(response)
        return extract_response_text(response.json())
