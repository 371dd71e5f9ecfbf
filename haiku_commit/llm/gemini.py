"""Gemini Haiku Client (generateContent)"""

from urllib.parse import quote

from haiku_commit.llm.base import HaikuClient

API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiClient(HaikuClient):
    """Gemini via generateContent. The API key travels as a query parameter."""

    PROVIDER = "gemini"
    DEFAULT_MODEL = "gemini-2.5-flash"

    @property
    def url(self) -> str:
        return f"{API_BASE}/{quote(self.model, safe='')}:generateContent"

    async def _call_api(self, prompt: str) -> str:
        response = await self._post(
            self.url,
            params={"key": self.api_key},
            headers={"Content-Type": "application/json"},
            json={
                "contents": [{"role": "user", "parts": [{"text": prompt}]}],
                # Not every Gemini model honors this the same way
                "generationConfig": {"maxOutputTokens": self.max_tokens},
            },
        )
        self._check_status(response)
        data = response.json()

        candidates = data.get("candidates") or [{}]
        parts = (candidates[0].get("content") or {}).get("parts") or [{}]
        return str(parts[0].get("text") or "")
