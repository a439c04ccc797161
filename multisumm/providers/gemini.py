"""
Google Gemini API adapter.

Request:  {"contents": [{"parts": [{"text": "Summarize this text: ..."}]}]}
Response: candidates[0].content.parts[0].text
"""

from typing import Any

from .base import ProviderAdapter


class GeminiAdapter(ProviderAdapter):
    """Summarization through Gemini generateContent."""

    provider_id = "gemini"
    auth_header = "x-goog-api-key"
    auth_scheme = None
    SUMMARY_PATH = ("candidates", 0, "content", "parts", 0, "text")

    DEFAULT_PROMPT_PREFIX = "Summarize this text: "

    def build_payload(self, text: str) -> dict[str, Any]:
        prefix = self.settings.get("prompt_prefix", self.DEFAULT_PROMPT_PREFIX)
        return {"contents": [{"parts": [{"text": f"{prefix}{text}"}]}]}
