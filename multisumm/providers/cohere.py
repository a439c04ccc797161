"""
Cohere Chat API (v2) adapter.

Request:  {"model": ..., "messages": [{"role": "user", "content": "Summarize ... in N sentences:\n..."}]}
Response: message.content[0].text
"""

from typing import Any

from multisumm.config import SUMMARY_SENTENCES

from .base import ProviderAdapter


class CohereAdapter(ProviderAdapter):
    """Summarization by instructing a Cohere chat model."""

    provider_id = "cohere"
    SUMMARY_PATH = ("message", "content", 0, "text")

    DEFAULT_MODEL = "command-a-03-2025"

    def build_payload(self, text: str) -> dict[str, Any]:
        sentences = self.settings.get("sentences", SUMMARY_SENTENCES)
        return {
            "model": self.settings.get("model", self.DEFAULT_MODEL),
            "messages": [
                {
                    "role": "user",
                    "content": f"Summarize the following text in {sentences} sentences:\n{text}",
                }
            ],
        }
