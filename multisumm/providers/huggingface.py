"""
Hugging Face Inference API adapter (distilbart-cnn summarization model).

Request:  {"inputs": text, "parameters": {"min_length": .., "max_length": ..}}
Response: {"text": "..."} or [{"summary_text": "..."}]
"""

from typing import Any

from multisumm.config import SUMMARY_MAX_LENGTH, SUMMARY_MIN_LENGTH
from multisumm.exceptions import ParseError

from .base import ProviderAdapter, extract_text, format_path


class HuggingFaceAdapter(ProviderAdapter):
    """Summarization through a hosted Hugging Face summarization pipeline."""

    provider_id = "huggingface"
    SUMMARY_PATH = ("text",)
    # The pipeline endpoint answers with a list of candidates instead
    FALLBACK_SUMMARY_PATH = (0, "summary_text")

    def build_payload(self, text: str) -> dict[str, Any]:
        return {
            "inputs": text,
            "parameters": {
                "min_length": self.settings.get("min_length", SUMMARY_MIN_LENGTH),
                "max_length": self.settings.get("max_length", SUMMARY_MAX_LENGTH),
            },
        }

    def extract_summary(self, data: Any) -> str:
        try:
            return extract_text(data, self.SUMMARY_PATH, provider_id=self.provider_id)
        except ParseError as primary:
            try:
                return extract_text(data, self.FALLBACK_SUMMARY_PATH, provider_id=self.provider_id)
            except ParseError as fallback:
                raise ParseError(
                    f"No summary at '{format_path(self.SUMMARY_PATH)}' "
                    f"or '{format_path(self.FALLBACK_SUMMARY_PATH)}'",
                    provider_id=self.provider_id,
                    details=f"{primary.message}; {fallback.message}",
                ) from fallback
