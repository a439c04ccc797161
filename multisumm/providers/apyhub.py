"""
ApyHub (SharpAPI) content summarization adapter.

Request:  {"content": text, "min_length": .., "max_length": .., "language": ..}
Response: the raw body is the summary; it is not unwrapped as JSON.
"""

from typing import Any

import requests

from multisumm.config import SUMMARY_LANGUAGE, SUMMARY_MAX_LENGTH, SUMMARY_MIN_LENGTH
from multisumm.exceptions import ParseError

from .base import ProviderAdapter


class ApyHubAdapter(ProviderAdapter):
    """Summarization through ApyHub's SharpAPI endpoint."""

    provider_id = "apy"
    auth_header = "apy-token"
    auth_scheme = None

    def build_payload(self, text: str) -> dict[str, Any]:
        return {
            "content": text,
            "min_length": self.settings.get("min_length", SUMMARY_MIN_LENGTH),
            "max_length": self.settings.get("max_length", SUMMARY_MAX_LENGTH),
            "language": self.settings.get("language", SUMMARY_LANGUAGE),
        }

    def parse_response(self, response: requests.Response) -> str:
        body = response.text
        if not isinstance(body, str) or not body.strip():
            raise ParseError("Empty response body", provider_id=self.provider_id)
        return body
