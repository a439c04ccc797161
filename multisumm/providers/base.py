"""
Base class for summarization provider adapters.

An adapter knows one provider's wire format: how to authenticate, how to
wrap the input text into a request body, and where the summary lives in
the response. It does not send anything; SummaryWorker owns the HTTP call.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import requests

from multisumm.config import get_credential, get_provider_config
from multisumm.exceptions import ParseError


@dataclass
class ProviderRequest:
    """A fully built POST request for one provider."""
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    json: dict[str, Any] = field(default_factory=dict)


def format_path(path: tuple) -> str:
    """Render a field path like ('candidates', 0, 'text') as 'candidates[0].text'."""
    rendered = ""
    for key in path:
        if isinstance(key, int):
            rendered += f"[{key}]"
        else:
            rendered += f".{key}" if rendered else key
    return rendered


def extract_text(data: Any, path: tuple, provider_id: str | None = None) -> str:
    """
    Follow a field path through decoded JSON and return the string at its end.

    Integer keys index lists, string keys index objects.

    Raises:
        ParseError: If a step is missing, has the wrong container type,
                    or the final value is not a non-blank string.
    """
    node = data
    for depth, key in enumerate(path):
        where = format_path(path[:depth + 1])
        if isinstance(key, int):
            if not isinstance(node, list):
                raise ParseError(f"Expected a list at '{where}'", provider_id=provider_id)
            if not -len(node) <= key < len(node):
                raise ParseError(f"Missing field '{where}'", provider_id=provider_id)
        else:
            if not isinstance(node, dict):
                raise ParseError(f"Expected an object at '{where}'", provider_id=provider_id)
            if key not in node:
                raise ParseError(f"Missing field '{where}'", provider_id=provider_id)
        node = node[key]

    if not isinstance(node, str):
        raise ParseError(
            f"Field '{format_path(path)}' is {type(node).__name__}, expected string",
            provider_id=provider_id,
        )
    if not node.strip():
        raise ParseError(f"Field '{format_path(path)}' is empty", provider_id=provider_id)
    return node


class ProviderAdapter(ABC):
    """
    One summarization back-end's request and response format.

    Subclasses set provider_id, auth_header and SUMMARY_PATH, and implement
    build_payload(). Adapters whose response is not JSON override
    parse_response().

    Args:
        api_key: Credential for the provider. Defaults to the provider's
                 environment variable (see config.PROVIDER_CREDENTIAL_ENV).
        settings: Provider settings. Defaults to config/providers.yaml.
    """

    provider_id: str = ""
    auth_header: str = "Authorization"
    auth_scheme: str | None = "Bearer"
    SUMMARY_PATH: tuple = ()

    def __init__(self, api_key: str | None = None, settings: dict | None = None):
        self.api_key = api_key if api_key is not None else get_credential(self.provider_id)
        self.settings = settings if settings is not None else get_provider_config(self.provider_id)
        self.api_url = self.settings.get("api_url", "")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(api_url={self.api_url!r})"

    def is_configured(self) -> bool:
        """Check if a credential is available for this provider."""
        return bool(self.api_key)

    def auth_headers(self) -> dict[str, str]:
        token = self.api_key or ""
        value = f"{self.auth_scheme} {token}" if self.auth_scheme else token
        return {self.auth_header: value}

    def build_request(self, text: str) -> ProviderRequest:
        """Build the POST request for summarizing text."""
        headers = {"Content-Type": "application/json"}
        headers.update(self.auth_headers())
        return ProviderRequest(url=self.api_url, headers=headers, json=self.build_payload(text))

    @abstractmethod
    def build_payload(self, text: str) -> dict[str, Any]:
        """Provider-specific JSON body for text."""
        pass

    def parse_response(self, response: requests.Response) -> str:
        """
        Extract the summary from a successful response.

        Raises:
            ParseError: If the body is not JSON or lacks the summary field.
        """
        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(
                "Response body is not valid JSON",
                provider_id=self.provider_id,
                details=str(e),
            ) from e
        return self.extract_summary(data)

    def extract_summary(self, data: Any) -> str:
        return extract_text(data, self.SUMMARY_PATH, provider_id=self.provider_id)
