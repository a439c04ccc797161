"""
Multisumm Provider Module
Adapters for the external summarization services queried in a cycle.

Providers:
- huggingface (alias distilbart): flat body with length hints, {"text"} or [{"summary_text"}]
- gemini: contents/parts body, candidates[0].content.parts[0].text
- cohere: chat message list, message.content[0].text
- apy: flat body with length hints and language, raw text response

Usage:
    adapter = get_provider("gemini", api_key="...")
    request = adapter.build_request("The quick brown fox...")
"""

from multisumm.exceptions import UnsupportedProviderError

from .apyhub import ApyHubAdapter
from .base import ProviderAdapter, ProviderRequest, extract_text
from .cohere import CohereAdapter
from .gemini import GeminiAdapter
from .huggingface import HuggingFaceAdapter

PROVIDER_CLASSES: dict[str, type[ProviderAdapter]] = {
    "huggingface": HuggingFaceAdapter,
    "gemini": GeminiAdapter,
    "cohere": CohereAdapter,
    "apy": ApyHubAdapter,
}

# Alternate ids accepted in requests
PROVIDER_ALIASES = {
    "distilbart": "huggingface",
    "apyhub": "apy",
}


def resolve_provider_id(provider_id: str) -> str:
    """Normalize a provider id and map aliases to the canonical id."""
    normalized = provider_id.strip().lower()
    return PROVIDER_ALIASES.get(normalized, normalized)


def get_provider(provider_id: str, api_key: str | None = None) -> ProviderAdapter:
    """
    Build the adapter for a provider id.

    Raises:
        UnsupportedProviderError: If no adapter is registered for the id.
    """
    adapter_class = PROVIDER_CLASSES.get(resolve_provider_id(provider_id))
    if adapter_class is None:
        raise UnsupportedProviderError(
            f"No adapter registered for provider '{provider_id}'",
            provider_id=provider_id,
            details=f"Known providers: {', '.join(sorted(PROVIDER_CLASSES))}",
        )
    return adapter_class(api_key=api_key)


__all__ = [
    'ProviderAdapter',
    'ProviderRequest',
    'HuggingFaceAdapter',
    'GeminiAdapter',
    'CohereAdapter',
    'ApyHubAdapter',
    'PROVIDER_CLASSES',
    'PROVIDER_ALIASES',
    'extract_text',
    'get_provider',
    'resolve_provider_id',
]
