"""
Tests for provider adapters.

Each adapter is checked for its auth header, request body and the field
path it reads on success. No network access is needed.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from multisumm.exceptions import ParseError, UnsupportedProviderError
from multisumm.providers import (
    ApyHubAdapter,
    CohereAdapter,
    GeminiAdapter,
    HuggingFaceAdapter,
    extract_text,
    get_provider,
    resolve_provider_id,
)

TEXT = "The quick brown fox jumps over the lazy dog."


def json_response(data):
    response = MagicMock()
    response.status_code = 200
    response.json.return_value = data
    return response


class TestProviderRegistry:
    """Test provider lookup by id."""

    @pytest.mark.parametrize("provider_id, adapter_class", [
        ("huggingface", HuggingFaceAdapter),
        ("distilbart", HuggingFaceAdapter),
        ("gemini", GeminiAdapter),
        ("cohere", CohereAdapter),
        ("apy", ApyHubAdapter),
        ("apyhub", ApyHubAdapter),
        (" Gemini ", GeminiAdapter),
    ])
    def test_get_provider(self, provider_id, adapter_class):
        assert isinstance(get_provider(provider_id, api_key="k"), adapter_class)

    def test_unknown_provider_raises(self):
        with pytest.raises(UnsupportedProviderError, match="unknown-api") as exc_info:
            get_provider("unknown-api")
        assert exc_info.value.provider_id == "unknown-api"
        assert "gemini" in exc_info.value.details

    def test_resolve_alias(self):
        assert resolve_provider_id("distilbart") == "huggingface"
        assert resolve_provider_id("COHERE") == "cohere"
        assert resolve_provider_id("unknown-api") == "unknown-api"

    def test_api_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        adapter = get_provider("gemini")
        assert adapter.api_key == "env-key"
        assert adapter.is_configured() is True

    def test_missing_api_key_is_not_configured(self, monkeypatch):
        monkeypatch.delenv("COHERE_API_KEY", raising=False)
        assert get_provider("cohere").is_configured() is False


class TestExtractText:
    """Test the field path walker shared by JSON adapters."""

    def test_nested_path(self):
        data = {"a": [{"b": "value"}]}
        assert extract_text(data, ("a", 0, "b")) == "value"

    def test_missing_key(self):
        with pytest.raises(ParseError, match=r"Missing field 'a\[0\]\.c'"):
            extract_text({"a": [{"b": "value"}]}, ("a", 0, "c"))

    def test_empty_list(self):
        with pytest.raises(ParseError, match="Missing field"):
            extract_text({"a": []}, ("a", 0))

    def test_wrong_container(self):
        with pytest.raises(ParseError, match="Expected a list"):
            extract_text({"a": {"0": "x"}}, ("a", 0))

    def test_wrong_final_type(self):
        with pytest.raises(ParseError, match="expected string"):
            extract_text({"a": 42}, ("a",))

    @pytest.mark.parametrize("blank", ["", "   ", "\n\t"])
    def test_blank_string_rejected(self, blank):
        with pytest.raises(ParseError, match=r"Field 'a\[0\]' is empty"):
            extract_text({"a": [blank]}, ("a", 0))


class TestBlankSummaries:
    """A 2xx body with a blank summary is a parse error for every JSON adapter."""

    @pytest.mark.parametrize("adapter_class, data", [
        (HuggingFaceAdapter, {"text": ""}),
        (HuggingFaceAdapter, [{"summary_text": "  "}]),
        (GeminiAdapter, {"candidates": [{"content": {"parts": [{"text": ""}]}}]}),
        (GeminiAdapter, {"candidates": [{"content": {"parts": [{"text": " \n"}]}}]}),
        (CohereAdapter, {"message": {"content": [{"text": ""}]}}),
        (CohereAdapter, {"message": {"content": [{"text": "   "}]}}),
    ])
    def test_blank_summary(self, adapter_class, data):
        with pytest.raises(ParseError):
            adapter_class(api_key="k").parse_response(json_response(data))

    def test_huggingface_blank_text_tries_both_paths(self):
        adapter = HuggingFaceAdapter(api_key="k")
        with pytest.raises(ParseError, match="No summary") as exc_info:
            adapter.extract_summary({"text": " "})
        assert "is empty" in exc_info.value.details


class TestHuggingFaceAdapter:
    """Variant A: flat body with length hints, top-level or list response."""

    def test_request_shape(self):
        request = HuggingFaceAdapter(api_key="hf-token").build_request(TEXT)

        assert request.url.endswith("sshleifer/distilbart-cnn-12-6")
        assert request.headers["Authorization"] == "Bearer hf-token"
        assert request.json == {
            "inputs": TEXT,
            "parameters": {"min_length": 30, "max_length": 150},
        }

    def test_top_level_text(self):
        adapter = HuggingFaceAdapter(api_key="k")
        assert adapter.parse_response(json_response({"text": "Fox jumps."})) == "Fox jumps."

    def test_list_fallback(self):
        adapter = HuggingFaceAdapter(api_key="k")
        response = json_response([{"summary_text": "Fox jumps over dog."}])
        assert adapter.parse_response(response) == "Fox jumps over dog."

    def test_fallback_when_text_is_not_string(self):
        adapter = HuggingFaceAdapter(api_key="k")
        with pytest.raises(ParseError, match="No summary"):
            adapter.parse_response(json_response({"text": 5}))

    def test_error_payload(self):
        adapter = HuggingFaceAdapter(api_key="k")
        with pytest.raises(ParseError):
            adapter.parse_response(json_response({"error": "Model is loading"}))


class TestGeminiAdapter:
    """Variant B: contents/parts body, deep candidates path."""

    def test_request_shape(self):
        request = GeminiAdapter(api_key="g-key").build_request(TEXT)

        assert "generateContent" in request.url
        assert request.headers["x-goog-api-key"] == "g-key"
        assert "Authorization" not in request.headers
        assert request.json == {
            "contents": [{"parts": [{"text": f"Summarize this text: {TEXT}"}]}]
        }

    def test_parse_response(self):
        data = {"candidates": [{"content": {"parts": [{"text": "A fox jumps."}]}}]}
        assert GeminiAdapter(api_key="k").parse_response(json_response(data)) == "A fox jumps."

    def test_no_candidates(self):
        with pytest.raises(ParseError, match="candidates"):
            GeminiAdapter(api_key="k").parse_response(json_response({"candidates": []}))

    def test_invalid_json(self):
        response = MagicMock()
        response.json.side_effect = ValueError("Expecting value")
        with pytest.raises(ParseError, match="not valid JSON"):
            GeminiAdapter(api_key="k").parse_response(response)


class TestCohereAdapter:
    """Variant C: chat message list, message.content path."""

    def test_request_shape(self):
        request = CohereAdapter(api_key="c-key").build_request(TEXT)

        assert request.url == "https://api.cohere.ai/v2/chat"
        assert request.headers["Authorization"] == "Bearer c-key"
        assert request.json["model"] == "command-a-03-2025"
        assert request.json["messages"] == [
            {
                "role": "user",
                "content": f"Summarize the following text in 3 sentences:\n{TEXT}",
            }
        ]

    def test_parse_response(self):
        data = {"message": {"role": "assistant", "content": [{"type": "text", "text": "Fox."}]}}
        assert CohereAdapter(api_key="k").parse_response(json_response(data)) == "Fox."

    def test_custom_sentence_count(self):
        adapter = CohereAdapter(api_key="k", settings={"api_url": "http://cohere.test", "sentences": 2})
        payload = adapter.build_payload(TEXT)
        assert payload["messages"][0]["content"].startswith("Summarize the following text in 2 sentences:")


class TestApyHubAdapter:
    """Variant D: flat body with language, raw text response."""

    def test_request_shape(self):
        request = ApyHubAdapter(api_key="apy-key").build_request(TEXT)

        assert request.headers["apy-token"] == "apy-key"
        assert request.headers["Content-Type"] == "application/json"
        assert request.json == {
            "content": TEXT,
            "min_length": 30,
            "max_length": 150,
            "language": "English",
        }

    def test_raw_body_is_summary(self):
        response = MagicMock()
        response.text = '{"status_url": "https://example.test/job/1"}'
        summary = ApyHubAdapter(api_key="k").parse_response(response)
        assert summary == '{"status_url": "https://example.test/job/1"}'
        response.json.assert_not_called()

    def test_empty_body(self):
        response = MagicMock()
        response.text = "   "
        with pytest.raises(ParseError, match="Empty"):
            ApyHubAdapter(api_key="k").parse_response(response)
