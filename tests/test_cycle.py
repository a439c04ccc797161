"""
Tests for dispatch cycle state and result types.

Covers SummarizationRequest validation, SummaryResult error markers,
ResultSlot/ProgressCounter behavior and DispatchCycle commit/reset rules.
"""

import sys
import threading
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from multisumm.config import DEFAULT_PROVIDERS
from multisumm.exceptions import ParseError, TransportError, UnsupportedProviderError
from multisumm.summarization import (
    DispatchCycle,
    ErrorKind,
    ProgressCounter,
    ResultSlot,
    SummarizationRequest,
    SummaryResult,
)


class TestSummarizationRequest:
    """Test SummarizationRequest dataclass."""

    def test_defaults_to_configured_providers(self):
        request = SummarizationRequest(text="hello")
        assert request.providers == DEFAULT_PROVIDERS
        assert len(request.providers) == 3

    def test_list_is_stored_as_tuple(self):
        request = SummarizationRequest(text="hello", providers=["gemini", "apy"])
        assert request.providers == ("gemini", "apy")

    def test_empty_providers_rejected(self):
        with pytest.raises(ValueError, match="at least one provider"):
            SummarizationRequest(text="hello", providers=[])

    def test_request_is_immutable(self):
        request = SummarizationRequest(text="hello")
        with pytest.raises(AttributeError):
            request.text = "changed"


class TestSummaryResult:
    """Test SummaryResult construction and display."""

    def test_successful_result(self):
        result = SummaryResult.ok("gemini", "A fox jumps.", latency_ms=120)
        assert result.success is True
        assert result.error_kind is None
        assert result.display_text == "A fox jumps."

    def test_failed_result_gets_defaults(self):
        """Failed result without kind or message gets defaults."""
        result = SummaryResult(provider_id="gemini", success=False)
        assert result.error_kind is ErrorKind.UNEXPECTED
        assert result.error_message == "Unknown error during summarization"

    @pytest.mark.parametrize("exc, kind, label", [
        (TransportError("Request timed out after 120 seconds"),
         ErrorKind.TRANSPORT, "[Transport error]"),
        (ParseError("Missing field 'text'"), ErrorKind.PARSE, "[Parse error]"),
        (UnsupportedProviderError("No adapter registered for provider 'x'"),
         ErrorKind.UNSUPPORTED_PROVIDER, "[Unsupported provider]"),
        (RuntimeError("boom"), ErrorKind.UNEXPECTED, "[Unexpected error]"),
    ])
    def test_from_error(self, exc, kind, label):
        result = SummaryResult.from_error("gemini", exc, latency_ms=5)
        assert result.success is False
        assert result.error_kind is kind
        assert result.display_text.startswith(label)
        assert result.summary == ""

    def test_from_error_keeps_status_code(self):
        exc = TransportError("Provider returned status 503", status_code=503)
        result = SummaryResult.from_error("cohere", exc)
        assert result.status_code == 503
        assert result.display_text == "[Transport error] Provider returned status 503"

    def test_from_error_uses_message_without_details(self):
        exc = ParseError("Missing field 'text'", details="raw body ...")
        result = SummaryResult.from_error("huggingface", exc)
        assert result.error_message == "Missing field 'text'"


class TestResultSlot:
    """Test ResultSlot cell."""

    def test_initially_empty(self):
        slot = ResultSlot()
        assert slot.get() is None
        assert slot.text == ""

    def test_store_and_clear(self):
        slot = ResultSlot()
        slot.store(SummaryResult.ok("gemini", "text"))
        assert slot.text == "text"
        slot.clear()
        assert slot.text == ""


class TestProgressCounter:
    """Test ProgressCounter."""

    def test_increment_and_reset(self):
        counter = ProgressCounter()
        assert counter.value == 0
        assert counter.increment() == 1
        assert counter.increment() == 2
        counter.reset()
        assert counter.value == 0

    def test_thread_safe_increments(self):
        counter = ProgressCounter()

        def bump():
            for _ in range(1000):
                counter.increment()

        threads = [threading.Thread(target=bump) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert counter.value == 4000


class TestDispatchCycle:
    """Test DispatchCycle commit ordering and reset."""

    def make_cycle(self):
        return DispatchCycle(SummarizationRequest(text="doc", providers=("gemini", "cohere", "apy")))

    def test_fresh_cycle(self):
        cycle = self.make_cycle()
        assert len(cycle) == 3
        assert cycle.summaries() == ["", "", ""]
        assert cycle.results() == [None, None, None]
        assert not any(cycle.is_ready(i) for i in range(3))
        assert cycle.progress == 0

    def test_commit_sets_slot_then_flag(self):
        cycle = self.make_cycle()
        cycle.commit(1, SummaryResult.ok("cohere", "summary"))

        assert cycle.is_ready(1)
        assert cycle.slots[1].text == "summary"
        assert not cycle.is_ready(0)
        assert not cycle.all_ready()

    def test_all_ready(self):
        cycle = self.make_cycle()
        for i, provider_id in enumerate(cycle.provider_ids):
            cycle.commit(i, SummaryResult.ok(provider_id, "s"))
        assert cycle.all_ready()
        assert cycle.wait(timeout=0) is True

    def test_wait_times_out(self):
        cycle = self.make_cycle()
        cycle.commit(0, SummaryResult.ok("gemini", "s"))
        assert cycle.wait(timeout=0.01) is False

    def test_double_commit_rejected(self):
        cycle = self.make_cycle()
        cycle.commit(0, SummaryResult.ok("gemini", "first"))
        with pytest.raises(RuntimeError, match="already committed"):
            cycle.commit(0, SummaryResult.ok("gemini", "second"))
        assert cycle.slots[0].text == "first"

    def test_reset_clears_everything(self):
        cycle = self.make_cycle()
        for i, provider_id in enumerate(cycle.provider_ids):
            cycle.commit(i, SummaryResult.from_error(provider_id, RuntimeError("x")))
        cycle.counter.increment()

        cycle.reset()

        assert cycle.summaries() == ["", "", ""]
        assert not any(cycle.is_ready(i) for i in range(3))
        assert cycle.progress == 0

    def test_reader_never_sees_ready_with_empty_slot(self):
        """Any reader that observes a set flag also sees the committed value."""
        cycle = DispatchCycle(SummarizationRequest(text="doc", providers=tuple(f"p{i}" for i in range(50))))
        violations = []
        stop = threading.Event()

        def reader():
            while not stop.is_set():
                for i in range(len(cycle)):
                    if cycle.is_ready(i) and cycle.slots[i].get() is None:
                        violations.append(i)

        def writer(i):
            cycle.commit(i, SummaryResult.ok(f"p{i}", f"summary {i}"))

        reader_thread = threading.Thread(target=reader)
        reader_thread.start()
        writers = [threading.Thread(target=writer, args=(i,)) for i in range(len(cycle))]
        for t in writers:
            t.start()
        for t in writers:
            t.join()
        stop.set()
        reader_thread.join()

        assert violations == []
        assert cycle.all_ready()
