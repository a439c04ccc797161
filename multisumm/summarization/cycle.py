"""
Shared state for one dispatch cycle.

A DispatchCycle owns, for a single request:
- one ResultSlot per provider (lock-guarded cell, written once by its worker)
- one readiness Event per provider (set after the slot write)
- a ProgressCounter advanced by the progress watcher

Workers call commit(), which stores the result before setting the flag.
Event.set() and Event.is_set() both go through the event's internal lock,
so a reader that sees a flag set also sees the committed slot value.
"""

from __future__ import annotations

import threading
import time

from .result_types import SummarizationRequest, SummaryResult


class ResultSlot:
    """A mutually exclusive cell holding one provider's result."""

    def __init__(self):
        self._lock = threading.Lock()
        self._result: SummaryResult | None = None

    def store(self, result: SummaryResult) -> None:
        with self._lock:
            self._result = result

    def get(self) -> SummaryResult | None:
        with self._lock:
            return self._result

    def clear(self) -> None:
        with self._lock:
            self._result = None

    @property
    def text(self) -> str:
        """Display text of the stored result, or '' before the worker commits."""
        result = self.get()
        return result.display_text if result is not None else ""


class ProgressCounter:
    """Elapsed-seconds counter. Non-decreasing until reset()."""

    def __init__(self):
        self._lock = threading.Lock()
        self._value = 0

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


class DispatchCycle:
    """
    Slots, readiness flags and progress counter for one request.

    Attributes:
        request: The request this cycle serves.
        slots: ResultSlot per provider index.
        ready: threading.Event per provider index.
        counter: ProgressCounter for the cycle.
    """

    def __init__(self, request: SummarizationRequest):
        self.request = request
        size = len(request.providers)
        self.slots = [ResultSlot() for _ in range(size)]
        self.ready = [threading.Event() for _ in range(size)]
        self.counter = ProgressCounter()

    def __len__(self) -> int:
        return len(self.slots)

    @property
    def provider_ids(self) -> tuple[str, ...]:
        return self.request.providers

    @property
    def text(self) -> str:
        return self.request.text

    def commit(self, index: int, result: SummaryResult) -> None:
        """
        Store a worker's final result, then mark its provider ready.

        Raises:
            RuntimeError: If the slot was already committed this cycle.
        """
        if self.ready[index].is_set():
            raise RuntimeError(
                f"Slot {index} ({self.provider_ids[index]}) already committed for this cycle"
            )
        self.slots[index].store(result)
        self.ready[index].set()

    def is_ready(self, index: int) -> bool:
        return self.ready[index].is_set()

    def all_ready(self) -> bool:
        return all(flag.is_set() for flag in self.ready)

    def wait(self, timeout: float | None = None) -> bool:
        """
        Block until every provider is ready or the timeout expires.

        Returns:
            True if all flags were set before the timeout.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        for flag in self.ready:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            if not flag.wait(remaining):
                return False
        return True

    def reset(self) -> None:
        """Clear flags, slots and counter for reuse."""
        # Flags first, so no reader sees "ready" next to an empty slot
        for flag in self.ready:
            flag.clear()
        for slot in self.slots:
            slot.clear()
        self.counter.reset()

    def results(self) -> list[SummaryResult | None]:
        return [slot.get() for slot in self.slots]

    def summaries(self) -> list[str]:
        """Display text per slot, '' for providers that have not committed."""
        return [slot.text for slot in self.slots]

    @property
    def progress(self) -> int:
        return self.counter.value
