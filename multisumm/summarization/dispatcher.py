"""
Summary Dispatcher - fan one document out to every configured provider.

A dispatch cycle:
1. Builds a fresh DispatchCycle (empty slots, cleared flags, counter 0)
2. Submits one SummaryWorker task per provider index (not awaited)
3. Submits the ProgressWatcher and hands its Future to the caller

The Future resolving means every provider has committed its slot. Results
are read from the slots, not from the Future, and may be polled at any time
while the cycle runs.

Architecture:
    SummaryDispatcher
        ├── SummaryWorker.run(0..N-1)  → slot i, then flag i
        └── ProgressWatcher.watch      → counter, completion Future

Usage:
    from multisumm.summarization import SummaryDispatcher

    dispatcher = SummaryDispatcher(credentials={"gemini": "..."})
    done = dispatcher.start("The quick brown fox...")

    while not done.done():
        render(dispatcher.summaries(), dispatcher.progress)
        time.sleep(0.25)
"""

from __future__ import annotations

import threading
from concurrent.futures import Future
from functools import partial
from queue import Queue
from typing import Any, Sequence

from multisumm.config import DEFAULT_PROVIDERS, REQUEST_TIMEOUT_SECONDS
from multisumm.exceptions import DispatchInProgressError, UnsupportedProviderError
from multisumm.logging_config import debug_log, error, info
from multisumm.parallel import ExecutorStrategy, ProgressWatcher, ThreadPoolStrategy, format_duration
from multisumm.providers import get_provider, resolve_provider_id

from .cycle import DispatchCycle
from .result_types import SummarizationRequest, SummaryResult
from .worker import SummaryWorker


class SummaryDispatcher:
    """
    Orchestrates one fan-out summarization cycle at a time.

    Attributes:
        providers: Default provider ids for requests given as plain text.
        credentials: Provider id -> credential string, passed to workers.
        strategy: Injected ExecutorStrategy, or None for a per-cycle
                  ThreadPoolStrategy sized to the request.
        watcher: ProgressWatcher used for every cycle.
        ui_queue: Optional queue for progress and completion messages.
        timeout: Per-call timeout for provider requests.
    """

    def __init__(
        self,
        providers: Sequence[str] | None = None,
        credentials: dict[str, str] | None = None,
        strategy: ExecutorStrategy | None = None,
        watcher: ProgressWatcher | None = None,
        ui_queue: Queue | None = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        self.providers = tuple(providers or DEFAULT_PROVIDERS)
        self.credentials = dict(credentials or {})
        self.strategy = strategy
        self.ui_queue = ui_queue
        self.watcher = watcher or ProgressWatcher(ui_queue=ui_queue)
        self.timeout = timeout

        # Idle cycle so the UI can read empty slots before the first dispatch
        self._cycle = DispatchCycle(SummarizationRequest(text="", providers=self.providers))
        self._completion: Future | None = None
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Cycle control
    # ------------------------------------------------------------------

    def start(self, request: SummarizationRequest | str) -> Future:
        """
        Begin a cycle and return its completion Future.

        Args:
            request: A SummarizationRequest, or plain text to send to the
                     dispatcher's default providers.

        Returns:
            Future resolving to the final counter value once every
            provider has committed its slot.

        Raises:
            DispatchInProgressError: If the previous cycle is still running.
        """
        _, completion = self._launch(request)
        return completion

    def dispatch(self, request: SummarizationRequest | str) -> DispatchCycle:
        """
        Run a cycle to completion and return it.

        Blocks the calling thread; UIs should use start() instead.
        """
        cycle, completion = self._launch(request)
        completion.result()
        return cycle

    def reset(self) -> None:
        """
        Clear slots, flags and counter of the current cycle.

        Raises:
            DispatchInProgressError: If the cycle is still running.
        """
        with self._lock:
            if self.is_running:
                raise DispatchInProgressError("Cannot reset while a dispatch cycle is running")
            self._cycle.reset()
            self._completion = None
        debug_log("[DISPATCH] Cycle state reset")

    def _launch(self, request: SummarizationRequest | str) -> tuple[DispatchCycle, Future]:
        if isinstance(request, str):
            request = SummarizationRequest(text=request, providers=self.providers)

        with self._lock:
            if self.is_running:
                raise DispatchInProgressError(
                    "A dispatch cycle is already running",
                    details=f"{self.progress}s elapsed, providers: {', '.join(self._cycle.provider_ids)}",
                )

            # Fresh state before any worker can write
            cycle = DispatchCycle(request)
            self._cycle = cycle

            strategy = self.strategy
            owned_strategy = None
            if strategy is None:
                strategy = owned_strategy = ThreadPoolStrategy(max_workers=len(cycle) + 1)

            info(f"[DISPATCH] Starting cycle: {len(cycle)} providers "
                 f"({', '.join(cycle.provider_ids)}), {len(request.text)} chars")

            worker = SummaryWorker(
                cycle,
                credentials=self.credentials,
                timeout=self.timeout,
                ui_queue=self.ui_queue,
            )
            for index in range(len(cycle)):
                strategy.submit(worker.run, index)

            completion = strategy.submit(self.watcher.watch, cycle)
            self._completion = completion

        completion.add_done_callback(partial(self._on_cycle_done, cycle, owned_strategy))
        return cycle, completion

    def _on_cycle_done(
        self,
        cycle: DispatchCycle,
        owned_strategy: ExecutorStrategy | None,
        completion: Future,
    ) -> None:
        """Report the finished cycle and release a per-cycle thread pool."""
        exc = completion.exception()
        if exc is not None:
            error(f"[DISPATCH] Progress watcher failed: {exc}")
        else:
            results = cycle.results()
            failed = sum(1 for r in results if r is not None and not r.success)
            info(f"[DISPATCH] Cycle finished after {format_duration(cycle.progress)}: "
                 f"{len(results) - failed} succeeded, {failed} failed")
            if self.ui_queue is not None:
                self.ui_queue.put(('summaries_finished', results))

        if owned_strategy is not None:
            owned_strategy.shutdown(wait=False)

    # ------------------------------------------------------------------
    # Read-only access for the presentation layer
    # ------------------------------------------------------------------

    @property
    def cycle(self) -> DispatchCycle:
        return self._cycle

    @property
    def is_running(self) -> bool:
        completion = self._completion
        return completion is not None and not completion.done()

    @property
    def progress(self) -> int:
        """Elapsed seconds of the current cycle."""
        return self._cycle.progress

    def summaries(self) -> list[str]:
        return self._cycle.summaries()

    def results(self) -> list[SummaryResult | None]:
        return self._cycle.results()

    def get_provider_status(self) -> dict[str, dict[str, Any]]:
        """
        Report whether each default provider is supported and has a credential.

        Returns:
            Dict mapping provider id to status info
        """
        status = {}
        for provider_id in self.providers:
            try:
                credential = (self.credentials.get(provider_id)
                              or self.credentials.get(resolve_provider_id(provider_id)))
                adapter = get_provider(provider_id, api_key=credential)
            except UnsupportedProviderError as e:
                status[provider_id] = {
                    "supported": False,
                    "configured": False,
                    "error": e.message,
                }
            else:
                status[provider_id] = {
                    "supported": True,
                    "configured": adapter.is_configured(),
                    "api_url": adapter.api_url,
                }
        return status
