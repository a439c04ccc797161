"""
Summary Worker - one provider call, end to end.

For provider index i of a cycle the worker:
1. Resolves the provider adapter (unknown ids fail here, before any I/O)
2. Builds and sends the POST request (see _request_summary for the timeout)
3. Parses the response with the adapter's extraction rule
4. Commits the summary, or an error result, to slot i and sets flag i

Every failure is converted into an error result for that slot, so one
provider going down never stops its siblings or the cycle.
"""

from __future__ import annotations

from queue import Queue

import requests

from multisumm.config import REQUEST_TIMEOUT_SECONDS
from multisumm.exceptions import ProviderError, TransportError
from multisumm.logging_config import Timer, debug_log, error, warning
from multisumm.providers import ProviderAdapter, get_provider, resolve_provider_id

from .cycle import DispatchCycle
from .result_types import SummaryResult


class SummaryWorker:
    """
    Runs provider calls for one dispatch cycle.

    One instance serves every index in the cycle; run(i) handles provider i.
    The instance holds no per-call state, so run() is safe to call
    concurrently from pool threads.

    Attributes:
        cycle: The cycle whose slots and flags this worker writes.
        credentials: Provider id -> credential string.
        timeout: Per-call timeout in seconds.
        ui_queue: Optional queue for ('summary_ready', (index, result)).
    """

    def __init__(
        self,
        cycle: DispatchCycle,
        credentials: dict[str, str] | None = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        ui_queue: Queue | None = None,
    ):
        self.cycle = cycle
        self.credentials = credentials or {}
        self.timeout = timeout
        self.ui_queue = ui_queue

    def run(self, index: int) -> SummaryResult:
        """
        Summarize the cycle's text with provider `index` and commit the result.

        Returns:
            The result written to the slot.
        """
        provider_id = self.cycle.provider_ids[index]
        timer = Timer(f"[WORKER {provider_id}] Summary request")

        try:
            with timer:
                adapter = get_provider(provider_id, api_key=self._credential_for(provider_id))
                summary = self._request_summary(adapter, self.cycle.text)
            result = SummaryResult.ok(provider_id, summary, latency_ms=int(timer.get_duration_ms()))
            debug_log(f"[WORKER {provider_id}] Summary received in {result.latency_ms} ms "
                      f"({len(summary)} chars)")
        except ProviderError as e:
            result = SummaryResult.from_error(provider_id, e, latency_ms=int(timer.get_duration_ms()))
            warning(f"[WORKER {provider_id}] {result.display_text}")
        except Exception as e:
            result = SummaryResult.from_error(provider_id, e, latency_ms=int(timer.get_duration_ms()))
            error(f"[WORKER {provider_id}] Unexpected failure: {e}", exc_info=True)

        self.cycle.commit(index, result)

        if self.ui_queue is not None:
            self.ui_queue.put(('summary_ready', (index, result)))

        return result

    def _credential_for(self, provider_id: str) -> str | None:
        return self.credentials.get(provider_id) or self.credentials.get(resolve_provider_id(provider_id))

    def _request_summary(self, adapter: ProviderAdapter, text: str) -> str:
        """
        Send one request and parse the summary out of the response.

        The timeout is handed to requests as a single value, so it bounds the
        connect phase and each wait between received bytes, not the whole
        call. A server that keeps trickling bytes can hold the worker past
        `timeout` seconds; the call still ends when the server closes or
        stalls for `timeout` seconds.

        Raises:
            TransportError: On timeout, connection failure or non-2xx status.
            ParseError: If the response lacks the adapter's summary field.
        """
        prepared = adapter.build_request(text)
        debug_log(f"[WORKER {adapter.provider_id}] POST {prepared.url} "
                  f"({len(text)} chars, timeout={self.timeout}s)")

        try:
            response = requests.post(
                prepared.url,
                headers=prepared.headers,
                json=prepared.json,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise TransportError(
                f"Request timed out after {self.timeout} seconds",
                provider_id=adapter.provider_id,
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise TransportError(
                f"Cannot connect to {prepared.url}",
                provider_id=adapter.provider_id,
                details=str(e),
            ) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(
                f"Request failed: {e}",
                provider_id=adapter.provider_id,
            ) from e

        if not 200 <= response.status_code < 300:
            raise TransportError(
                f"Provider returned status {response.status_code}",
                provider_id=adapter.provider_id,
                status_code=response.status_code,
                details=(response.text or "")[:200],
            )

        return adapter.parse_response(response)
