"""
Progress watching for a dispatch cycle.

Polls the cycle's readiness flags once per interval and advances the
cycle's elapsed-seconds counter while any provider is still outstanding.
The watcher's return is the cycle's "all done" signal; the dispatcher
hands its Future to the caller.

The counter is advisory: it never affects which results end up in the
slots, only the "waiting N seconds" value shown by the UI.

Usage:
    watcher = ProgressWatcher(ui_queue)
    future = strategy.submit(watcher.watch, cycle)

    # UI receives messages like:
    # ('progress', 1)
    # ('progress', 2)
"""

from __future__ import annotations

import time
from queue import Queue
from typing import TYPE_CHECKING, Callable

from multisumm.config import PROGRESS_POLL_INTERVAL_SECONDS
from multisumm.logging_config import debug_log

if TYPE_CHECKING:
    from multisumm.summarization.cycle import DispatchCycle


def format_duration(seconds: float) -> str:
    """
    Format seconds into human-readable duration string.

    Args:
        seconds: Time in seconds

    Returns:
        Formatted string like "45s", "2m 30s", or "1h 23m 45s"

    Examples:
        >>> format_duration(45)
        '45s'
        >>> format_duration(150)
        '2m 30s'
        >>> format_duration(3725)
        '1h 2m 5s'
    """
    total_seconds = int(seconds)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    secs = total_seconds % 60

    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    elif minutes > 0:
        return f"{minutes}m {secs}s"
    else:
        return f"{secs}s"


class ProgressWatcher:
    """
    Liveness heartbeat for a dispatch cycle.

    Args:
        ui_queue: Optional queue for ('progress', seconds) messages.
        poll_interval: Seconds between readiness checks (default 1.0).
        sleep_fn: Sleep function, injectable so tests need not wait.

    Example:
        watcher = ProgressWatcher(poll_interval=1.0)
        elapsed = watcher.watch(cycle)  # blocks until every flag is set
    """

    def __init__(
        self,
        ui_queue: Queue | None = None,
        poll_interval: float = PROGRESS_POLL_INTERVAL_SECONDS,
        sleep_fn: Callable[[float], None] = time.sleep,
    ):
        self.ui_queue = ui_queue
        self.poll_interval = poll_interval
        self._sleep = sleep_fn

    def watch(self, cycle: DispatchCycle) -> int:
        """
        Block until all providers in the cycle are ready.

        Each pass sleeps one interval, then checks the flags. The terminating
        check does not advance the counter.

        Returns:
            Counter value when the cycle finished.
        """
        debug_log(f"[WATCHER] Watching {len(cycle)} providers "
                  f"(poll every {self.poll_interval}s)")

        while True:
            self._sleep(self.poll_interval)

            if cycle.all_ready():
                elapsed = cycle.counter.value
                debug_log(f"[WATCHER] All providers ready after {format_duration(elapsed)}")
                return elapsed

            elapsed = cycle.counter.increment()
            if self.ui_queue is not None:
                self.ui_queue.put(('progress', elapsed))
