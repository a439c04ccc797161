"""
Parallel execution utilities for Multisumm.

Strategy Pattern-based task execution plus the progress watcher that
signals the end of a dispatch cycle.

Components:
    ExecutorStrategy - Abstract base class defining the execution interface
    ThreadPoolStrategy - Thread-based parallel execution (production)
    SequentialStrategy - Inline execution (testing/debugging)
    ProgressWatcher - Polls readiness flags and advances the elapsed counter
    format_duration - Renders a counter value as "2m 30s"

Usage Example:
    from multisumm.parallel import ThreadPoolStrategy, ProgressWatcher

    strategy = ThreadPoolStrategy(max_workers=len(providers) + 1)
    for index in range(len(providers)):
        strategy.submit(worker.run, index)
    done = strategy.submit(ProgressWatcher(ui_queue).watch, cycle)

Testing Example:
    from multisumm.parallel import SequentialStrategy

    # Workers finish inside submit(); the watcher returns after one poll
    dispatcher = SummaryDispatcher(strategy=SequentialStrategy())
"""

from .executor_strategy import (
    ExecutorStrategy,
    ThreadPoolStrategy,
    SequentialStrategy,
)
from .progress_watcher import ProgressWatcher, format_duration

__all__ = [
    # Strategies
    'ExecutorStrategy',
    'ThreadPoolStrategy',
    'SequentialStrategy',
    # Progress tracking
    'ProgressWatcher',
    'format_duration',
]
