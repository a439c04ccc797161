"""
Execution strategies for provider fan-out.

Separates "which tasks a cycle runs" from "how they are scheduled", so the
dispatcher can run provider calls on a thread pool in production and
inline in tests.

Usage:
    # Production (one thread per provider plus the progress watcher)
    strategy = ThreadPoolStrategy(max_workers=4)

    # Testing (deterministic, runs each task at submit time)
    strategy = SequentialStrategy()

    future = strategy.submit(worker.run, 0)
"""

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, Future
from typing import Callable, TypeVar

from multisumm.config import PARALLEL_MAX_WORKERS

T = TypeVar('T')
R = TypeVar('R')


class ExecutorStrategy(ABC):
    """
    Abstract strategy for running dispatch tasks.

    Attributes:
        max_workers: Number of concurrent workers (1 for sequential).
    """

    max_workers: int

    @abstractmethod
    def submit(self, fn: Callable[[T], R], item: T) -> Future:
        """
        Submit a single task for execution.

        Args:
            fn: Function to execute.
            item: Argument to pass to the function.

        Returns:
            Future object that will contain the result.
        """
        pass

    @abstractmethod
    def shutdown(self, wait: bool = True, cancel_futures: bool = False) -> None:
        """
        Shutdown the executor and release resources.

        Args:
            wait: If True, wait for pending tasks to complete.
            cancel_futures: If True, cancel pending futures.
        """
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown(wait=True)
        return False


class ThreadPoolStrategy(ExecutorStrategy):
    """
    Thread-based execution strategy.

    Provider calls spend nearly all their time waiting on sockets, which
    releases the GIL, so threads give real overlap between providers.

    Args:
        max_workers: Maximum concurrent threads. Must cover every provider
                    plus the progress watcher, otherwise the watcher queues
                    behind slow providers and the counter starts late.

    Example:
        with ThreadPoolStrategy(max_workers=4) as strategy:
            futures = [strategy.submit(worker.run, i) for i in range(3)]
    """

    def __init__(self, max_workers: int = None):
        if max_workers is None:
            max_workers = PARALLEL_MAX_WORKERS

        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="multisumm",
        )
        self.max_workers = max_workers

    def submit(self, fn: Callable[[T], R], item: T) -> Future:
        """Submit a single task to the thread pool."""
        return self._executor.submit(fn, item)

    def shutdown(self, wait: bool = True, cancel_futures: bool = False) -> None:
        self._executor.shutdown(wait=wait, cancel_futures=cancel_futures)


class SequentialStrategy(ExecutorStrategy):
    """
    Sequential execution strategy for testing and debugging.

    Runs each task synchronously inside submit() and returns an already
    completed Future, so a dispatch cycle finishes before start() returns.
    Tasks run in submission order: all workers first, then the watcher.

    Example:
        dispatcher = SummaryDispatcher(strategy=SequentialStrategy())
    """

    def __init__(self):
        self.max_workers = 1

    def submit(self, fn: Callable[[T], R], item: T) -> Future:
        """
        Execute function synchronously and return completed Future.

        Exceptions are captured in the Future, as a pool would do.
        """
        future: Future = Future()
        try:
            result = fn(item)
            future.set_result(result)
        except Exception as e:
            future.set_exception(e)
        return future

    def shutdown(self, wait: bool = True, cancel_futures: bool = False) -> None:
        """No-op for sequential strategy (no resources to release)."""
        pass
