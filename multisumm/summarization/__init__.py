"""
Summarization Package for Multisumm - fan-out summarization across providers.

    from multisumm.summarization import (
        SummaryDispatcher, SummarizationRequest, SummaryResult, DispatchCycle,
    )

Architecture:
    ┌──────────────────────────────────────────────────────────────┐
    │  SummaryDispatcher (one cycle at a time)                     │
    │            ↓ submits                                         │
    │  SummaryWorker.run(i) × N    ProgressWatcher.watch(cycle)    │
    │            ↓ commit                    ↑ polls flags         │
    │  DispatchCycle: slots[i] → ready[i]    counter               │
    └──────────────────────────────────────────────────────────────┘
"""

from .result_types import (
    ErrorKind,
    SummarizationRequest,
    SummaryResult,
)
from .cycle import DispatchCycle, ProgressCounter, ResultSlot
from .worker import SummaryWorker
from .dispatcher import SummaryDispatcher

__all__ = [
    # Result types
    'ErrorKind',
    'SummarizationRequest',
    'SummaryResult',
    # Cycle state
    'DispatchCycle',
    'ProgressCounter',
    'ResultSlot',
    # Execution
    'SummaryWorker',
    'SummaryDispatcher',
]
