"""
Multisumm - ask several summarization services about one document at once.
"""

from multisumm.summarization import (
    DispatchCycle,
    SummarizationRequest,
    SummaryDispatcher,
    SummaryResult,
)

__all__ = [
    "DispatchCycle",
    "SummarizationRequest",
    "SummaryDispatcher",
    "SummaryResult",
]
