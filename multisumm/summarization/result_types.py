"""
Result Types for Provider Fan-Out

Data structures passed between the dispatcher, its workers and the
presentation layer.

Key Types:
    SummarizationRequest - Input text plus the ordered provider ids to query
    SummaryResult - Outcome of one provider call (summary or error)
    ErrorKind - Which stage of a provider call failed

Usage:
    request = SummarizationRequest(
        text="The quick brown fox...",
        providers=("distilbart", "gemini", "cohere"),
    )

    result = SummaryResult.ok("gemini", "A fox jumps.", latency_ms=812)
    print(result.display_text)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from multisumm.config import DEFAULT_PROVIDERS
from multisumm.exceptions import (
    ParseError,
    TransportError,
    UnsupportedProviderError,
)


class ErrorKind(Enum):
    """Failure categories stored in a result slot."""

    TRANSPORT = "transport"
    PARSE = "parse"
    UNSUPPORTED_PROVIDER = "unsupported_provider"
    UNEXPECTED = "unexpected"

    @property
    def label(self) -> str:
        return _ERROR_LABELS[self]


_ERROR_LABELS = {
    ErrorKind.TRANSPORT: "Transport error",
    ErrorKind.PARSE: "Parse error",
    ErrorKind.UNSUPPORTED_PROVIDER: "Unsupported provider",
    ErrorKind.UNEXPECTED: "Unexpected error",
}


@dataclass(frozen=True)
class SummarizationRequest:
    """
    One input document and the providers to ask for a summary of it.

    Attributes:
        text: Input text, shared read-only by every worker in the cycle.
        providers: Ordered provider ids; slot i belongs to providers[i].
    """
    text: str
    providers: tuple[str, ...] = DEFAULT_PROVIDERS

    def __post_init__(self):
        # Accept any sequence but store a tuple so the request stays hashable
        object.__setattr__(self, "providers", tuple(self.providers))
        if not self.providers:
            raise ValueError("SummarizationRequest needs at least one provider")


@dataclass
class SummaryResult:
    """
    Outcome of a single provider call.

    Attributes:
        provider_id: Provider id as named in the request.
        summary: Summary text (empty when success is False).
        success: Whether the provider returned a usable summary.
        error_kind: Failure category when success is False.
        error_message: Error description when success is False.
        latency_ms: Wall-clock time spent on the call.
        status_code: HTTP status for transport errors where the server answered.
    """
    provider_id: str
    summary: str = ""
    success: bool = True
    error_kind: ErrorKind | None = None
    error_message: str | None = None
    latency_ms: int = 0
    status_code: int | None = None

    def __post_init__(self):
        """Validate that failed results carry a kind and a message."""
        if not self.success:
            if self.error_kind is None:
                self.error_kind = ErrorKind.UNEXPECTED
            if not self.error_message:
                self.error_message = "Unknown error during summarization"

    @classmethod
    def ok(cls, provider_id: str, summary: str, latency_ms: int = 0) -> SummaryResult:
        return cls(provider_id=provider_id, summary=summary, latency_ms=latency_ms)

    @classmethod
    def from_error(cls, provider_id: str, exc: Exception, latency_ms: int = 0) -> SummaryResult:
        """Convert an exception raised during a provider call into an error result."""
        if isinstance(exc, TransportError):
            kind = ErrorKind.TRANSPORT
        elif isinstance(exc, ParseError):
            kind = ErrorKind.PARSE
        elif isinstance(exc, UnsupportedProviderError):
            kind = ErrorKind.UNSUPPORTED_PROVIDER
        else:
            kind = ErrorKind.UNEXPECTED

        message = getattr(exc, "message", None) or str(exc) or exc.__class__.__name__
        return cls(
            provider_id=provider_id,
            success=False,
            error_kind=kind,
            error_message=message,
            latency_ms=latency_ms,
            status_code=getattr(exc, "status_code", None),
        )

    @property
    def display_text(self) -> str:
        """Summary text, or an error marker like '[Parse error] ...'."""
        if self.success:
            return self.summary
        return f"[{self.error_kind.label}] {self.error_message}"
