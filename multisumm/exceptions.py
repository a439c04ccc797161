"""
Exceptions for Multisumm.

Provider errors never escape a worker: the worker catches them and stores
an error result in its slot. Dispatch errors are raised to the caller.
"""


class MultisummError(Exception):
    """Base exception for all Multisumm errors.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error (optional)
    """

    def __init__(self, message: str, *, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}\nDetails: {self.details}"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# Provider Errors
class ProviderError(MultisummError):
    """Base exception for failures talking to a summarization provider."""

    def __init__(self, message: str, *, provider_id: str | None = None, details: str | None = None):
        super().__init__(message, details=details)
        self.provider_id = provider_id


class TransportError(ProviderError):
    """Raised on connection failure, timeout, or a non-success HTTP status.

    Attributes:
        status_code: HTTP status when the server answered, else None
    """

    def __init__(
        self,
        message: str,
        *,
        provider_id: str | None = None,
        details: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, provider_id=provider_id, details=details)
        self.status_code = status_code


class ParseError(ProviderError):
    """Raised when a provider response does not have the expected shape."""
    pass


class UnsupportedProviderError(ProviderError):
    """Raised for a provider id with no registered adapter."""
    pass


# Dispatch Errors
class DispatchError(MultisummError):
    """Base exception for dispatcher misuse."""
    pass


class DispatchInProgressError(DispatchError):
    """Raised when a cycle is started or reset while another is still running."""
    pass


__all__ = [
    "MultisummError",
    "ProviderError",
    "TransportError",
    "ParseError",
    "UnsupportedProviderError",
    "DispatchError",
    "DispatchInProgressError",
]
