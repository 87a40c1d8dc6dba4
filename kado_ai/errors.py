"""Failure types raised by the kado-ai pipeline."""

from __future__ import annotations


class KadoError(RuntimeError):
    """Base class for every failure surfaced by kado-ai."""


class ConfigError(KadoError):
    """Raised when required settings are missing or cannot be read."""


class PromptWriteError(KadoError):
    """Raised when the assembled prompt cannot be saved for review."""


class OperationCancelled(KadoError):
    """Raised by callers that prefer an exception for a declined confirmation."""

    def __init__(self, message: str = "operation cancelled by user") -> None:
        super().__init__(message)


class UnsupportedBackendError(KadoError):
    """Raised when the configured backend kind has no adapter."""

    def __init__(self, backend: str) -> None:
        super().__init__(f"unsupported backend: {backend}")
        self.backend = backend


class TransportError(KadoError):
    """Raised when the HTTP call to the backend fails."""

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.detail = detail


class DecodeError(KadoError):
    """Raised when a backend reply does not have the expected shape."""


class ResponseParseError(DecodeError):
    """The response body is not a JSON object."""


class MissingContentError(DecodeError):
    """The response carries no answer entries."""


class MissingTextError(DecodeError):
    """The first answer entry has no text."""


__all__ = [
    "ConfigError",
    "DecodeError",
    "KadoError",
    "MissingContentError",
    "MissingTextError",
    "OperationCancelled",
    "PromptWriteError",
    "ResponseParseError",
    "TransportError",
    "UnsupportedBackendError",
]
