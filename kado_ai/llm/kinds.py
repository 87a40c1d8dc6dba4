"""Supported AI backend kinds."""

from __future__ import annotations

from enum import Enum

from ..errors import UnsupportedBackendError


class BackendKind(str, Enum):
    """Closed set of providers the client can talk to."""

    CHATGPT = "chatgpt"
    ANTHROPIC_MESSAGES = "anthropic_messages"

    @classmethod
    def parse(cls, value: str | BackendKind) -> BackendKind:
        """Return the kind named by ``value`` or raise UnsupportedBackendError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedBackendError(str(value)) from None


__all__ = ["BackendKind"]
