"""AI backend adapters, response decoding and the HTTP client."""

from .backends import (
    Backend,
    BackendRequest,
    ChatCompletionsBackend,
    MessagesBackend,
    decode_response,
    get_backend,
)
from .client import AIClient, Transport, urllib_transport
from .decoder import decode_chat_completion, decode_messages
from .kinds import BackendKind

__all__ = [
    "AIClient",
    "Backend",
    "BackendKind",
    "BackendRequest",
    "ChatCompletionsBackend",
    "MessagesBackend",
    "Transport",
    "decode_chat_completion",
    "decode_messages",
    "decode_response",
    "get_backend",
    "urllib_transport",
]
