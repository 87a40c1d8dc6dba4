"""Request builders for the supported AI providers."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict

from ..config import AIBackendConfig
from .decoder import decode_chat_completion, decode_messages
from .kinds import BackendKind


@dataclass(frozen=True)
class BackendRequest:
    """An outbound HTTP request, ready for the transport."""

    url: str
    headers: Dict[str, str]
    payload: Dict[str, object] = field(default_factory=dict)

    def body(self) -> bytes:
        return json.dumps(self.payload).encode("utf-8")


class Backend(ABC):
    """Contract for provider adapters: build the request, parse the reply."""

    kind: BackendKind
    endpoint: str

    @abstractmethod
    def build_request(self, prompt: str, config: AIBackendConfig) -> BackendRequest:
        """Return the HTTP request that asks the provider about ``prompt``."""

    @abstractmethod
    def parse_response(self, raw: bytes | str) -> str:
        """Extract the answer text from the provider's response body."""

    @staticmethod
    def _user_messages(prompt: str) -> list[dict[str, str]]:
        return [{"role": "user", "content": prompt}]


class ChatCompletionsBackend(Backend):
    """OpenAI-style chat completions endpoint with bearer authentication."""

    kind = BackendKind.CHATGPT
    endpoint = "https://api.openai.com/v1/chat/completions"

    def build_request(self, prompt: str, config: AIBackendConfig) -> BackendRequest:
        return BackendRequest(
            url=self.endpoint,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {config.api_key}",
            },
            payload={
                "model": config.model,
                "messages": self._user_messages(prompt),
            },
        )

    def parse_response(self, raw: bytes | str) -> str:
        return decode_chat_completion(raw)


class MessagesBackend(Backend):
    """Anthropic messages endpoint authenticated with an API-key header."""

    kind = BackendKind.ANTHROPIC_MESSAGES
    endpoint = "https://api.anthropic.com/v1/messages"
    api_version = "2023-06-01"
    max_tokens = 1024

    def build_request(self, prompt: str, config: AIBackendConfig) -> BackendRequest:
        return BackendRequest(
            url=self.endpoint,
            headers={
                "Content-Type": "application/json",
                "x-api-key": config.api_key,
                "anthropic-version": self.api_version,
            },
            payload={
                "model": config.model,
                "max_tokens": self.max_tokens,
                "messages": self._user_messages(prompt),
            },
        )

    def parse_response(self, raw: bytes | str) -> str:
        return decode_messages(raw)


_BACKENDS: Dict[BackendKind, Backend] = {
    BackendKind.CHATGPT: ChatCompletionsBackend(),
    BackendKind.ANTHROPIC_MESSAGES: MessagesBackend(),
}


def get_backend(kind: str | BackendKind) -> Backend:
    """Return the adapter for ``kind``; unknown kinds raise UnsupportedBackendError."""
    return _BACKENDS[BackendKind.parse(kind)]


def decode_response(raw: bytes | str, backend: str | BackendKind) -> str:
    """Decode ``raw`` with the envelope shape of ``backend``."""
    return get_backend(backend).parse_response(raw)


__all__ = [
    "Backend",
    "BackendRequest",
    "ChatCompletionsBackend",
    "MessagesBackend",
    "decode_response",
    "get_backend",
]
