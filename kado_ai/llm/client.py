"""HTTP client that dispatches prompts to the configured AI backend."""

from __future__ import annotations

from typing import Callable
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..config import AIBackendConfig
from ..errors import TransportError
from ..logging import get_logger
from .backends import BackendRequest, get_backend

Transport = Callable[[BackendRequest], bytes]

logger = get_logger("llm")


def urllib_transport(request: BackendRequest) -> bytes:
    """POST ``request`` and return the raw response body."""
    http_request = Request(
        request.url,
        data=request.body(),
        headers=request.headers,
        method="POST",
    )
    try:
        with urlopen(http_request) as response:  # type: ignore[arg-type]
            return response.read()
    except HTTPError as exc:
        detail = exc.read().decode("utf-8", errors="ignore") if hasattr(exc, "read") else ""
        message = detail.strip() or str(exc.reason)
        raise TransportError(
            f"AI backend request failed with status {exc.code}: {message}",
            status=exc.code,
            detail=detail or None,
        ) from exc
    except URLError as exc:
        raise TransportError(f"AI backend request failed: {exc.reason}") from exc
    except OSError as exc:
        raise TransportError(f"AI backend request failed: {exc}") from exc


class AIClient:
    """Sends prompts to one backend; the configuration is fixed for the client's lifetime."""

    def __init__(self, config: AIBackendConfig, *, transport: Transport | None = None) -> None:
        self._config = config
        self._transport = transport or urllib_transport

    @property
    def config(self) -> AIBackendConfig:
        return self._config

    def send(self, prompt: str) -> bytes:
        """Dispatch ``prompt`` and return the raw response body."""
        # Resolving the backend first keeps unsupported kinds off the network.
        backend = get_backend(self._config.backend)
        request = backend.build_request(prompt, self._config)
        logger.info("Sending prompt to %s (model %s)", backend.kind.value, self._config.model)
        logger.debug("POST %s", request.url)
        return self._transport(request)

    def decode(self, raw: bytes) -> str:
        """Extract the answer text from a response produced by ``send``."""
        return get_backend(self._config.backend).parse_response(raw)

    def recommend(self, prompt: str) -> str:
        """Send ``prompt`` and return the decoded answer text."""
        return self.decode(self.send(prompt))


__all__ = ["AIClient", "Transport", "urllib_transport"]
