"""Extracts the answer text from backend response envelopes."""

from __future__ import annotations

import json
from typing import Any, Dict

from ..errors import MissingContentError, MissingTextError, ResponseParseError


def _load_payload(raw: bytes | str) -> Dict[str, Any]:
    """Parse a response body into a JSON object."""
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        payload = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ResponseParseError(f"failed to parse response: {exc}") from exc
    if not isinstance(payload, dict):
        raise ResponseParseError("failed to parse response: expected a JSON object")
    return payload


def decode_messages(raw: bytes | str) -> str:
    """Return ``content[0].text`` from a messages-style reply."""
    payload = _load_payload(raw)
    content = payload.get("content")
    if not isinstance(content, list) or not content:
        raise MissingContentError("no content found in the response")
    first = content[0]
    text = first.get("text") if isinstance(first, dict) else None
    if not isinstance(text, str):
        raise MissingTextError("unable to extract text content from the response")
    return text


def decode_chat_completion(raw: bytes | str) -> str:
    """Return ``choices[0].message.content`` from a chat-completion reply."""
    payload = _load_payload(raw)
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        raise MissingContentError("no choices found in the response")
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    text = message.get("content") if isinstance(message, dict) else None
    if not isinstance(text, str):
        raise MissingTextError("unable to extract message content from the response")
    return text


__all__ = ["decode_chat_completion", "decode_messages"]
