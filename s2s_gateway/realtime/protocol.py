"""Realtime protocol message tags and builders.

Every frame on both hops is a single JSON object with a ``type`` discriminator.
The relay only interprets the status tags it emits itself; everything else is
opaque and forwarded verbatim.
"""

from __future__ import annotations

import base64
from typing import Any
from collections.abc import Sequence

# Relay status tags (relay -> client)
MSG_CONNECTED = "connected"
MSG_QUEUED = "queued"
MSG_DISCONNECTED = "disconnected"
MSG_ERROR = "error"

# Client -> upstream
MSG_CONVERSATION_ITEM_CREATE = "conversation.item.create"
MSG_RESPONSE_CREATE = "response.create"

# Upstream -> client (consumed by callers, not by the relay)
MSG_RESPONSE_AUDIO_DELTA = "response.audio.delta"
MSG_RESPONSE_AUDIO_DONE = "response.audio.done"
MSG_RESPONSE_AUDIO_TRANSCRIPT_DELTA = "response.audio_transcript.delta"
MSG_MESSAGE = "message"

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"

CONTENT_INPUT_AUDIO = "input_audio"
CONTENT_INPUT_TEXT = "input_text"
CONTENT_AUDIO = "audio"

DEFAULT_RESPONSE_MODALITIES = ("audio", "text")


def status_message(msg_type: str, **fields: Any) -> dict[str, Any]:
    msg: dict[str, Any] = {"type": msg_type}
    msg.update(fields)
    return msg


def error_message(message: str) -> dict[str, Any]:
    return {"type": MSG_ERROR, "message": message}


def input_audio_part(pcm: bytes) -> dict[str, Any]:
    return {"type": CONTENT_INPUT_AUDIO, "audio": base64.b64encode(pcm).decode("ascii")}


def input_text_part(text: str) -> dict[str, Any]:
    return {"type": CONTENT_INPUT_TEXT, "text": text}


def conversation_item_create(content: Sequence[dict[str, Any]], *, role: str = ROLE_USER) -> dict[str, Any]:
    return {
        "type": MSG_CONVERSATION_ITEM_CREATE,
        "item": {
            "type": MSG_MESSAGE,
            "role": role,
            "content": list(content),
        },
    }


def response_create(
    instructions: str,
    *,
    modalities: Sequence[str] = DEFAULT_RESPONSE_MODALITIES,
) -> dict[str, Any]:
    return {
        "type": MSG_RESPONSE_CREATE,
        "response": {
            "modalities": list(modalities),
            "instructions": instructions,
        },
    }


def is_assistant_audio_message(msg: dict[str, Any]) -> bool:
    """True for an assistant ``message`` frame whose content carries an audio part."""
    if msg.get("type") != MSG_MESSAGE:
        return False
    inner = msg.get("message")
    if not isinstance(inner, dict) or inner.get("role") != ROLE_ASSISTANT:
        return False
    content = inner.get("content")
    if not isinstance(content, list):
        return False
    return any(isinstance(part, dict) and part.get("type") == CONTENT_AUDIO for part in content)


__all__ = [
    "MSG_CONNECTED",
    "MSG_QUEUED",
    "MSG_DISCONNECTED",
    "MSG_ERROR",
    "MSG_CONVERSATION_ITEM_CREATE",
    "MSG_RESPONSE_CREATE",
    "MSG_RESPONSE_AUDIO_DELTA",
    "MSG_RESPONSE_AUDIO_DONE",
    "MSG_RESPONSE_AUDIO_TRANSCRIPT_DELTA",
    "MSG_MESSAGE",
    "ROLE_USER",
    "ROLE_ASSISTANT",
    "CONTENT_INPUT_AUDIO",
    "CONTENT_INPUT_TEXT",
    "CONTENT_AUDIO",
    "DEFAULT_RESPONSE_MODALITIES",
    "status_message",
    "error_message",
    "input_audio_part",
    "input_text_part",
    "conversation_item_create",
    "response_create",
    "is_assistant_audio_message",
]
