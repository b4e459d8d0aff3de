"""Utilities for serializing UI events, parsing commands, and sticky state."""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from contracts.ui_protocol import (
    COMMAND_NAMES,
    MESSAGE_COMMAND,
    STICKY_EVENT_ORDER,
    STICKY_EVENT_TYPES,
)


def make_event(
    event_type: str,
    *,
    now_fn: Callable[[], datetime] | None = None,
    **payload: Any,
) -> str:
    """Serialize an event payload with type and timestamp for websocket delivery."""
    now = now_fn() if now_fn is not None else datetime.now(timezone.utc)
    return json.dumps(
        {
            "type": event_type,
            "timestamp": now.isoformat(),
            **payload,
        }
    )


def parse_command(raw: str | bytes) -> Optional[dict[str, Any]]:
    """Decode a websocket command message, returning None for anything malformed."""
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return None

    try:
        message = json.loads(raw)
    except ValueError:
        return None

    if not isinstance(message, dict):
        return None
    if message.get("type") != MESSAGE_COMMAND:
        return None

    command = message.get("command")
    if not isinstance(command, str) or command.strip().lower() not in COMMAND_NAMES:
        return None

    payload = {key: value for key, value in message.items() if key != "type"}
    payload["command"] = command.strip().lower()
    return payload


class StickyEventStore:
    """Thread-safe cache of sticky events replayed to new websocket clients."""
    def __init__(self):
        self._events: dict[str, str] = {}
        self._lock = threading.Lock()

    def remember(self, event_type: str, message: str) -> None:
        if event_type not in STICKY_EVENT_TYPES:
            return
        with self._lock:
            self._events[event_type] = message

    def snapshot(self) -> list[str]:
        with self._lock:
            return [self._events[key] for key in STICKY_EVENT_ORDER if key in self._events]
