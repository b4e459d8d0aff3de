from __future__ import annotations

from typing import Any, Optional, Protocol

from contracts.ui_protocol import EVENT_SETTINGS, EVENT_TIMER, EVENT_TIP
from pomodoro import (
    TimerSettings,
    TimerSnapshot,
    accent_color,
    accent_for,
    display_label,
    format_time,
    progress_fraction,
)


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...

    def publish_state(
        self,
        state: str,
        *,
        message: Optional[str] = None,
        **payload: Any,
    ) -> None:
        ...


def timer_payload(snapshot: TimerSnapshot) -> dict[str, Any]:
    """Presentation fields derived from one timer snapshot."""
    return {
        "mode": snapshot.mode,
        "phase": snapshot.phase,
        "label": display_label(snapshot.mode, snapshot.phase),
        "display": format_time(snapshot.display_seconds),
        "remaining_seconds": snapshot.remaining_seconds,
        "total_seconds": snapshot.total_seconds,
        "elapsed_seconds": snapshot.elapsed_seconds,
        "progress": round(progress_fraction(snapshot), 4),
        "accent": accent_for(snapshot.mode, snapshot.phase),
        "accent_color": accent_color(snapshot.mode, snapshot.phase),
        "running": snapshot.is_running,
    }


class RuntimeUIPublisher:
    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def publish_state(
        self,
        state: str,
        *,
        message: Optional[str] = None,
        **payload: Any,
    ) -> None:
        if self._ui_server:
            self._ui_server.publish_state(state, message=message, **payload)

    def publish_timer_update(
        self,
        snapshot: TimerSnapshot,
        *,
        action: str,
        accepted: Optional[bool] = None,
        reason: str = "",
    ) -> None:
        payload = timer_payload(snapshot)
        payload["action"] = action
        if accepted is not None:
            payload["accepted"] = accepted
        if reason:
            payload["reason"] = reason
        self.publish(EVENT_TIMER, **payload)

    def publish_tip(self, text: Optional[str], *, loading: bool) -> None:
        self.publish(EVENT_TIP, text=text, loading=loading)

    def publish_settings(self, settings: TimerSettings) -> None:
        self.publish(EVENT_SETTINGS, **settings.as_dict())
