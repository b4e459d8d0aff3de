"""User-editable phase durations and lenient parsing of settings form input."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

from .constants import (
    DEFAULT_FOCUS_MINUTES,
    DEFAULT_LONG_BREAK_MINUTES,
    DEFAULT_SHORT_BREAK_MINUTES,
    PHASE_FOCUS,
    PHASE_LONG_BREAK,
    PHASE_SHORT_BREAK,
)


@dataclass(frozen=True)
class TimerSettings:
    """Pomodoro phase durations in whole minutes."""
    focus_minutes: int = DEFAULT_FOCUS_MINUTES
    short_break_minutes: int = DEFAULT_SHORT_BREAK_MINUTES
    long_break_minutes: int = DEFAULT_LONG_BREAK_MINUTES

    def __post_init__(self) -> None:
        for name in ("focus_minutes", "short_break_minutes", "long_break_minutes"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got: {value!r}")

    def minutes_for(self, phase: str) -> int:
        if phase == PHASE_FOCUS:
            return self.focus_minutes
        if phase == PHASE_SHORT_BREAK:
            return self.short_break_minutes
        if phase == PHASE_LONG_BREAK:
            return self.long_break_minutes
        raise ValueError(f"Unknown pomodoro phase: {phase!r}")

    def duration_seconds(self, phase: str) -> int:
        return self.minutes_for(phase) * 60

    def as_dict(self) -> dict[str, int]:
        return {
            "focus_minutes": self.focus_minutes,
            "short_break_minutes": self.short_break_minutes,
            "long_break_minutes": self.long_break_minutes,
        }


def parse_settings_input(raw: Mapping[str, Any]) -> TimerSettings:
    """Build settings from form values, substituting defaults for bad fields.

    Absent, blank, non-numeric, oversized and non-positive values fall back
    to the default for that field. Numeric values are truncated to whole
    minutes.
    """
    return TimerSettings(
        focus_minutes=_minutes_or_default(raw.get("focus_minutes"), DEFAULT_FOCUS_MINUTES),
        short_break_minutes=_minutes_or_default(
            raw.get("short_break_minutes"),
            DEFAULT_SHORT_BREAK_MINUTES,
        ),
        long_break_minutes=_minutes_or_default(
            raw.get("long_break_minutes"),
            DEFAULT_LONG_BREAK_MINUTES,
        ),
    )


def _minutes_or_default(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    if not isinstance(value, (int, float, str)):
        return default

    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (OverflowError, ValueError):
        return default

    if not math.isfinite(number):
        return default

    minutes = int(number)
    if minutes <= 0:
        return default
    return minutes
