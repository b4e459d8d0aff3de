from .display import (
    accent_color,
    accent_for,
    display_label,
    format_time,
    progress_fraction,
    ring_dash_offset,
    tip_context_for,
)
from .service import (
    SessionPhase,
    TimerMode,
    TimerSnapshot,
    TimerState,
    TimerTick,
    TimingEngine,
    monotonic_ms,
)
from .settings import TimerSettings, parse_settings_input

__all__ = [
    "SessionPhase",
    "TimerMode",
    "TimerSettings",
    "TimerSnapshot",
    "TimerState",
    "TimerTick",
    "TimingEngine",
    "accent_color",
    "accent_for",
    "display_label",
    "format_time",
    "monotonic_ms",
    "parse_settings_input",
    "progress_fraction",
    "ring_dash_offset",
    "tip_context_for",
]
