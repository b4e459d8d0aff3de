"""Mode, phase, duration, and accent constants used by the timing engine."""

from __future__ import annotations

MODE_POMODORO = "pomodoro"
MODE_STOPWATCH = "stopwatch"
MODE_TIMER = "timer"

MODES: tuple[str, ...] = (MODE_POMODORO, MODE_STOPWATCH, MODE_TIMER)
COUNTDOWN_MODES: frozenset[str] = frozenset({MODE_POMODORO, MODE_TIMER})

PHASE_FOCUS = "focus"
PHASE_SHORT_BREAK = "short_break"
PHASE_LONG_BREAK = "long_break"

PHASES: tuple[str, ...] = (PHASE_FOCUS, PHASE_SHORT_BREAK, PHASE_LONG_BREAK)

DEFAULT_FOCUS_MINUTES = 25
DEFAULT_SHORT_BREAK_MINUTES = 5
DEFAULT_LONG_BREAK_MINUTES = 15

# Timer mode has no duration input; reset and mode switch always use this.
DEFAULT_TIMER_SECONDS = 5 * 60

TICK_THRESHOLD_MS = 1000

CONTEXT_FOCUS_COMPLETED = "Focus Completed"
CONTEXT_RELAXING_BREAK = "Relaxing Break"
CONTEXT_PRODUCTIVITY = "Productivity"

ACCENT_TOMATO = "tomato"
ACCENT_SAGE = "sage"
ACCENT_SKY = "sky"
ACCENT_AMBER = "amber"

ACCENT_COLORS: dict[str, str] = {
    ACCENT_TOMATO: "#ff6347",
    ACCENT_SAGE: "#66cdaa",
    ACCENT_SKY: "#60a5fa",
    ACCENT_AMBER: "#fbbf24",
}

PHASE_LABELS: dict[str, str] = {
    PHASE_FOCUS: "Focus",
    PHASE_SHORT_BREAK: "Short Break",
    PHASE_LONG_BREAK: "Long Break",
}

MODE_LABELS: dict[str, str] = {
    MODE_POMODORO: "Pomodoro",
    MODE_STOPWATCH: "Stopwatch",
    MODE_TIMER: "Timer",
}
