"""In-memory timer state machine with drift-corrected, frame-driven advancing."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from .constants import (
    COUNTDOWN_MODES,
    CONTEXT_FOCUS_COMPLETED,
    DEFAULT_TIMER_SECONDS,
    MODE_POMODORO,
    MODE_STOPWATCH,
    MODES,
    PHASE_FOCUS,
    PHASES,
    TICK_THRESHOLD_MS,
)
from .settings import TimerSettings

TimerMode = Literal["pomodoro", "stopwatch", "timer"]
SessionPhase = Literal["focus", "short_break", "long_break"]


def monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


@dataclass
class TimerState:
    """Mutable timer counters owned by exactly one `TimingEngine`."""
    mode: TimerMode
    phase: SessionPhase
    remaining_seconds: int
    total_seconds: int
    elapsed_seconds: int = 0
    is_running: bool = False
    last_tick_ms: int = 0


@dataclass(frozen=True)
class TimerSnapshot:
    """Immutable timer snapshot exposed to runtime and UI publishers."""
    mode: TimerMode
    phase: SessionPhase
    remaining_seconds: int
    total_seconds: int
    elapsed_seconds: int
    is_running: bool

    @property
    def is_countdown(self) -> bool:
        return self.mode in COUNTDOWN_MODES

    @property
    def display_seconds(self) -> int:
        if self.mode == MODE_STOPWATCH:
            return self.elapsed_seconds
        return self.remaining_seconds


@dataclass(frozen=True)
class TimerTick:
    """Result of an `advance` call that moved the clock by whole seconds."""
    snapshot: TimerSnapshot
    seconds_passed: int
    completed: bool = False
    tip_context: Optional[str] = None

    @property
    def focus_completed(self) -> bool:
        return self.tip_context == CONTEXT_FOCUS_COMPLETED


class TimingEngine:
    """Pomodoro/stopwatch/timer state machine advanced by an external scheduler.

    The engine owns no loop. A scheduler calls `advance(now_ms)` once per frame
    while the timer runs; whole seconds are derived from clock deltas and the
    sub-second remainder is carried forward so irregular or throttled frames do
    not accumulate drift.
    """

    def __init__(
        self,
        *,
        settings: Optional[TimerSettings] = None,
        clock: Optional[Callable[[], int]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._settings = settings or TimerSettings()
        self._clock = clock or monotonic_ms
        self._logger = logger or logging.getLogger("pomodoro")

        focus_seconds = self._settings.duration_seconds(PHASE_FOCUS)
        self._state = TimerState(
            mode=MODE_POMODORO,
            phase=PHASE_FOCUS,
            remaining_seconds=focus_seconds,
            total_seconds=focus_seconds,
        )

    @property
    def settings(self) -> TimerSettings:
        return self._settings

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    @property
    def last_tick_ms(self) -> int:
        return self._state.last_tick_ms

    def snapshot(self) -> TimerSnapshot:
        state = self._state
        return TimerSnapshot(
            mode=state.mode,
            phase=state.phase,
            remaining_seconds=state.remaining_seconds,
            total_seconds=state.total_seconds,
            elapsed_seconds=state.elapsed_seconds,
            is_running=state.is_running,
        )

    def start(self) -> None:
        state = self._state
        if state.is_running:
            return
        if state.mode in COUNTDOWN_MODES and state.remaining_seconds <= 0:
            self._logger.debug("Start ignored: %s countdown already at zero", state.mode)
            return

        state.last_tick_ms = self._clock()
        state.is_running = True
        self._logger.info(
            "Timer started: mode=%s phase=%s remaining=%ss elapsed=%ss",
            state.mode,
            state.phase,
            state.remaining_seconds,
            state.elapsed_seconds,
        )

    def pause(self) -> None:
        state = self._state
        if not state.is_running:
            return

        state.is_running = False
        self._logger.info(
            "Timer paused: mode=%s remaining=%ss elapsed=%ss",
            state.mode,
            state.remaining_seconds,
            state.elapsed_seconds,
        )

    def toggle(self) -> None:
        if self._state.is_running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        state = self._state
        state.is_running = False
        if state.mode == MODE_STOPWATCH:
            state.elapsed_seconds = 0
        elif state.mode == MODE_POMODORO:
            self._load_duration(self._settings.duration_seconds(state.phase))
        else:
            self._load_duration(DEFAULT_TIMER_SECONDS)
        self._logger.info("Timer reset: mode=%s phase=%s", state.mode, state.phase)

    def set_mode(self, mode: TimerMode) -> None:
        if mode not in MODES:
            raise ValueError(f"Unknown timer mode: {mode!r}")

        state = self._state
        state.mode = mode
        state.is_running = False
        if mode == MODE_POMODORO:
            self.set_phase(PHASE_FOCUS)
            return

        if mode == MODE_STOPWATCH:
            state.elapsed_seconds = 0
        else:
            self._load_duration(DEFAULT_TIMER_SECONDS)
        self._logger.info("Mode changed: mode=%s", mode)

    def set_phase(self, phase: SessionPhase) -> None:
        if phase not in PHASES:
            raise ValueError(f"Unknown pomodoro phase: {phase!r}")

        state = self._state
        state.phase = phase
        state.is_running = False
        self._load_duration(self._settings.duration_seconds(phase))
        self._logger.info(
            "Phase changed: mode=%s phase=%s duration=%ss",
            state.mode,
            phase,
            state.total_seconds,
        )

    def apply_settings(self, settings: TimerSettings) -> None:
        self._settings = settings
        self._logger.info(
            "Settings saved: focus=%smin short=%smin long=%smin",
            settings.focus_minutes,
            settings.short_break_minutes,
            settings.long_break_minutes,
        )
        self.reset()

    def advance(self, now_ms: int) -> Optional[TimerTick]:
        """Apply whole seconds elapsed since the last tick.

        Returns None when the timer is paused or less than one second has
        accumulated; in the latter case `last_tick_ms` stays put so the
        partial second keeps accruing.
        """
        state = self._state
        if not state.is_running:
            return None

        delta = now_ms - state.last_tick_ms
        if delta < TICK_THRESHOLD_MS:
            return None

        seconds_passed = delta // TICK_THRESHOLD_MS
        state.last_tick_ms = now_ms - (delta % TICK_THRESHOLD_MS)

        if state.mode == MODE_STOPWATCH:
            state.elapsed_seconds += seconds_passed
            return TimerTick(snapshot=self.snapshot(), seconds_passed=seconds_passed)

        if state.remaining_seconds > seconds_passed:
            state.remaining_seconds -= seconds_passed
            return TimerTick(snapshot=self.snapshot(), seconds_passed=seconds_passed)

        state.remaining_seconds = 0
        state.is_running = False
        tip_context = None
        if state.mode == MODE_POMODORO and state.phase == PHASE_FOCUS:
            tip_context = CONTEXT_FOCUS_COMPLETED
        self._logger.info("Timer completed: mode=%s phase=%s", state.mode, state.phase)
        return TimerTick(
            snapshot=self.snapshot(),
            seconds_passed=seconds_passed,
            completed=True,
            tip_context=tip_context,
        )

    def _load_duration(self, seconds: int) -> None:
        self._state.remaining_seconds = seconds
        self._state.total_seconds = seconds
