"""Frame handler that advances the timing engine and publishes tick side effects."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from contracts.ui_protocol import (
    ACTION_COMPLETED,
    ACTION_TICK,
    STATE_COMPLETED,
)
from pomodoro import TimerTick, TimingEngine, display_label

from .frames import FrameScheduler
from .tips import TipController
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class TickDependencies:
    """Dependencies required for driving the engine from frame callbacks."""
    engine: TimingEngine
    frames: FrameScheduler
    tips: TipController
    ui: RuntimeUIPublisher
    logger: logging.Logger


class TickProcessor:
    """Keeps exactly one frame request alive while the engine is running."""
    def __init__(self, dependencies: TickDependencies):
        self._dependencies = dependencies
        self._frame_handle: Optional[int] = None

    @property
    def frame_pending(self) -> bool:
        return self._dependencies.frames.is_pending(self._frame_handle)

    def sync_schedule(self) -> None:
        """Request or cancel the frame callback to match the engine run state."""
        deps = self._dependencies
        if deps.engine.is_running:
            if not self.frame_pending:
                self._frame_handle = deps.frames.request(self._on_frame)
            return

        if self._frame_handle is not None:
            deps.frames.cancel(self._frame_handle)
            self._frame_handle = None

    def _on_frame(self, now_ms: int) -> None:
        deps = self._dependencies
        self._frame_handle = None
        if not deps.engine.is_running:
            return

        tick = deps.engine.advance(now_ms)
        if tick is not None:
            self.handle_tick(tick)

        if deps.engine.is_running:
            self._frame_handle = deps.frames.request(self._on_frame)

    def handle_tick(self, tick: TimerTick) -> None:
        deps = self._dependencies
        if not tick.completed:
            deps.ui.publish_timer_update(tick.snapshot, action=ACTION_TICK)
            return

        snapshot = tick.snapshot
        label = display_label(snapshot.mode, snapshot.phase)
        deps.logger.info("%s completed", label)
        deps.ui.publish_timer_update(snapshot, action=ACTION_COMPLETED)
        deps.ui.publish_state(STATE_COMPLETED, message=f"{label} completed")
        if tick.tip_context:
            deps.tips.request(tick.tip_context)
