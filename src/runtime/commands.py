"""Dispatcher that applies UI commands to the timing engine and tip controller."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from contracts.ui_protocol import (
    COMMAND_DISMISS_TIP,
    COMMAND_PAUSE,
    COMMAND_REQUEST_TIP,
    COMMAND_RESET,
    COMMAND_SAVE_SETTINGS,
    COMMAND_SET_MODE,
    COMMAND_SET_PHASE,
    COMMAND_START,
    COMMAND_SYNC,
    COMMAND_TOGGLE,
    REASON_INVALID_MODE,
    REASON_INVALID_PHASE,
    REASON_NOT_POMODORO,
    REASON_TIP_LOADING,
    REASON_TIP_UNAVAILABLE,
    REASON_UNKNOWN_COMMAND,
    STATE_PAUSED,
    STATE_RUNNING,
)
from pomodoro import TimingEngine, display_label, parse_settings_input, tip_context_for
from pomodoro.constants import MODE_POMODORO, MODES, PHASES

from .ticks import TickProcessor
from .tips import TipController
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class CommandResult:
    """Outcome envelope for one UI command."""
    command: str
    accepted: bool
    reason: str = ""


class RuntimeCommandDispatcher:
    """Routes UI commands to engine transitions and keeps frames in sync."""
    def __init__(
        self,
        *,
        logger: logging.Logger,
        engine: TimingEngine,
        ticks: TickProcessor,
        tips: TipController,
        ui: RuntimeUIPublisher,
    ):
        self._logger = logger
        self._engine = engine
        self._ticks = ticks
        self._tips = tips
        self._ui = ui
        self._handlers: dict[str, Callable[[Mapping[str, Any]], CommandResult]] = {
            COMMAND_TOGGLE: self._handle_toggle,
            COMMAND_START: self._handle_start,
            COMMAND_PAUSE: self._handle_pause,
            COMMAND_RESET: self._handle_reset,
            COMMAND_SET_MODE: self._handle_set_mode,
            COMMAND_SET_PHASE: self._handle_set_phase,
            COMMAND_SAVE_SETTINGS: self._handle_save_settings,
            COMMAND_REQUEST_TIP: self._handle_request_tip,
            COMMAND_DISMISS_TIP: self._handle_dismiss_tip,
            COMMAND_SYNC: self._handle_sync,
        }

    def status_message(self) -> str:
        snapshot = self._engine.snapshot()
        label = display_label(snapshot.mode, snapshot.phase)
        if snapshot.is_running:
            return f"{label} running"
        return f"{label} paused"

    def publish_runtime_state(self) -> None:
        state = STATE_RUNNING if self._engine.is_running else STATE_PAUSED
        self._ui.publish_state(state, message=self.status_message())

    def handle_command(self, command: Mapping[str, Any]) -> CommandResult:
        raw_name = command.get("command")
        name = raw_name.strip().lower() if isinstance(raw_name, str) else ""
        handler = self._handlers.get(name)
        if handler is None:
            self._logger.warning("Unsupported UI command: %r", raw_name)
            return CommandResult(command=name, accepted=False, reason=REASON_UNKNOWN_COMMAND)

        result = handler(command)
        # A stopped engine must not keep a pending frame past this call.
        self._ticks.sync_schedule()
        if not result.accepted:
            self._logger.warning(
                "Rejected UI command: command=%s reason=%s",
                result.command,
                result.reason,
            )
        self._ui.publish_timer_update(
            self._engine.snapshot(),
            action=result.command,
            accepted=result.accepted,
            reason=result.reason,
        )
        self.publish_runtime_state()
        return result

    def _handle_toggle(self, command: Mapping[str, Any]) -> CommandResult:
        self._engine.toggle()
        return CommandResult(command=COMMAND_TOGGLE, accepted=True)

    def _handle_start(self, command: Mapping[str, Any]) -> CommandResult:
        self._engine.start()
        return CommandResult(command=COMMAND_START, accepted=True)

    def _handle_pause(self, command: Mapping[str, Any]) -> CommandResult:
        self._engine.pause()
        return CommandResult(command=COMMAND_PAUSE, accepted=True)

    def _handle_reset(self, command: Mapping[str, Any]) -> CommandResult:
        self._engine.reset()
        return CommandResult(command=COMMAND_RESET, accepted=True)

    def _handle_set_mode(self, command: Mapping[str, Any]) -> CommandResult:
        mode = _normalized(command.get("mode"))
        if mode not in MODES:
            return CommandResult(command=COMMAND_SET_MODE, accepted=False, reason=REASON_INVALID_MODE)

        self._engine.set_mode(mode)
        self._tips.clear()
        return CommandResult(command=COMMAND_SET_MODE, accepted=True)

    def _handle_set_phase(self, command: Mapping[str, Any]) -> CommandResult:
        phase = _normalized(command.get("phase"))
        if phase not in PHASES:
            return CommandResult(
                command=COMMAND_SET_PHASE,
                accepted=False,
                reason=REASON_INVALID_PHASE,
            )
        if self._engine.snapshot().mode != MODE_POMODORO:
            return CommandResult(
                command=COMMAND_SET_PHASE,
                accepted=False,
                reason=REASON_NOT_POMODORO,
            )

        self._engine.set_phase(phase)
        self._tips.clear()
        return CommandResult(command=COMMAND_SET_PHASE, accepted=True)

    def _handle_save_settings(self, command: Mapping[str, Any]) -> CommandResult:
        raw_settings = command.get("settings")
        source = raw_settings if isinstance(raw_settings, Mapping) else command
        settings = parse_settings_input(source)
        self._engine.apply_settings(settings)
        self._ui.publish_settings(settings)
        return CommandResult(command=COMMAND_SAVE_SETTINGS, accepted=True)

    def _handle_request_tip(self, command: Mapping[str, Any]) -> CommandResult:
        snapshot = self._engine.snapshot()
        context = tip_context_for(snapshot.mode, snapshot.phase)
        if not self._tips.request(context):
            return CommandResult(
                command=COMMAND_REQUEST_TIP,
                accepted=False,
                reason=REASON_TIP_LOADING if self._tips.loading else REASON_TIP_UNAVAILABLE,
            )
        return CommandResult(command=COMMAND_REQUEST_TIP, accepted=True)

    def _handle_dismiss_tip(self, command: Mapping[str, Any]) -> CommandResult:
        self._tips.clear()
        return CommandResult(command=COMMAND_DISMISS_TIP, accepted=True)

    def _handle_sync(self, command: Mapping[str, Any]) -> CommandResult:
        self._ui.publish_settings(self._engine.settings)
        self._ui.publish_tip(self._tips.tip, loading=self._tips.loading)
        return CommandResult(command=COMMAND_SYNC, accepted=True)


def _normalized(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip().lower()
