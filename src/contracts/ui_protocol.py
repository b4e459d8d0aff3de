"""Web UI websocket event, command, and state constants."""

from __future__ import annotations

# Websocket event types (server -> UI)
EVENT_HELLO = "hello"
EVENT_STATE_UPDATE = "state_update"
EVENT_TIMER = "timer"
EVENT_TIP = "tip"
EVENT_SETTINGS = "settings"
EVENT_ERROR = "error"

# Websocket message type carrying a command (UI -> server)
MESSAGE_COMMAND = "command"

# UI commands
COMMAND_TOGGLE = "toggle"
COMMAND_START = "start"
COMMAND_PAUSE = "pause"
COMMAND_RESET = "reset"
COMMAND_SET_MODE = "set_mode"
COMMAND_SET_PHASE = "set_phase"
COMMAND_SAVE_SETTINGS = "save_settings"
COMMAND_REQUEST_TIP = "request_tip"
COMMAND_DISMISS_TIP = "dismiss_tip"
COMMAND_SYNC = "sync"

COMMAND_NAMES: frozenset[str] = frozenset(
    {
        COMMAND_TOGGLE,
        COMMAND_START,
        COMMAND_PAUSE,
        COMMAND_RESET,
        COMMAND_SET_MODE,
        COMMAND_SET_PHASE,
        COMMAND_SAVE_SETTINGS,
        COMMAND_REQUEST_TIP,
        COMMAND_DISMISS_TIP,
        COMMAND_SYNC,
    }
)

# Timer update actions
ACTION_TICK = "tick"
ACTION_COMPLETED = "completed"
ACTION_STARTUP = "startup"

# Command rejection reasons
REASON_UNKNOWN_COMMAND = "unknown_command"
REASON_INVALID_MODE = "invalid_mode"
REASON_INVALID_PHASE = "invalid_phase"
REASON_NOT_POMODORO = "not_pomodoro"
REASON_TIP_LOADING = "tip_loading"
REASON_TIP_UNAVAILABLE = "tip_unavailable"

# UI runtime states
STATE_RUNNING = "running"
STATE_PAUSED = "paused"
STATE_COMPLETED = "completed"
STATE_ERROR = "error"

STICKY_EVENT_TYPES: frozenset[str] = frozenset(
    {
        EVENT_STATE_UPDATE,
        EVENT_TIMER,
        EVENT_TIP,
        EVENT_SETTINGS,
        EVENT_ERROR,
    }
)

STICKY_EVENT_ORDER: tuple[str, ...] = (
    EVENT_SETTINGS,
    EVENT_TIMER,
    EVENT_TIP,
    EVENT_ERROR,
    EVENT_STATE_UPDATE,
)
