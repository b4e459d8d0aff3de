"""Runtime control loop: UI commands, tip results, and frame-driven timer ticks."""

from __future__ import annotations

import concurrent.futures
import logging
import time
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Any, Callable, Mapping, Optional

from app_config import AppConfig
from contracts.ui_protocol import ACTION_STARTUP, EVENT_ERROR, STATE_ERROR
from pomodoro import TimerSettings, TimingEngine, monotonic_ms
from server import UIServer
from tips import TipProviderLike

from .commands import RuntimeCommandDispatcher
from .frames import FrameScheduler
from .ticks import TickDependencies, TickProcessor
from .tips import TipController, TipResult
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class UICommand:
    """Command payload received from a websocket client."""
    payload: Mapping[str, Any]


@dataclass(frozen=True)
class ShutdownRequested:
    """Queue message asking the control loop to exit with `exit_code`."""
    exit_code: int = 0
    reason: str = ""


@dataclass(frozen=True)
class RuntimeHooks:
    """Injectable lifecycle hooks used by runtime startup and shutdown flow."""
    setup_signal_handlers: Callable[["RuntimeEngine"], None]


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    app_config: AppConfig
    tip_provider: TipProviderLike
    ui_server: Optional[UIServer]
    hooks: RuntimeHooks
    clock: Optional[Callable[[], int]] = None


@dataclass
class RuntimeResources:
    """Mutable runtime resources created for the event loop lifecycle."""
    event_queue: Queue[Any]
    tip_executor: concurrent.futures.ThreadPoolExecutor


class RuntimeEngine:
    """Single control thread owning all timer state mutation.

    Other threads only enqueue messages: the UI server posts `UICommand`, the
    tip worker posts `TipResult`, and signal handlers post `ShutdownRequested`.
    """
    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        clock = bootstrap.clock or monotonic_ms

        timer_config = bootstrap.app_config.timer
        self._frame_interval_seconds = 1.0 / timer_config.frame_rate_hz
        self._ui = RuntimeUIPublisher(bootstrap.ui_server)
        self._resources = RuntimeResources(
            event_queue=Queue(),
            tip_executor=concurrent.futures.ThreadPoolExecutor(
                max_workers=1,
                thread_name_prefix="tips",
            ),
        )

        self._engine = TimingEngine(
            settings=TimerSettings(
                focus_minutes=timer_config.focus_minutes,
                short_break_minutes=timer_config.short_break_minutes,
                long_break_minutes=timer_config.long_break_minutes,
            ),
            clock=clock,
            logger=logging.getLogger("pomodoro"),
        )
        self._frames = FrameScheduler(clock=clock, logger=logging.getLogger("runtime.frames"))
        self._tips = TipController(
            provider=bootstrap.tip_provider,
            executor=self._resources.tip_executor,
            post=self._resources.event_queue.put,
            ui=self._ui,
            logger=logging.getLogger("runtime.tips"),
        )
        self._tick_processor = TickProcessor(
            TickDependencies(
                engine=self._engine,
                frames=self._frames,
                tips=self._tips,
                ui=self._ui,
                logger=self._logger,
            )
        )
        self._dispatcher = RuntimeCommandDispatcher(
            logger=self._logger,
            engine=self._engine,
            ticks=self._tick_processor,
            tips=self._tips,
            ui=self._ui,
        )

        if bootstrap.ui_server is not None:
            bootstrap.ui_server.set_command_handler(self.submit_command)

    @property
    def engine(self) -> TimingEngine:
        return self._engine

    @property
    def tips(self) -> TipController:
        return self._tips

    def submit_command(self, payload: Mapping[str, Any]) -> None:
        """Thread-safe entry point for UI commands."""
        self._resources.event_queue.put(UICommand(payload=dict(payload)))

    def request_stop(self, exit_code: int = 0, reason: str = "") -> None:
        """Thread-safe request to leave the control loop."""
        self._resources.event_queue.put(ShutdownRequested(exit_code=exit_code, reason=reason))

    def run(self) -> int:
        self._publish_startup_sync()

        try:
            self._bootstrap.hooks.setup_signal_handlers(self)
            self._logger.info(
                "Timer runtime ready (frame interval %.1fms)",
                self._frame_interval_seconds * 1000,
            )

            while True:
                exit_code = self.step(self._frame_interval_seconds)
                if exit_code is not None:
                    return exit_code

        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            self._ui.publish(
                EVENT_ERROR,
                state=STATE_ERROR,
                message=f"Timer runtime failed: {error}",
            )
            return 1
        finally:
            self._shutdown()

    def step(self, timeout_seconds: float = 0.0) -> Optional[int]:
        """Handle queued messages for up to `timeout_seconds`, then run one frame."""
        exit_code = self._drain_events(timeout_seconds)
        if exit_code is not None:
            return exit_code
        self._frames.run_frame()
        return None

    def _drain_events(self, timeout_seconds: float) -> Optional[int]:
        deadline = time.monotonic() + max(0.0, timeout_seconds)
        while True:
            remaining = deadline - time.monotonic()
            try:
                if remaining > 0:
                    event = self._resources.event_queue.get(timeout=remaining)
                else:
                    event = self._resources.event_queue.get_nowait()
            except Empty:
                return None

            exit_code = self._handle_event(event)
            if exit_code is not None:
                return exit_code

    def _handle_event(self, event: Any) -> Optional[int]:
        if isinstance(event, UICommand):
            self._dispatcher.handle_command(event.payload)
            return None

        if isinstance(event, TipResult):
            self._tips.complete(event)
            return None

        if isinstance(event, ShutdownRequested):
            self._logger.info("Shutdown requested: %s", event.reason or "no reason given")
            return event.exit_code

        self._logger.warning("Ignoring unknown event type: %s", type(event).__name__)
        return None

    def _publish_startup_sync(self) -> None:
        self._ui.publish_settings(self._engine.settings)
        self._ui.publish_timer_update(
            self._engine.snapshot(),
            action=ACTION_STARTUP,
            accepted=True,
        )
        self._ui.publish_tip(None, loading=False)
        self._dispatcher.publish_runtime_state()

    def _shutdown(self) -> None:
        self._engine.pause()
        self._tick_processor.sync_schedule()

        self._logger.info("Stopping tip executor...")
        self._resources.tip_executor.shutdown(wait=False, cancel_futures=True)

        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            self._logger.info("Stopping UI server...")
            try:
                ui_server.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping UI server: %s", error, exc_info=True)
