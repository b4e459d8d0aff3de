"""Cooperative frame scheduler modelled on browser animation-frame callbacks."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from pomodoro import monotonic_ms

FrameCallback = Callable[[int], None]


class FrameScheduler:
    """Queue of one-shot callbacks run once per frame with the frame timestamp.

    Callbacks requested while a frame is running are deferred to the next
    frame, so a callback that re-requests itself runs at most once per frame.
    A cancelled handle never fires.
    """

    def __init__(
        self,
        *,
        clock: Optional[Callable[[], int]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._clock = clock or monotonic_ms
        self._logger = logger or logging.getLogger("runtime.frames")
        self._callbacks: dict[int, FrameCallback] = {}
        self._next_handle = 1

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def is_pending(self, handle: Optional[int]) -> bool:
        return handle is not None and handle in self._callbacks

    def request(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._callbacks[handle] = callback
        return handle

    def cancel(self, handle: Optional[int]) -> None:
        if handle is None:
            return
        self._callbacks.pop(handle, None)

    def run_frame(self, now_ms: Optional[int] = None) -> int:
        """Run callbacks requested before this frame; return how many ran."""
        if not self._callbacks:
            return 0

        now = self._clock() if now_ms is None else now_ms
        due = sorted(self._callbacks)
        ran = 0
        for handle in due:
            # An earlier callback in this frame may have cancelled this one.
            callback = self._callbacks.pop(handle, None)
            if callback is None:
                continue
            try:
                callback(now)
            except Exception as error:
                self._logger.error("Frame callback failed: %s", error, exc_info=True)
            ran += 1
        return ran
