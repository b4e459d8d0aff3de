"""Tip request lifecycle: loading flag, background fetch, and stale-result handling."""

from __future__ import annotations

import concurrent.futures
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from tips import TipProviderLike
from tips.service import FALLBACK_REQUEST_FAILED

from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class TipResult:
    """Tip text delivered from the worker thread back to the runtime queue."""
    generation: int
    context: str
    text: str


class TipController:
    """Owns the presentation-side tip text and the single outstanding fetch.

    `request` must be called from the runtime thread. The fetch runs on the
    executor and its result is posted back via `post`, so `complete` also runs
    on the runtime thread. Results issued before the last `clear` are dropped.
    """

    def __init__(
        self,
        *,
        provider: TipProviderLike,
        executor: concurrent.futures.Executor,
        post: Callable[[object], None],
        ui: RuntimeUIPublisher,
        logger: Optional[logging.Logger] = None,
    ):
        self._provider = provider
        self._executor = executor
        self._post = post
        self._ui = ui
        self._logger = logger or logging.getLogger("runtime.tips")
        self._generation = 0
        self._loading = False
        self._tip: Optional[str] = None

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def tip(self) -> Optional[str]:
        return self._tip

    def request(self, context: str) -> bool:
        if self._loading:
            self._logger.info("Skipping tip request while previous request is still loading.")
            return False

        self._tip = None
        self._loading = True
        generation = self._generation
        self._ui.publish_tip(None, loading=True)
        self._logger.info("Requesting tip: context=%s", context)

        try:
            future = self._executor.submit(self._provider.fetch, context)
        except Exception as error:
            self._logger.error("Failed to submit tip request: %s", error)
            self._loading = False
            self._ui.publish_tip(None, loading=False)
            return False

        future.add_done_callback(
            lambda done: self._post(self._result_from(done, generation, context))
        )
        return True

    def complete(self, result: TipResult) -> None:
        self._loading = False
        if result.generation != self._generation:
            self._logger.info("Dropping stale tip for context=%s", result.context)
            self._ui.publish_tip(self._tip, loading=False)
            return

        self._tip = result.text
        self._ui.publish_tip(self._tip, loading=False)

    def clear(self) -> None:
        self._generation += 1
        if self._tip is None:
            return
        self._tip = None
        self._ui.publish_tip(None, loading=self._loading)

    def _result_from(
        self,
        future: concurrent.futures.Future,
        generation: int,
        context: str,
    ) -> TipResult:
        try:
            text = future.result()
        except Exception as error:
            self._logger.error("Tip worker failed: %s", error)
            text = FALLBACK_REQUEST_FAILED
        return TipResult(generation=generation, context=context, text=text)
