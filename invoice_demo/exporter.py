"""Simulated export requests: pending, settle, then a short-lived acknowledgment."""
from __future__ import annotations

import logging
from typing import Callable, Optional

from .scheduler import Scheduler
from .schemas import ExportFormat, ExportState

logger = logging.getLogger(__name__)


class ExportRequestHandler:
    """Models the request/ack lifecycle of an export; no file is written.

    Each request owns its own settle timer and its own clear timer, so
    overlapping requests settle independently and the notification shows
    whichever acknowledgment fired last.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        settle_seconds: float = 1.5,
        notification_seconds: float = 4.0,
        on_change: Optional[Callable[[], None]] = None,
        on_request: Optional[Callable[[], None]] = None,
    ) -> None:
        self.scheduler = scheduler
        self.settle_seconds = settle_seconds
        self.notification_seconds = notification_seconds
        self.on_change = on_change
        self.on_request = on_request
        self._state = ExportState()

    @property
    def is_pending(self) -> bool:
        return self._state.is_pending

    def snapshot(self) -> ExportState:
        return self._state.model_copy()

    def request_export(self, fmt: ExportFormat) -> None:
        self._state.is_pending = True
        if self.on_request is not None:
            self.on_request()
        logger.info("Export requested as %s", fmt.label)
        self.scheduler.call_later(self.settle_seconds, lambda: self._settle(fmt))
        self._notify()

    def clear_notification(self) -> None:
        if self._state.notification is not None:
            self._state.notification = None
            self._notify()

    def _settle(self, fmt: ExportFormat) -> None:
        self._state.is_pending = False
        self._state.last_format = fmt
        self._state.notification = f"Saved as {fmt.label}!"
        logger.info("Export settled as %s", fmt.label)
        self.scheduler.call_later(self.notification_seconds, self.clear_notification)
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
