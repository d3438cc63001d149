"""Single-active-overlay bookkeeping for the preview, help, and export menu surfaces."""
from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from .schemas import OverlayKind, OverlayState, ResultRecord

logger = logging.getLogger(__name__)


class OverlayError(ValueError):
    """Raised when an overlay is opened against a record that is not on screen."""


class OverlayCoordinator:
    def __init__(self, on_change: Optional[Callable[[], None]] = None) -> None:
        self.on_change = on_change
        self._state = OverlayState()

    @property
    def active(self) -> OverlayKind:
        return self._state.active

    def snapshot(self) -> OverlayState:
        return self._state.model_copy()

    def open_preview(self, record: ResultRecord, results: Sequence[ResultRecord]) -> None:
        if record not in results:
            raise OverlayError(f"record {record.id!r} is not part of the current results")
        self._set(OverlayState(active=OverlayKind.PREVIEW, record=record))

    def open_help(self) -> None:
        self._set(OverlayState(active=OverlayKind.HELP))

    def toggle_export_menu(self) -> bool:
        """Flip the export popover. Modals block it; returns whether it is now open."""
        if self._state.is_modal:
            logger.debug("Export menu blocked by %s", self._state.active.value)
            return False
        if self._state.active is OverlayKind.EXPORT_MENU:
            self._set(OverlayState())
            return False
        self._set(OverlayState(active=OverlayKind.EXPORT_MENU))
        return True

    def close(self, kind: OverlayKind) -> None:
        """Close ``kind`` if it is the active overlay."""
        if self._state.active is kind and kind is not OverlayKind.NONE:
            self._set(OverlayState())

    def dismiss(self) -> None:
        """Backdrop or outside click: close whatever is open."""
        if self._state.active is not OverlayKind.NONE:
            self._set(OverlayState())

    def _set(self, state: OverlayState) -> None:
        previous = self._state.active
        self._state = state
        logger.debug("Overlay %s -> %s", previous.value, state.active.value)
        if self.on_change is not None:
            self.on_change()
