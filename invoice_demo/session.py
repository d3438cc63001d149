"""One demo session: owns every piece of state and exposes the trigger surface."""
from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional, Sequence

from .config import DemoSettings, get_settings
from .exporter import ExportRequestHandler
from .materializer import ResultMaterializer
from .overlays import OverlayCoordinator
from .pipeline import DEFAULT_STAGES, PipelineSequencer, Stage
from .scheduler import Scheduler
from .schemas import ExportFormat, OverlayKind, ResultRecord, RunMode, SessionSnapshot

logger = logging.getLogger(__name__)

Listener = Callable[[SessionSnapshot], None]


class DemoSession:
    """Funnel user intents into the pipeline, exporter, and overlay state.

    All mutations must happen on the thread driving ``scheduler``; listeners
    receive a fresh snapshot after each one.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        settings: Optional[DemoSettings] = None,
        dataset: Optional[Sequence[ResultRecord]] = None,
        rng: Optional[random.Random] = None,
        stages: Sequence[Stage] = DEFAULT_STAGES,
    ) -> None:
        self.settings = settings or get_settings()
        self.scheduler = scheduler
        self.mode = RunMode.STANDARD
        self.custom_input = self.settings.default_custom_input
        self._listeners: List[Listener] = []

        rng = rng or random.Random(self.settings.random_seed)
        self.materializer = ResultMaterializer(dataset=dataset, rng=rng)
        self.pipeline = PipelineSequencer(self.materializer, scheduler, stages=stages, on_change=self._changed)
        self.overlays = OverlayCoordinator(on_change=self._changed)
        self.exporter = ExportRequestHandler(
            scheduler,
            settle_seconds=self.settings.export_settle_seconds,
            notification_seconds=self.settings.notification_seconds,
            on_change=self._changed,
            on_request=lambda: self.overlays.close(OverlayKind.EXPORT_MENU),
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            mode=self.mode,
            custom_input=self.custom_input,
            pipeline=self.pipeline.snapshot(),
            export=self.exporter.snapshot(),
            overlay=self.overlays.snapshot(),
        )

    # Trigger surface
    def select_mode(self, mode: RunMode | str) -> None:
        self.mode = RunMode(mode)
        self._changed()

    def set_custom_input(self, text: str) -> None:
        self.custom_input = text
        self._changed()

    def trigger_run(self) -> bool:
        if self.pipeline.is_running:
            logger.debug("Run trigger ignored while busy")
            return False
        self.exporter.clear_notification()
        return self.pipeline.start(self.mode, self.custom_input)

    def trigger_export(self, fmt: ExportFormat | str) -> None:
        if isinstance(fmt, str):
            fmt = ExportFormat.parse(fmt)
        self.exporter.request_export(fmt)

    def toggle_export_menu(self) -> bool:
        if not self.pipeline.results or self.exporter.is_pending:
            logger.debug("Export menu unavailable")
            return False
        return self.overlays.toggle_export_menu()

    def open_help(self) -> None:
        self.overlays.open_help()

    def close_help(self) -> None:
        self.overlays.close(OverlayKind.HELP)

    def select_result_row(self, record: ResultRecord) -> None:
        self.overlays.open_preview(record, self.pipeline.results)

    def select_result_index(self, index: int) -> ResultRecord:
        results = self.pipeline.results
        if not 0 <= index < len(results):
            raise IndexError(f"no result row {index}")
        record = results[index]
        self.select_result_row(record)
        return record

    def find_result(self, record_id: str) -> Optional[ResultRecord]:
        return next((record for record in self.pipeline.results if record.id == record_id), None)

    def close_preview(self) -> None:
        self.overlays.close(OverlayKind.PREVIEW)

    def dismiss_overlay(self) -> None:
        self.overlays.dismiss()

    def _changed(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
