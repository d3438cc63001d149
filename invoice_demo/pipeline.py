"""Staged progress narrative for a simulated extraction run."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .materializer import ResultMaterializer
from .scheduler import Scheduler
from .schemas import LogEntry, PipelineState, ResultRecord, RunMode, Severity
from .utils import clock_time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Stage:
    offset: float
    progress: int
    message: str
    severity: Severity = Severity.INFO
    terminal: bool = False

    def render(self, count: int) -> str:
        return self.message.format(count=count)


DEFAULT_STAGES: tuple[Stage, ...] = (
    Stage(0.5, 10, "Initializing automation engine..."),
    Stage(1.0, 25, "Detected {count} records for processing..."),
    Stage(1.5, 40, "Analyzing document structure with AI/OCR..."),
    Stage(2.0, 60, "Extracting line items and financial data...", Severity.SUCCESS),
    Stage(2.5, 80, "Cross-checking with CRM records..."),
    Stage(3.0, 95, "Validation successful. Mapping results...", Severity.SUCCESS),
    Stage(3.5, 100, "Process completed. High-fidelity data ready.", Severity.FINAL, terminal=True),
)


def validate_schedule(stages: Sequence[Stage]) -> None:
    """Raise ValueError unless the schedule is ordered and ends in one terminal stage at 100%."""
    if not stages:
        raise ValueError("schedule needs at least one stage")
    for earlier, later in zip(stages, stages[1:]):
        if later.offset < earlier.offset:
            raise ValueError(f"stage offsets must not decrease ({earlier.offset} -> {later.offset})")
        if later.progress < earlier.progress:
            raise ValueError(f"stage progress must not decrease ({earlier.progress} -> {later.progress})")
    if any(stage.terminal for stage in stages[:-1]):
        raise ValueError("only the last stage may be terminal")
    last = stages[-1]
    if not last.terminal:
        raise ValueError("last stage must be terminal")
    if last.progress != 100:
        raise ValueError("last stage must report 100% progress")
    if any(not 0 <= stage.progress <= 100 for stage in stages):
        raise ValueError("stage progress must be within 0-100")


class PipelineSequencer:
    """Runs one staged narrative at a time and reveals results at the end.

    Every stage appends one log entry and moves the progress bar; only the
    terminal stage publishes results and clears ``is_running``. ``start``
    while a run is in flight is ignored.
    """

    def __init__(
        self,
        materializer: ResultMaterializer,
        scheduler: Scheduler,
        stages: Sequence[Stage] = DEFAULT_STAGES,
        on_change: Optional[Callable[[], None]] = None,
        timestamp: Callable[[], str] = clock_time,
    ) -> None:
        validate_schedule(stages)
        self.materializer = materializer
        self.scheduler = scheduler
        self.stages = tuple(stages)
        self.on_change = on_change
        self.timestamp = timestamp
        self._state = PipelineState()

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    @property
    def results(self) -> List[ResultRecord]:
        return list(self._state.results)

    def snapshot(self) -> PipelineState:
        return self._state.model_copy(
            update={
                "log_stream": list(self._state.log_stream),
                "results": list(self._state.results),
            }
        )

    def start(self, mode: RunMode, custom_input: str = "") -> bool:
        if self._state.is_running:
            logger.debug("Run already in progress; ignoring start")
            return False

        self._state = PipelineState(is_running=True)
        records = self.materializer.materialize(mode, custom_input)
        logger.info("Run started in %s mode with %d records", mode.value, len(records))

        for stage in self.stages:
            self.scheduler.call_later(stage.offset, self._stage_callback(stage, records))
        self._notify()
        return True

    def _stage_callback(self, stage: Stage, records: List[ResultRecord]) -> Callable[[], None]:
        def fire() -> None:
            self._fire(stage, records)

        return fire

    def _fire(self, stage: Stage, records: List[ResultRecord]) -> None:
        entry = LogEntry(
            message=stage.render(count=len(records)),
            severity=stage.severity,
            timestamp=self.timestamp(),
        )
        self._state.log_stream.append(entry)
        self._state.progress_percent = stage.progress
        if stage.terminal:
            self._state.results = list(records)
            self._state.is_running = False
            logger.info("Run completed with %d records", len(records))
        else:
            logger.debug("Stage %d%%: %s", stage.progress, entry.message)
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
