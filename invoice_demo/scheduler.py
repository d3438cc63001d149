"""Deferred-callback schedulers.

All state in the demo is mutated from callbacks scheduled here. Both
implementations run callbacks on a single thread of control: the asyncio
loop thread, or whichever thread drives the manual clock.
"""
from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
import time
from typing import Callable, List, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callback) -> None:
        ...

    def now(self) -> float:
        ...


class AsyncioScheduler:
    """Schedule callbacks on the running event loop.

    Keeps its own queue and a single loop timer for the head of it, so that
    callbacks due at the same instant still fire in scheduling order.
    """

    def __init__(self, time_scale: float = 1.0, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        if time_scale < 0:
            raise ValueError("time_scale must be >= 0")
        self.time_scale = time_scale
        self._loop = loop
        self._queue: List[Tuple[float, int, Callback]] = []
        self._counter = itertools.count()
        self._handle: Optional[asyncio.TimerHandle] = None

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def call_later(self, delay: float, callback: Callback) -> None:
        loop = self._get_loop()
        due = loop.time() + max(delay, 0.0) * self.time_scale
        heapq.heappush(self._queue, (due, next(self._counter), callback))
        self._arm(loop)

    def _arm(self, loop: asyncio.AbstractEventLoop) -> None:
        if not self._queue:
            return
        due = self._queue[0][0]
        if self._handle is not None:
            if self._handle.when() <= due:
                return
            self._handle.cancel()
        self._handle = loop.call_at(due, self._drain, loop, due)

    def _drain(self, loop: asyncio.AbstractEventLoop, armed_for: float) -> None:
        self._handle = None
        deadline = max(loop.time(), armed_for)
        try:
            while self._queue and self._queue[0][0] <= deadline:
                _, _, callback = heapq.heappop(self._queue)
                callback()
        finally:
            self._arm(loop)

    def now(self) -> float:
        if self._loop is not None:
            return self._loop.time()
        try:
            return asyncio.get_running_loop().time()
        except RuntimeError:
            return time.monotonic()


class ManualScheduler:
    """Virtual clock that only moves when told to.

    Callbacks fire in order of due time; callbacks due at the same instant
    fire in the order they were scheduled.
    """

    def __init__(self, time_scale: float = 1.0) -> None:
        if time_scale < 0:
            raise ValueError("time_scale must be >= 0")
        self.time_scale = time_scale
        self._now = 0.0
        self._queue: List[Tuple[float, int, Callback]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callback) -> None:
        due = self._now + max(delay, 0.0) * self.time_scale
        heapq.heappush(self._queue, (due, next(self._counter), callback))

    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return len(self._queue)

    def next_due(self) -> Optional[float]:
        return self._queue[0][0] if self._queue else None

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing everything that falls due. Returns the number fired."""
        if seconds < 0:
            raise ValueError("cannot move the clock backwards")
        deadline = self._now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= deadline:
            due, _, callback = heapq.heappop(self._queue)
            self._now = due
            callback()
            fired += 1
        self._now = deadline
        return fired

    def run_until_idle(self, limit: int = 10_000) -> int:
        """Fire callbacks until nothing is queued."""
        fired = 0
        while self._queue:
            if fired >= limit:
                raise RuntimeError(f"scheduler still busy after {limit} callbacks")
            due, _, callback = heapq.heappop(self._queue)
            self._now = max(self._now, due)
            callback()
            fired += 1
        logger.debug("Scheduler idle at t=%.3f after %d callbacks", self._now, fired)
        return fired
