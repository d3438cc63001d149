import asyncio

import pytest

from invoice_demo.scheduler import AsyncioScheduler, ManualScheduler


def test_manual_scheduler_fires_by_due_time_then_insertion():
    scheduler = ManualScheduler()
    fired = []
    scheduler.call_later(2.0, lambda: fired.append("late"))
    scheduler.call_later(1.0, lambda: fired.append("a"))
    scheduler.call_later(1.0, lambda: fired.append("b"))

    assert scheduler.advance(1.0) == 2
    assert fired == ["a", "b"]
    assert scheduler.now() == 1.0
    scheduler.advance(5.0)
    assert fired == ["a", "b", "late"]
    assert scheduler.now() == 6.0


def test_manual_scheduler_runs_callbacks_scheduled_during_advance():
    scheduler = ManualScheduler()
    fired = []

    def first():
        fired.append(scheduler.now())
        scheduler.call_later(0.5, lambda: fired.append(scheduler.now()))

    scheduler.call_later(1.0, first)
    scheduler.advance(2.0)
    assert fired == [1.0, 1.5]


def test_manual_scheduler_time_scale_and_idle():
    scheduler = ManualScheduler(time_scale=0)
    fired = []
    for i in range(3):
        scheduler.call_later(i + 1, lambda i=i: fired.append(i))
    assert scheduler.next_due() == 0.0
    assert scheduler.run_until_idle() == 3
    assert fired == [0, 1, 2]
    assert scheduler.pending == 0


def test_manual_scheduler_rejects_rewind():
    with pytest.raises(ValueError):
        ManualScheduler().advance(-1)


def test_asyncio_scheduler_keeps_order_for_equal_deadlines():
    fired = []

    async def main():
        scheduler = AsyncioScheduler(time_scale=0)
        done = asyncio.Event()
        for i in range(5):
            scheduler.call_later(i, lambda i=i: fired.append(i))
        scheduler.call_later(10, done.set)
        await asyncio.wait_for(done.wait(), timeout=2)

    asyncio.run(main())
    assert fired == [0, 1, 2, 3, 4]


def test_asyncio_scheduler_earlier_callback_rearms_timer():
    fired = []

    async def main():
        scheduler = AsyncioScheduler(time_scale=0.01)
        done = asyncio.Event()
        scheduler.call_later(5, lambda: (fired.append("late"), done.set()))
        scheduler.call_later(1, lambda: fired.append("early"))
        await asyncio.wait_for(done.wait(), timeout=2)

    asyncio.run(main())
    assert fired == ["early", "late"]
