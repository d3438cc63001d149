import random

import pytest

from invoice_demo.config import DemoSettings
from invoice_demo.materializer import ResultMaterializer
from invoice_demo.pipeline import PipelineSequencer
from invoice_demo.scheduler import ManualScheduler
from invoice_demo.session import DemoSession


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def settings():
    return DemoSettings(
        time_scale=1.0,
        export_settle_seconds=1.5,
        notification_seconds=4.0,
        default_custom_input="INV-X1, INV-X2",
        random_seed=7,
    )


@pytest.fixture
def materializer():
    return ResultMaterializer(rng=random.Random(42))


@pytest.fixture
def sequencer(materializer, scheduler):
    return PipelineSequencer(materializer, scheduler, timestamp=lambda: "12:00:00")


@pytest.fixture
def session(scheduler, settings):
    return DemoSession(scheduler, settings=settings)


@pytest.fixture
def finished_session(session, scheduler):
    session.trigger_run()
    scheduler.run_until_idle()
    return session
