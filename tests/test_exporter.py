import pytest

from invoice_demo.exporter import ExportRequestHandler
from invoice_demo.schemas import ExportFormat


@pytest.fixture
def exporter(scheduler):
    return ExportRequestHandler(scheduler, settle_seconds=1.5, notification_seconds=4.0)


def test_export_lifecycle(exporter, scheduler):
    transitions = []
    exporter.on_change = lambda: transitions.append(exporter.is_pending)

    exporter.request_export(ExportFormat.CSV)
    assert exporter.snapshot().is_pending is True

    scheduler.advance(1.5)
    state = exporter.snapshot()
    assert state.is_pending is False
    assert state.last_format is ExportFormat.CSV
    assert "CSV" in state.notification
    assert transitions.count(False) == 1

    scheduler.advance(3.5)
    assert exporter.snapshot().notification == "Saved as CSV!"
    scheduler.advance(0.5)
    assert exporter.snapshot().notification is None


def test_request_runs_hook(exporter):
    calls = []
    exporter.on_request = lambda: calls.append(True)
    exporter.request_export(ExportFormat.PDF)
    assert calls == [True]


def test_overlapping_requests_settle_independently(exporter, scheduler):
    exporter.request_export(ExportFormat.PDF)
    scheduler.advance(1.0)
    exporter.request_export(ExportFormat.CSV)

    scheduler.advance(0.5)
    assert exporter.snapshot().notification == "Saved as PDF!"
    assert exporter.is_pending is False

    scheduler.advance(1.0)
    assert exporter.snapshot().notification == "Saved as CSV!"
    assert exporter.snapshot().last_format is ExportFormat.CSV

    # the first acknowledgment's clear timer also clears the second one
    scheduler.advance(3.0)
    assert exporter.snapshot().notification is None


@pytest.mark.parametrize("raw, expected", [("pdf", ExportFormat.PDF), ("CSV", ExportFormat.CSV), ("cvs", ExportFormat.CSV)])
def test_format_parsing(raw, expected):
    assert ExportFormat.parse(raw) is expected


def test_unknown_format_rejected():
    with pytest.raises(ValueError):
        ExportFormat.parse("xlsx")
