import random
import re
from datetime import date

from invoice_demo.materializer import ResultMaterializer
from invoice_demo.sample_data import SAMPLE_INVOICES
from invoice_demo.schemas import RunMode

AMOUNT_RE = re.compile(r"^€\d+\.\d{2}$")


def test_standard_mode_returns_dataset_objects_in_order(materializer):
    records = materializer.materialize(RunMode.STANDARD)
    assert [r.id for r in records] == ["INV-2023-001", "INV-2023-002", "INV-2023-003"]
    for got, expected in zip(records, SAMPLE_INVOICES):
        assert got is expected


def test_standard_mode_ignores_custom_input(materializer):
    assert len(materializer.materialize(RunMode.STANDARD, "A, B, C, D")) == 3


def test_custom_tokens_are_trimmed(materializer):
    records = materializer.materialize(RunMode.CUSTOM, "A, B ,C")
    assert [r.id for r in records] == ["A", "B", "C"]


def test_empty_custom_input_yields_single_placeholder(materializer):
    records = materializer.materialize(RunMode.CUSTOM, "")
    assert len(records) == 1
    assert records[0].id == "DATA-1"


def test_blank_tokens_fall_back_to_positional_ids(materializer):
    records = materializer.materialize(RunMode.CUSTOM, "A,  ,B,")
    assert [r.id for r in records] == ["A", "DATA-2", "B", "DATA-4"]


def test_synthesized_record_template():
    materializer = ResultMaterializer(rng=random.Random(1), today=lambda: date(2024, 3, 9))
    record = materializer.materialize(RunMode.CUSTOM, "INV-X1")[0]
    assert record.issue_date == "2024-03-09"
    assert record.client_name == "Private Client"
    assert record.seller.tax_id == "AI-VAT-000"
    assert record.metadata.extraction_method_tag == "AI-Scan"
    assert len(record.line_items) == 1
    assert str(record.line_items[0].line_total) == "1000.00"
    assert AMOUNT_RE.match(record.total_amount_display)


def test_amounts_follow_injected_rng():
    first = ResultMaterializer(rng=random.Random(99)).materialize(RunMode.CUSTOM, "A, B")
    second = ResultMaterializer(rng=random.Random(99)).materialize(RunMode.CUSTOM, "A, B")
    assert [r.total_amount_display for r in first] == [r.total_amount_display for r in second]
    for record in first:
        assert AMOUNT_RE.match(record.total_amount_display)
