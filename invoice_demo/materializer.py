"""Resolve the records a run reveals when it completes."""
from __future__ import annotations

import logging
import random
from datetime import date
from decimal import Decimal
from typing import Callable, List, Optional, Sequence

from .sample_data import SAMPLE_INVOICES
from .schemas import ExtractionMetadata, LineItem, ResultRecord, RunMode, SellerInfo
from .utils import format_amount

logger = logging.getLogger(__name__)

PLACEHOLDER_SELLER = SellerInfo(
    name="Generic AI Automated Seller",
    address="Digital Cloud Infrastructure",
    tax_id="AI-VAT-000",
    email="automated@system.ai",
    theme_tag="slate",
)
PLACEHOLDER_METADATA = ExtractionMetadata(
    tax_amount_display="€240.00",
    subtotal_display="€1000.00",
    confidence_display="97.4%",
    extraction_method_tag="AI-Scan",
    payment_terms_tag="Custom",
)
PLACEHOLDER_LINE_ITEM = LineItem(
    description="Automated Processing Service",
    quantity=1,
    unit_price=Decimal("1000.00"),
)
MAX_RANDOM_AMOUNT = 2000


class ResultMaterializer:
    """Turn a run mode and the typed identifiers into result records.

    Standard mode hands back the fixed dataset's own record objects. Custom
    mode synthesizes one templated record per comma-separated token; only
    the display amount is random, drawn from ``rng``.
    """

    def __init__(
        self,
        dataset: Optional[Sequence[ResultRecord]] = None,
        rng: Optional[random.Random] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.dataset = list(SAMPLE_INVOICES if dataset is None else dataset)
        self.rng = rng or random.Random()
        self.today = today

    def materialize(self, mode: RunMode, custom_input: str = "") -> List[ResultRecord]:
        if mode is RunMode.STANDARD:
            return list(self.dataset)
        records = [self._synthesize(token, index) for index, token in enumerate(custom_input.split(","), start=1)]
        logger.debug("Synthesized %d custom records", len(records))
        return records

    def _synthesize(self, token: str, index: int) -> ResultRecord:
        record_id = token.strip() or f"DATA-{index}"
        amount = self.rng.random() * MAX_RANDOM_AMOUNT
        return ResultRecord(
            id=record_id,
            issue_date=self.today().isoformat(),
            client_name="Private Client",
            client_address="Customer Address Not Specified",
            total_amount_display=format_amount(amount, grouping=False),
            status="Verified",
            seller=PLACEHOLDER_SELLER,
            line_items=[PLACEHOLDER_LINE_ITEM],
            metadata=PLACEHOLDER_METADATA,
        )
