"""Utility functions shared across the invoice demo."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

CURRENCY_SYMBOL = "€"


def safe_decimal(value: object) -> Optional[Decimal]:
    """Convert to Decimal if possible, else None."""
    if value is None:
        return None
    try:
        return Decimal(str(value)).quantize(Decimal("0.01"))
    except (InvalidOperation, ValueError):
        return None


def format_amount(value: object, symbol: str = CURRENCY_SYMBOL, grouping: bool = True) -> str:
    """Render a money value as ``€1,240.50`` (or ``€1240.50`` without grouping)."""
    amount = safe_decimal(value)
    if amount is None:
        raise ValueError(f"not a money value: {value!r}")
    body = f"{amount:,.2f}" if grouping else f"{amount:.2f}"
    return f"{symbol}{body}"


def clock_time(now: Optional[datetime] = None) -> str:
    """Local wall-clock time used to stamp log entries."""
    return (now or datetime.now()).strftime("%H:%M:%S")
