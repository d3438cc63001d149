"""Fixed logistics invoices revealed by a standard-mode run."""
from __future__ import annotations

from decimal import Decimal
from typing import List

from .schemas import ExtractionMetadata, LineItem, ResultRecord, SellerInfo

SAMPLE_INVOICES: List[ResultRecord] = [
    ResultRecord(
        id="INV-2023-001",
        issue_date="2023-12-01",
        client_name="Global Logistics Corp",
        client_address="123 Logistics Way, Rotterdam, NL",
        total_amount_display="€1,240.50",
        status="Verified",
        seller=SellerInfo(
            name="North Sea Shipping Ltd",
            address="Port Quay 12, Rotterdam, NL",
            tax_id="NL800123456",
            email="ops@northseaship.com",
            theme_tag="blue",
        ),
        line_items=[
            LineItem(description="Container Freight (20ft)", quantity=1, unit_price=Decimal("850.00")),
            LineItem(description="Customs Clearance Fee", quantity=1, unit_price=Decimal("142.40")),
            LineItem(description="Insurance Premium", quantity=1, unit_price=Decimal("248.10")),
        ],
        metadata=ExtractionMetadata(
            tax_amount_display="€248.10",
            subtotal_display="€992.40",
            confidence_display="99.2%",
            extraction_method_tag="OCR-v4",
            payment_terms_tag="Net 30",
        ),
    ),
    ResultRecord(
        id="INV-2023-002",
        issue_date="2023-12-05",
        client_name="FastShip Ltd",
        client_address="45 Port Terminal, Hamburg, DE",
        total_amount_display="€890.00",
        status="Verified",
        seller=SellerInfo(
            name="Hamburg Express GmbH",
            address="Elbe Str. 88, Hamburg, DE",
            tax_id="DE100987654",
            email="billing@hamburg-express.de",
            theme_tag="red",
        ),
        line_items=[
            LineItem(description="Express Courier Delivery", quantity=10, unit_price=Decimal("71.20")),
            LineItem(description="Fuel Surcharge", quantity=1, unit_price=Decimal("178.00")),
        ],
        metadata=ExtractionMetadata(
            tax_amount_display="€178.00",
            subtotal_display="€712.00",
            confidence_display="98.5%",
            extraction_method_tag="LLM-Extract",
            payment_terms_tag="Due on Receipt",
        ),
    ),
    ResultRecord(
        id="INV-2023-003",
        issue_date="2023-12-10",
        client_name="Euro Freight Services",
        client_address="Industrial Zone B, Piraeus, GR",
        total_amount_display="€2,100.25",
        status="Verified",
        seller=SellerInfo(
            name="Piraeus Port Services SA",
            address="Akti Miaouli 5, Piraeus, GR",
            tax_id="EL099887766",
            email="accounting@piraeus-port.gr",
            theme_tag="emerald",
        ),
        line_items=[
            LineItem(description="LTL Shipping Services", quantity=2, unit_price=Decimal("650.00")),
            LineItem(description="Warehouse Storage (Monthly)", quantity=1, unit_price=Decimal("380.20")),
            LineItem(description="Hazardous Material Handling", quantity=1, unit_price=Decimal("420.05")),
        ],
        metadata=ExtractionMetadata(
            tax_amount_display="€420.05",
            subtotal_display="€1,680.20",
            confidence_display="99.8%",
            extraction_method_tag="Hybrid-AI",
            payment_terms_tag="Net 15",
        ),
    ),
]
