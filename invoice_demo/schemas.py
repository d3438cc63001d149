"""Data models shared by the pipeline, session, CLI, and API."""
from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RunMode(str, Enum):
    STANDARD = "standard"
    CUSTOM = "custom"


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    FINAL = "final"


class ExportFormat(str, Enum):
    PDF = "pdf"
    CSV = "csv"

    @classmethod
    def parse(cls, value: str) -> "ExportFormat":
        """Accept any casing plus the legacy ``cvs`` spelling."""
        normalized = value.strip().lower()
        if normalized == "cvs":
            normalized = "csv"
        return cls(normalized)

    @property
    def label(self) -> str:
        return self.value.upper()


class OverlayKind(str, Enum):
    NONE = "none"
    PREVIEW = "preview"
    HELP = "help"
    EXPORT_MENU = "export_menu"


class LineItem(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    description: str
    quantity: int = Field(ge=0)
    unit_price: Decimal = Field(ge=0)

    @property
    def line_total(self) -> Decimal:
        return (self.unit_price * self.quantity).quantize(Decimal("0.01"))


class SellerInfo(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    address: str
    tax_id: str
    email: str
    theme_tag: str


class ExtractionMetadata(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    tax_amount_display: str
    subtotal_display: str
    confidence_display: str
    extraction_method_tag: str
    payment_terms_tag: str


class ResultRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    issue_date: str
    client_name: str
    client_address: str
    total_amount_display: str
    status: str
    seller: SellerInfo
    line_items: List[LineItem] = Field(default_factory=list)
    metadata: ExtractionMetadata

    @property
    def line_items_total(self) -> Decimal:
        return sum((item.line_total for item in self.line_items), Decimal("0.00"))


class LogEntry(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    message: str
    severity: Severity = Severity.INFO
    timestamp: str


class PipelineState(BaseModel):
    model_config = ConfigDict(extra="ignore")

    is_running: bool = False
    progress_percent: int = Field(default=0, ge=0, le=100)
    log_stream: List[LogEntry] = Field(default_factory=list)
    results: List[ResultRecord] = Field(default_factory=list)


class ExportState(BaseModel):
    model_config = ConfigDict(extra="ignore")

    is_pending: bool = False
    last_format: Optional[ExportFormat] = None
    notification: Optional[str] = None


class OverlayState(BaseModel):
    model_config = ConfigDict(extra="ignore")

    active: OverlayKind = OverlayKind.NONE
    record: Optional[ResultRecord] = None

    @model_validator(mode="after")
    def _record_only_for_preview(self) -> "OverlayState":
        if (self.active is OverlayKind.PREVIEW) != (self.record is not None):
            raise ValueError("record must be set exactly when a preview is active")
        return self

    @property
    def is_modal(self) -> bool:
        return self.active in (OverlayKind.PREVIEW, OverlayKind.HELP)


class SessionSnapshot(BaseModel):
    """Everything a renderer needs, copied at one instant."""

    model_config = ConfigDict(extra="ignore")

    mode: RunMode
    custom_input: str
    pipeline: PipelineState
    export: ExportState
    overlay: OverlayState
