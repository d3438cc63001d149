"""Runtime settings for the demo, read from the environment or a .env file."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.logging import RichHandler


class DemoSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="INVOICE_DEMO_",
        env_file=".env",
        extra="ignore",
    )

    # Multiplies every scheduled delay; 0 runs the narrative as fast as possible
    time_scale: float = Field(default=1.0, ge=0)
    export_settle_seconds: float = Field(default=1.5, ge=0)
    notification_seconds: float = Field(default=4.0, ge=0)

    default_custom_input: str = "INV-X1, INV-X2"
    random_seed: Optional[int] = None

    log_level: str = "INFO"


@lru_cache
def get_settings() -> DemoSettings:
    return DemoSettings()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )
