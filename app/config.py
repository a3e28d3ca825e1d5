"""Runtime settings for the planner service."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from app.log import get_logger

logger = get_logger(__name__)

DEFAULT_WEBHOOK_TIMEOUT = 120.0
# The relay gives up slightly before the planner so its 504 reaches the client first.
DEFAULT_RELAY_TIMEOUT = 115.0
DEFAULT_STEP_TIMEOUT = 10.0


@dataclass(frozen=True)
class PlannerSettings:
    webhook_url: Optional[str] = None
    webhook_timeout: float = DEFAULT_WEBHOOK_TIMEOUT
    relay_url: Optional[str] = None
    relay_timeout: float = DEFAULT_RELAY_TIMEOUT
    step_base_url: Optional[str] = None
    step_timeout: float = DEFAULT_STEP_TIMEOUT
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])

    @property
    def webhook_configured(self) -> bool:
        return self.webhook_url is not None


def load_settings() -> PlannerSettings:
    """Build settings from the environment (and a local .env file if present)."""
    load_dotenv()

    raw_origins = os.getenv("TRIP_PLANNER_ALLOWED_ORIGINS") or "*"
    allowed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]

    return PlannerSettings(
        webhook_url=_optional_url(os.getenv("TRIP_PLANNER_WEBHOOK_URL")),
        webhook_timeout=_seconds("TRIP_PLANNER_WEBHOOK_TIMEOUT", DEFAULT_WEBHOOK_TIMEOUT),
        relay_url=_optional_url(os.getenv("TRIP_PLANNER_RELAY_URL")),
        relay_timeout=_seconds("TRIP_PLANNER_RELAY_TIMEOUT", DEFAULT_RELAY_TIMEOUT),
        step_base_url=_optional_url(os.getenv("TRIP_PLANNER_STEP_BASE_URL")),
        step_timeout=_seconds("TRIP_PLANNER_STEP_TIMEOUT", DEFAULT_STEP_TIMEOUT),
        allowed_origins=allowed_origins or ["*"],
    )


def _optional_url(value: str | None) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _seconds(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r; expected a number of seconds", name, raw)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r; timeout must be positive", name, raw)
        return default
    return value
