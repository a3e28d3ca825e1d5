# app/orchestrator.py
from __future__ import annotations

import random
from enum import Enum
from typing import Any, Optional

import httpx

from app.agents.assembler import assemble_itinerary
from app.agents.placeholder import generate_placeholder
from app.config import PlannerSettings, load_settings
from app.errors import UpstreamError, WebhookTimeout
from app.log import get_logger
from app.schemas import TripFormData, TripItinerary
from app.tools.webhook import WebhookClient, read_json

logger = get_logger(__name__)

_TIMEOUT_MARKERS = ("timed out", "timeout")


class WebhookOutcome(str, Enum):
    SUCCESS = "success"
    TIMED_OUT = "timed_out"
    HTTP_ERROR = "http_error"
    APP_ERROR = "app_error"


def looks_like_timeout(message: Any) -> bool:
    text = str(message or "").lower()
    return any(marker in text for marker in _TIMEOUT_MARKERS)


class TripPlanner:
    """Fetch an itinerary from the workflow webhook, degrading to a placeholder.

    Timeouts (local or reported by the webhook) and a missing webhook URL both
    resolve to a synthetic plan. Every other failure is raised so the caller
    can offer a retry: ``UpstreamError`` for errors the webhook reports,
    ``MalformedResponseError`` for answers that cannot be read, and
    ``WebhookUnavailableError`` for network failures.
    """

    def __init__(self, settings: PlannerSettings, *, rng: Optional[random.Random] = None):
        self.settings = settings
        self.rng = rng

    async def plan(self, form: TripFormData) -> TripItinerary:
        logger.info(
            "Trip planning request: %s -> %s, %s to %s, %d traveller(s), comfort %d",
            form.departure_city,
            form.destination_city,
            form.start_date,
            form.end_date,
            form.travelers,
            form.comfort_level,
        )

        if not self.settings.webhook_configured:
            logger.warning("No webhook URL configured; returning placeholder itinerary")
            return self._placeholder(form)

        client = WebhookClient(self.settings.webhook_url, timeout=self.settings.webhook_timeout)
        try:
            response = await client.post_json(form.model_dump(mode="json"))
        except WebhookTimeout:
            return self._degrade(form, "request aborted after %.0fs" % self.settings.webhook_timeout)

        outcome, body = self._classify(response)
        if outcome is WebhookOutcome.TIMED_OUT:
            return self._degrade(form, "webhook reported a timeout")
        if outcome is WebhookOutcome.HTTP_ERROR:
            message = _error_message(body) or f"Server error: {response.status_code}"
            logger.error("Webhook failed with status %d: %s", response.status_code, message)
            raise UpstreamError(message, status_code=response.status_code)
        if outcome is WebhookOutcome.APP_ERROR:
            message = _error_message(body)
            logger.error("Webhook returned error: %s", message)
            raise UpstreamError(message, status_code=response.status_code)

        logger.info("Webhook response received (status %d), parsing", response.status_code)
        return assemble_itinerary(body, form)

    def _classify(self, response: httpx.Response) -> tuple[WebhookOutcome, Any]:
        body = read_json(response)
        if not response.is_success:
            if response.status_code == 504 or looks_like_timeout(_error_message(body)):
                return WebhookOutcome.TIMED_OUT, body
            return WebhookOutcome.HTTP_ERROR, body
        if body is None:
            # Nothing JSON came back; let the assembler reject it as malformed.
            return WebhookOutcome.SUCCESS, body
        if isinstance(body, dict) and body.get("error"):
            if looks_like_timeout(body["error"]):
                return WebhookOutcome.TIMED_OUT, body
            return WebhookOutcome.APP_ERROR, body
        return WebhookOutcome.SUCCESS, body

    def _degrade(self, form: TripFormData, reason: str) -> TripItinerary:
        logger.warning("Webhook timed out (%s); using placeholder itinerary", reason)
        return self._placeholder(form)

    def _placeholder(self, form: TripFormData) -> TripItinerary:
        return generate_placeholder(form, rng=self.rng)


def _error_message(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    for key in ("error", "message"):
        value = body.get(key)
        if value:
            return str(value)
    return None


async def orchestrate_trip(
    form: TripFormData,
    settings: PlannerSettings | None = None,
) -> TripItinerary:
    """Entry point used by the API: plan ``form`` with environment settings by default."""
    planner = TripPlanner(settings or load_settings())
    return await planner.plan(form)
