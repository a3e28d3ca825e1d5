"""Error taxonomy for itinerary planning."""
from __future__ import annotations

from typing import Optional

FALLBACK_MESSAGE = "Failed to generate itinerary"


class TripPlannerError(Exception):
    """Base class for failures the caller may want to show to the user."""

    def __init__(self, message: str | None = None):
        self.message = message or FALLBACK_MESSAGE
        super().__init__(self.message)


class MalformedResponseError(TripPlannerError):
    """The webhook answered, but nothing usable could be read from the body."""


class UpstreamError(TripPlannerError):
    """The webhook reported a failure that is not a timeout."""

    def __init__(self, message: str | None = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class WebhookUnavailableError(TripPlannerError):
    """Network-level failure (DNS, refused connection, broken stream)."""


class WebhookTimeout(TripPlannerError):
    """The webhook did not answer in time. Never leaves the orchestrator."""
