"""Forward each completed form step to its workflow webhook.

Step submissions are informational: whatever the webhook does, the caller
gets a result dict describing it and the form flow carries on.
"""
from typing import Any, Dict

from app.errors import TripPlannerError
from app.log import get_logger
from app.tools.webhook import WebhookClient, read_json

logger = get_logger(__name__)

# step name -> path segment under the step base URL
PLANNER_STEPS: Dict[str, str] = {
    "location": "location",
    "dates": "dates",
    "travelers": "travelers",
    "preferences": "preferences",
    "comfort": "comfort",
}


class UnknownStepError(TripPlannerError):
    """The step name is not one of ``PLANNER_STEPS``."""


def step_url(base_url: str, step: str) -> str:
    endpoint = PLANNER_STEPS.get(step)
    if endpoint is None:
        raise UnknownStepError(f"Unknown step: {step}")
    return f"{base_url.rstrip('/')}/{endpoint}"


async def forward_step(base_url: str, step: str, data: Any, *, timeout: float) -> Dict[str, Any]:
    """POST ``data`` to the step's webhook and describe the outcome.

    Raises ``UnknownStepError`` for an unrecognised step; webhook failures are
    reported in the returned dict instead of raised.
    """
    url = step_url(base_url, step)
    logger.info("Planner step %s forwarded to %s", step, url)

    try:
        response = await WebhookClient(url, timeout=timeout).post_json(data)
    except TripPlannerError as exc:
        logger.warning("Step webhook %s failed (continuing): %s", url, exc.message)
        return {"status": "fetch_error", "message": exc.message}

    if not response.is_success:
        logger.warning(
            "Step webhook %s returned %d %s (continuing)", url, response.status_code, response.reason_phrase
        )
        return {"status": "webhook_error", "code": response.status_code, "message": response.reason_phrase}

    if "application/json" in response.headers.get("content-type", ""):
        body = read_json(response)
        if body is not None:
            return body
    return {"status": "ok", "text": response.text}
