from __future__ import annotations

from typing import Any, Dict

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.config import load_settings
from app.errors import (
    MalformedResponseError,
    UpstreamError,
    WebhookTimeout,
    WebhookUnavailableError,
)
from app.log import get_logger
from app.orchestrator import orchestrate_trip
from app.schemas import TripFormData
from app.tools.planner_steps import PLANNER_STEPS, forward_step
from app.tools.webhook import WebhookClient, read_json

logger = get_logger(__name__)

RELAY_TIMEOUT_MESSAGE = "Request timed out. The trip planner is taking longer than expected."

app = FastAPI(title="Trip Itinerary Planner API")

# Local UIs (Vite dev server, static builds) call the API directly. Operators can
# narrow this with TRIP_PLANNER_ALLOWED_ORIGINS.
app.add_middleware(
    CORSMiddleware,
    allow_origins=load_settings().allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health() -> Dict[str, Any]:
    return {"status": "ok", "webhook_configured": load_settings().webhook_configured}


@app.post("/api/plan")
async def api_plan(payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """Plan a trip from the multi-step form and return the itinerary."""
    try:
        form = TripFormData.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc

    try:
        itinerary = await orchestrate_trip(form)
    except (MalformedResponseError, UpstreamError) as exc:
        raise HTTPException(status_code=502, detail=exc.message) from exc
    except WebhookUnavailableError as exc:
        raise HTTPException(status_code=503, detail=exc.message) from exc
    return itinerary.to_payload()


@app.post("/api/generate-itinerary")
async def generate_itinerary(payload: Any = Body(...)) -> JSONResponse:
    """Relay the form to the workflow webhook and hand back its raw answer.

    Errors are reported as ``{"error": ...}`` bodies; a timeout answers 504 so
    the planner's timeout detection picks it up.
    """
    settings = load_settings()
    if settings.relay_url is None:
        return JSONResponse({"error": "Itinerary webhook is not configured"}, status_code=503)

    logger.info("Forwarding itinerary request to %s", settings.relay_url)
    client = WebhookClient(settings.relay_url, timeout=settings.relay_timeout)
    try:
        response = await client.post_json(payload)
    except WebhookTimeout:
        logger.error("Relay webhook timed out after %.0fs", settings.relay_timeout)
        return JSONResponse({"error": RELAY_TIMEOUT_MESSAGE}, status_code=504)
    except WebhookUnavailableError as exc:
        return JSONResponse({"error": exc.message}, status_code=500)

    if not response.is_success:
        logger.error("Relay webhook error: %d %s", response.status_code, response.reason_phrase)
        return JSONResponse(
            {"error": f"Webhook returned {response.status_code}: {response.reason_phrase}"},
            status_code=500,
        )

    data = read_json(response)
    if data is None:
        return JSONResponse({"error": "Webhook returned a non-JSON body"}, status_code=500)
    return JSONResponse(data)


@app.post("/api/planner-step")
async def planner_step(payload: Any = Body(...)) -> JSONResponse:
    """Forward one completed form step to its webhook.

    Succeeds whatever the webhook does; only a missing or unknown step is an
    error.
    """
    body = payload if isinstance(payload, dict) else {}
    step = body.get("step")
    data = body.get("data")
    if not step or data is None:
        return JSONResponse({"error": "Missing step or data in request"}, status_code=500)
    if not isinstance(step, str) or step not in PLANNER_STEPS:
        return JSONResponse({"error": f"Unknown step: {step}"}, status_code=500)

    settings = load_settings()
    if settings.step_base_url is None:
        logger.info("Planner step %s not forwarded: no step webhook configured", step)
        return JSONResponse({"success": True, "data": {"status": "skipped"}})

    result = await forward_step(settings.step_base_url, step, data, timeout=settings.step_timeout)
    return JSONResponse({"success": True, "data": result})
