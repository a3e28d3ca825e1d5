import asyncio
import json
from typing import Any, Optional

import httpx

from app.errors import WebhookTimeout, WebhookUnavailableError
from app.log import get_logger

logger = get_logger(__name__)


class WebhookClient:
    """POST JSON to the itinerary workflow with a hard wall-clock limit.

    ``timeout`` bounds the whole exchange, not each socket read: when it runs
    out the pending request is cancelled and the client closes its connection.
    """

    def __init__(self, url: str, *, timeout: float):
        self.url = url
        self.timeout = timeout

    async def post_json(self, payload: Any) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                return await asyncio.wait_for(
                    client.post(self.url, json=payload, headers={"Content-Type": "application/json"}),
                    timeout=self.timeout,
                )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            logger.warning("Webhook %s did not answer within %.0fs", self.url, self.timeout)
            raise WebhookTimeout(f"Request timed out after {self.timeout:.0f}s") from exc
        except httpx.HTTPError as exc:
            logger.warning("Webhook %s unreachable: %s", self.url, exc)
            raise WebhookUnavailableError(str(exc) or None) from exc


def read_json(response: httpx.Response) -> Optional[Any]:
    """Decoded JSON body, or None when the body is empty or not JSON."""
    try:
        return response.json()
    except (json.JSONDecodeError, ValueError):
        return None
