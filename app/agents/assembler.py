"""Turn an untrusted webhook payload into a ``TripItinerary``.

The webhook is an external workflow whose output shape drifts. Three shapes
are recognised:

* ``BARE_ACTIVITY_LIST`` - a list of activity records.
* ``DATA_ENVELOPE`` - ``{"data": [...]}`` holding the same kind of list.
  For both of these, days are inferred from the clock and totals derived
  from the activities.
* ``DAY_LIST`` - an object carrying ``daily_itinerary`` (or the older
  ``itinerary`` key), optionally nested inside ``{"data": {...}}``.
* anything else is rejected with ``MalformedResponseError``.

A single-element list wrapping either object shape is unwrapped first.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from app.agents.activity_normalizer import coerce_number as _number, normalize_activity
from app.agents.bookends import enforce_bookends
from app.agents.day_bucketizer import bucketize
from app.agents.foundation_agent import (
    comfort_tier,
    date_for_offset,
    date_range_label,
    outbound_route,
    return_route,
)
from app.errors import MalformedResponseError
from app.log import get_logger
from app.schemas import (
    AccommodationSummary,
    Activity,
    DayItinerary,
    FlightSummary,
    TripFormData,
    TripItinerary,
)

logger = get_logger(__name__)


class PayloadShape(str, Enum):
    BARE_ACTIVITY_LIST = "bare_activity_list"
    DATA_ENVELOPE = "data_envelope"
    DAY_LIST = "day_list"


def assemble_itinerary(payload: Any, form: TripFormData) -> TripItinerary:
    """Normalise ``payload`` into an itinerary with transport bookends applied."""
    shape, body = classify_payload(payload)
    logger.info("Assembling itinerary from %s payload", shape.value)
    itinerary = _PARSERS[shape](body, form)
    return enforce_bookends(itinerary, form)


def classify_payload(payload: Any) -> Tuple[PayloadShape, Any]:
    """Pick the variant ``payload`` belongs to and return the part to parse."""
    if isinstance(payload, list) and payload and _looks_like_activity(payload[0]):
        return PayloadShape.BARE_ACTIVITY_LIST, payload

    body = payload
    if isinstance(body, list):
        body = body[0] if body else None

    if not isinstance(body, dict):
        raise MalformedResponseError("Invalid response format from webhook")

    data = body.get("data")
    if not body.get("daily_itinerary"):
        if isinstance(data, list):
            return PayloadShape.DATA_ENVELOPE, data
        if isinstance(data, dict):
            body = data

    days = body.get("daily_itinerary") or body.get("itinerary")
    if not isinstance(days, list) or not days:
        raise MalformedResponseError("No itinerary data in response")
    return PayloadShape.DAY_LIST, body


def _looks_like_activity(item: Any) -> bool:
    return isinstance(item, dict) and bool(item.get("time")) and bool(item.get("name"))

# ---------- flat activity stream ----------
def _from_activity_stream(records: Sequence[Any], form: TripFormData) -> TripItinerary:
    requested_days = form.num_days
    activities = [normalize_activity(record, form.destination_city) for record in records]
    daily_itinerary = bucketize(activities, form.start_date, requested_days)
    logger.debug(
        "Bucketed %d activities into %d day(s) (requested %d)",
        len(activities),
        len(daily_itinerary),
        requested_days,
    )

    flights = [a for a in activities if a.type == "flight"]
    hotel = next((a for a in activities if a.type == "accommodation"), None)
    comfort_name, comfort_emoji = comfort_tier(form.comfort_level)
    default_nights = max(1, requested_days - 1)

    return TripItinerary(
        destination=form.destination_city,
        dates=date_range_label(form),
        travelers=form.travelers,
        comfort_level=form.comfort_level,
        comfort_level_name=comfort_name,
        comfort_level_emoji=comfort_emoji,
        total_cost=_sum_costs(activities),
        daily_itinerary=daily_itinerary,
        flights=FlightSummary(
            outbound=flights[0].location if flights else outbound_route(form),
            return_=flights[-1].location if flights else return_route(form),
            total_cost=_sum_costs(flights),
        ),
        accommodation=AccommodationSummary(
            name=hotel.name if hotel else f"Hotel in {form.destination_city}",
            nights=(_leading_int(hotel.duration) or default_nights) if hotel else default_nights,
            total_cost=(hotel.cost or 0) if hotel else 0,
        ),
    )

# ---------- pre-grouped day list ----------
def _from_day_list(body: Dict[str, Any], form: TripFormData) -> TripItinerary:
    raw_days: List[Any] = body.get("daily_itinerary") or body.get("itinerary")
    daily_itinerary = [_parse_day(raw_day, index, form) for index, raw_day in enumerate(raw_days)]
    all_activities = [activity for day in daily_itinerary for activity in day.activities]

    comfort_name, comfort_emoji = comfort_tier(form.comfort_level)
    flights = _as_dict(body.get("flights"))
    accommodation = _as_dict(body.get("accommodation"))
    flight_activities = [a for a in all_activities if a.type == "flight"]
    hotel = next((a for a in all_activities if a.type == "accommodation"), None)

    total_cost = _number(body.get("total_cost"))
    flight_cost = _number(flights.get("total_cost"))
    hotel_cost = _number(accommodation.get("total_cost"))

    return TripItinerary(
        destination=_text(body.get("destination")) or form.destination_city,
        dates=_text(body.get("dates")) or date_range_label(form),
        travelers=_positive_int(body.get("travelers"), form.travelers),
        comfort_level=_positive_int(body.get("comfort_level"), form.comfort_level),
        comfort_level_name=_text(body.get("comfort_level_name")) or comfort_name,
        comfort_level_emoji=_text(body.get("comfort_level_emoji")) or comfort_emoji,
        total_cost=total_cost if total_cost is not None else _sum_costs(all_activities),
        daily_itinerary=daily_itinerary,
        flights=FlightSummary(
            outbound=_text(flights.get("outbound")) or outbound_route(form),
            return_=_text(flights.get("return")) or return_route(form),
            total_cost=flight_cost if flight_cost is not None else _sum_costs(flight_activities),
        ),
        accommodation=AccommodationSummary(
            name=_text(accommodation.get("name")) or f"Hotel in {form.destination_city}",
            nights=_positive_int(accommodation.get("nights"), max(1, form.num_days - 1)),
            total_cost=hotel_cost if hotel_cost is not None else ((hotel.cost or 0) if hotel else 0),
        ),
    )


def _parse_day(raw_day: Any, index: int, form: TripFormData) -> DayItinerary:
    if not isinstance(raw_day, dict):
        raise MalformedResponseError(f"Day {index + 1} in webhook response is not an object")

    raw_activities = raw_day.get("activities")
    if not isinstance(raw_activities, list):
        raw_activities = []

    return DayItinerary(
        day=_positive_int(raw_day.get("day"), index + 1),
        date=_text(raw_day.get("date")) or date_for_offset(form.start_date, index),
        theme=_text(raw_day.get("theme")) or f"Day {index + 1}",
        activities=[normalize_activity(act, form.destination_city) for act in raw_activities],
    )

# ---------- helpers ----------
def _sum_costs(activities: Sequence[Activity]) -> float:
    return sum(a.cost or 0 for a in activities)


def _leading_int(text: str) -> int:
    """Integer prefix of ``text`` ("3 nights" -> 3), 0 when there is none."""
    match = re.match(r"\s*\d+", text or "")
    return int(match.group()) if match else 0


def _positive_int(value: Any, default: int) -> int:
    number = _number(value)
    if number is None or number < 1:
        return default
    return int(number)


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


_PARSERS = {
    PayloadShape.BARE_ACTIVITY_LIST: _from_activity_stream,
    PayloadShape.DATA_ENVELOPE: _from_activity_stream,
    PayloadShape.DAY_LIST: _from_day_list,
}
