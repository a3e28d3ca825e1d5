"""Trip fundamentals shared by the itinerary builders."""
from __future__ import annotations

from datetime import date, timedelta
from typing import Tuple

from app.schemas import TripFormData

COMFORT_TIERS: Tuple[Tuple[str, str], ...] = (
    ("Budget", "🎒"),
    ("Economy", "💼"),
    ("Standard", "⭐"),
    ("Premium", "✨"),
    ("Luxury", "👑"),
)


def comfort_tier(level: int) -> Tuple[str, str]:
    """Return the (name, emoji) label for a 1-5 comfort level, clamping strays."""
    index = min(max(int(level), 1), len(COMFORT_TIERS)) - 1
    return COMFORT_TIERS[index]


def date_for_offset(start: date, offset: int) -> str:
    return (start + timedelta(days=offset)).isoformat()


def date_range_label(form: TripFormData) -> str:
    return f"{form.start_date.isoformat()} - {form.end_date.isoformat()}"


def outbound_route(form: TripFormData) -> str:
    return f"{form.departure_city} → {form.destination_city}"


def return_route(form: TripFormData) -> str:
    return f"{form.destination_city} → {form.departure_city}"

