"""Synthetic itinerary used when the webhook cannot deliver a real one."""
from __future__ import annotations

import random
from typing import Any, Dict, List, Optional

from app.agents.bookends import enforce_bookends
from app.agents.foundation_agent import (
    comfort_tier,
    date_for_offset,
    date_range_label,
    outbound_route,
    return_route,
)
from app.schemas import (
    AccommodationSummary,
    Activity,
    DayItinerary,
    FlightSummary,
    TripFormData,
    TripItinerary,
)

PLACEHOLDER_THEMES = (
    "Exploration & Discovery",
    "Cultural Immersion",
    "Relaxation & Wellness",
    "Adventure Day",
    "Local Experience",
    "Scenic Journey",
)

ACTIVITY_TEMPLATES: List[Dict[str, Any]] = [
    {"name": "Explore Old Town", "type": "sightseeing", "duration": "3 hours", "cost": 0},
    {"name": "Local Food Tour", "type": "dining", "duration": "2 hours", "cost": 45},
    {"name": "Museum Visit", "type": "sightseeing", "duration": "2.5 hours", "cost": 25},
    {"name": "Sunset Viewpoint", "type": "sightseeing", "duration": "1.5 hours", "cost": 0},
    {"name": "Traditional Restaurant", "type": "dining", "duration": "1.5 hours", "cost": 35},
    {"name": "Walking Tour", "type": "activity", "duration": "3 hours", "cost": 20},
    {"name": "Beach Day", "type": "activity", "duration": "4 hours", "cost": 15},
    {"name": "Cooking Class", "type": "activity", "duration": "3 hours", "cost": 60},
    {"name": "Market Shopping", "type": "shopping", "duration": "2 hours", "cost": 50},
    {"name": "Boat Tour", "type": "activity", "duration": "4 hours", "cost": 80},
]

TIME_SLOTS = ("09:00", "12:00", "15:00", "19:00")
LATE_SLOT = "20:00"
MIN_ACTIVITIES_PER_DAY = 3
MAX_ACTIVITIES_PER_DAY = 4

# Per-unit price factors, multiplied by the comfort level.
DAILY_SPEND_PER_LEVEL = 80
FLIGHT_COST_PER_LEVEL = 150
HOTEL_NIGHT_PER_LEVEL = 60


def generate_placeholder(form: TripFormData, rng: Optional[random.Random] = None) -> TripItinerary:
    """Build a complete itinerary from the form alone.

    The layout (day count, time slots, cost model) is fixed; which templates are
    picked and their districts are random. Pass a seeded ``rng`` for repeatable
    output.
    """
    rng = rng or random.Random()
    num_days = form.num_days
    comfort_name, comfort_emoji = comfort_tier(form.comfort_level)

    daily_itinerary = [
        DayItinerary(
            day=offset + 1,
            date=date_for_offset(form.start_date, offset),
            theme=PLACEHOLDER_THEMES[offset % len(PLACEHOLDER_THEMES)],
            activities=_placeholder_activities(form, rng),
        )
        for offset in range(num_days)
    ]

    base_cost = form.comfort_level * DAILY_SPEND_PER_LEVEL
    activities_cost = base_cost * num_days * form.travelers
    flight_cost = form.comfort_level * FLIGHT_COST_PER_LEVEL * form.travelers
    hotel_cost = form.comfort_level * HOTEL_NIGHT_PER_LEVEL * (num_days - 1)

    placeholder = TripItinerary(
        destination=form.destination_city,
        dates=date_range_label(form),
        travelers=form.travelers,
        comfort_level=form.comfort_level,
        comfort_level_name=comfort_name,
        comfort_level_emoji=comfort_emoji,
        total_cost=activities_cost + flight_cost + hotel_cost,
        daily_itinerary=daily_itinerary,
        flights=FlightSummary(
            outbound=outbound_route(form),
            return_=return_route(form),
            total_cost=flight_cost,
        ),
        accommodation=AccommodationSummary(
            name=f"{comfort_name} Hotel in {form.destination_city}",
            nights=num_days - 1,
            total_cost=hotel_cost,
        ),
    )
    return enforce_bookends(placeholder, form)


def _placeholder_activities(form: TripFormData, rng: random.Random) -> List[Activity]:
    count = rng.randint(MIN_ACTIVITIES_PER_DAY, MAX_ACTIVITIES_PER_DAY)
    activities: List[Activity] = []
    for slot in range(count):
        template = rng.choice(ACTIVITY_TEMPLATES)
        activities.append(
            Activity(
                time=TIME_SLOTS[slot] if slot < len(TIME_SLOTS) else LATE_SLOT,
                name=template["name"],
                type=template["type"],
                duration=template["duration"],
                location=f"{form.destination_city} - District {rng.randint(1, 10)}",
                cost=template["cost"],
                notes=f"Perfect for {form.group_type} travelers",
            )
        )
    return activities
