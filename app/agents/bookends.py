"""Guarantee that an itinerary opens and closes with a transport leg."""
from __future__ import annotations

from typing import List

from app.schemas import Activity, DayItinerary, TripFormData, TripItinerary


def departure_placeholder(form: TripFormData) -> Activity:
    return Activity(
        time="06:00",
        name=f"Flight: {form.departure_city} → {form.destination_city}",
        type="flight",
        duration="2-3h",
        location=f"{form.departure_city} Airport",
        cost=0,
        notes="Departure flight",
    )


def return_placeholder(form: TripFormData) -> Activity:
    return Activity(
        time="18:00",
        name=f"Flight: {form.destination_city} → {form.departure_city}",
        type="flight",
        duration="2-3h",
        location=f"{form.destination_city} Airport",
        cost=0,
        notes="Return flight",
    )


def enforce_bookends(itinerary: TripItinerary, form: TripFormData) -> TripItinerary:
    """Return a copy whose first and last activities are flights or transport.

    The two checks are independent: a departure is prepended to day one and a
    return appended to the final day, each only when missing. Both checks look at
    the itinerary as given, so an empty one-day trip receives both legs rather
    than treating the freshly inserted departure as its closing transport. The
    input itinerary is left untouched.
    """
    if not itinerary.daily_itinerary:
        return itinerary

    days: List[DayItinerary] = list(itinerary.daily_itinerary)
    first_activities = days[0].activities
    last_activities = days[-1].activities
    needs_departure = not first_activities or not first_activities[0].is_transport
    needs_return = not last_activities or not last_activities[-1].is_transport

    if needs_departure:
        days[0] = days[0].model_copy(
            update={"activities": [departure_placeholder(form), *days[0].activities]}
        )
    if needs_return:
        days[-1] = days[-1].model_copy(
            update={"activities": [*days[-1].activities, return_placeholder(form)]}
        )

    return itinerary.model_copy(update={"daily_itinerary": days})
