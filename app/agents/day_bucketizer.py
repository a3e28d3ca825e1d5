"""Group a flat, time-ordered activity stream into calendar days."""
from __future__ import annotations

from datetime import date
from typing import List, Sequence

from app.agents.foundation_agent import date_for_offset
from app.schemas import Activity, DayItinerary

DAY_THEMES = (
    "Arrival & Exploration",
    "Cultural Immersion",
    "Adventure Day",
    "Local Experience",
    "Scenic Journey",
    "Relaxation & Wellness",
    "Discovery Day",
    "Grand Finale",
    "Free Day",
    "Departure",
)


def bucketize(activities: Sequence[Activity], start_date: date, requested_days: int) -> List[DayItinerary]:
    """Split ``activities`` into days wherever the clock fails to move forward.

    A time that is not later than the previous activity's starts a new day. The
    result is padded with empty days up to ``requested_days`` but never truncated
    when the stream holds more days than requested.

    Overnight plans (23:00 followed by 01:00) are split as two days.
    """
    buckets: List[List[Activity]] = []
    current: List[Activity] = []
    last_minutes = -1

    for activity in activities:
        minutes = minutes_of_day(activity.time)
        if current and minutes <= last_minutes:
            buckets.append(current)
            current = []
        current.append(activity)
        last_minutes = minutes
    if current:
        buckets.append(current)

    while len(buckets) < requested_days:
        buckets.append([])

    return [
        DayItinerary(
            day=index + 1,
            date=date_for_offset(start_date, index),
            theme=DAY_THEMES[index % len(DAY_THEMES)],
            activities=bucket,
        )
        for index, bucket in enumerate(buckets)
    ]


def minutes_of_day(clock: str) -> int:
    """Minutes since midnight for an ``HH:MM`` string; unreadable parts count as 0."""
    parts = (clock or "00:00").split(":")
    hours = _to_int(parts[0])
    mins = _to_int(parts[1]) if len(parts) > 1 else 0
    return hours * 60 + mins


def _to_int(text: str) -> int:
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        return 0
