from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

ActivityType = Literal[
    "flight", "transport", "accommodation", "dining", "sightseeing", "activity", "shopping", "cafe"
]
ACTIVITY_TYPES = (
    "flight", "transport", "accommodation", "dining", "sightseeing", "activity", "shopping", "cafe"
)
TRANSPORT_TYPES = ("flight", "transport")

# ------- Request models -------
class TripFormData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    departure_city: str
    destination_city: str
    start_date: date
    end_date: date
    travelers: int = Field(1, ge=1)
    preferences: List[str] = Field(default_factory=list)
    passport_country: str = ""
    group_type: str = "solo"
    comfort_level: int = Field(3, ge=1, le=5)

    @model_validator(mode="after")
    def _check_date_order(self) -> "TripFormData":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    @property
    def num_days(self) -> int:
        """Inclusive number of calendar days covered by the trip."""
        return (self.end_date - self.start_date).days + 1

# ------- Itinerary models -------
REQUIRED_ACTIVITY_FIELDS = ("time", "name", "type", "duration", "location")
OPTIONAL_ACTIVITY_FIELDS = (
    "cost",
    "notes",
    "booking_url",
    "image_url",
    "amenities",
    "flight_class",
    "rating",
    "address",
    "phone",
    "website",
    "confirmation_code",
    "provider",
    "category",
)


class Activity(BaseModel):
    """One scheduled stop in a day.

    Optional attributes are presence-aware: only the ones explicitly set show up
    when the activity is dumped, so "unknown" never turns into ``null``.
    """

    model_config = ConfigDict(frozen=True)

    time: str
    name: str
    type: ActivityType
    duration: str
    location: str
    cost: Optional[float] = None
    notes: Optional[str] = None
    booking_url: Optional[str] = None
    image_url: Optional[str] = None
    amenities: Optional[List[str]] = None
    flight_class: Optional[str] = None
    rating: Optional[float] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    confirmation_code: Optional[str] = None
    provider: Optional[str] = None
    category: Optional[str] = None

    def has(self, field_name: str) -> bool:
        return field_name in REQUIRED_ACTIVITY_FIELDS or field_name in self.model_fields_set

    @property
    def is_transport(self) -> bool:
        return self.type in TRANSPORT_TYPES

    @model_serializer(mode="wrap")
    def _drop_absent_optionals(self, handler: Any) -> Dict[str, Any]:
        data = handler(self)
        return {key: value for key, value in data.items() if self.has(key)}


class DayItinerary(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: int
    date: str
    theme: str
    activities: List[Activity] = Field(default_factory=list)


class FlightSummary(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    outbound: str
    return_: str = Field(..., alias="return")
    total_cost: float = 0.0


class AccommodationSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    nights: int
    total_cost: float = 0.0


class TripItinerary(BaseModel):
    model_config = ConfigDict(frozen=True)

    destination: str
    dates: str
    travelers: int
    comfort_level: int
    comfort_level_name: str
    comfort_level_emoji: str
    total_cost: float
    daily_itinerary: List[DayItinerary]
    flights: FlightSummary
    accommodation: AccommodationSummary

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict using the wire names (``flights.return``)."""
        return self.model_dump(mode="json", by_alias=True)
