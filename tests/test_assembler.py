import pytest

from app.agents.assembler import PayloadShape, assemble_itinerary, classify_payload
from app.errors import MalformedResponseError
from app.schemas import TripFormData

FORM = TripFormData(
    departure_city="NYC",
    destination_city="Paris",
    start_date="2025-03-01",
    end_date="2025-03-03",
    travelers=2,
    comfort_level=4,
    group_type="couple",
    preferences=["art"],
    passport_country="US",
)

ACTIVITY_STREAM = [
    {"time": "08:00", "name": "Flight to Paris", "type": "flight", "location": "CDG", "cost": 300},
    {"time": "14:00", "name": "Hotel Lutetia", "type": "accommodation", "duration": "2 nights", "cost": 400},
    {"time": "10:00", "name": "Louvre", "type": "sightseeing", "cost": 20},
    {"time": "18:00", "name": "Flight home", "type": "flight", "location": "ORY", "cost": 320},
]


def _assert_bookends(itinerary):
    assert itinerary.daily_itinerary[0].activities[0].type in ("flight", "transport")
    assert itinerary.daily_itinerary[-1].activities[-1].type in ("flight", "transport")


def _assert_contiguous(itinerary):
    days = itinerary.daily_itinerary
    assert [d.day for d in days] == list(range(1, len(days) + 1))


def test_bare_activity_list_is_bucketed_into_days():
    itinerary = assemble_itinerary(ACTIVITY_STREAM, FORM)

    days = itinerary.daily_itinerary
    assert len(days) == 3
    assert [a.name for a in days[0].activities] == ["Flight to Paris", "Hotel Lutetia"]
    assert [a.name for a in days[1].activities] == ["Louvre", "Flight home"]
    # The padded third day only holds the synthesised return leg.
    assert [a.notes for a in days[2].activities] == ["Return flight"]
    assert [d.date for d in days] == ["2025-03-01", "2025-03-02", "2025-03-03"]
    _assert_bookends(itinerary)


def test_activity_stream_totals_are_derived():
    itinerary = assemble_itinerary({"data": ACTIVITY_STREAM}, FORM)

    assert itinerary.total_cost == 1040
    assert itinerary.flights.outbound == "CDG"
    assert itinerary.flights.return_ == "ORY"
    assert itinerary.flights.total_cost == 620
    assert itinerary.accommodation.name == "Hotel Lutetia"
    assert itinerary.accommodation.nights == 2
    assert itinerary.accommodation.total_cost == 400
    assert itinerary.comfort_level_name == "Premium"
    assert itinerary.comfort_level_emoji == "✨"
    assert itinerary.destination == "Paris"
    assert itinerary.travelers == 2


def test_activity_stream_without_flights_or_hotel_uses_form_defaults():
    itinerary = assemble_itinerary({"data": [{"time": "10:00", "name": "Louvre"}]}, FORM)

    assert itinerary.flights.outbound == "NYC → Paris"
    assert itinerary.flights.return_ == "Paris → NYC"
    assert itinerary.flights.total_cost == 0
    assert itinerary.accommodation.name == "Hotel in Paris"
    assert itinerary.accommodation.nights == 2
    assert itinerary.accommodation.total_cost == 0


def test_hotel_nights_fall_back_when_duration_is_not_numeric():
    stream = [{"time": "15:00", "name": "Ritz", "type": "accommodation", "duration": "overnight"}]
    itinerary = assemble_itinerary({"data": stream}, FORM)
    assert itinerary.accommodation.nights == 2


def test_empty_data_list_yields_padded_trip():
    itinerary = assemble_itinerary({"data": []}, FORM)

    assert len(itinerary.daily_itinerary) == 3
    assert itinerary.total_cost == 0
    _assert_bookends(itinerary)
    _assert_contiguous(itinerary)


def test_day_list_payload_is_taken_as_is():
    payload = {
        "destination": "Paris, France",
        "dates": "March 1-3",
        "travelers": 3,
        "comfort_level": 2,
        "comfort_level_name": "Economy",
        "comfort_level_emoji": "💼",
        "total_cost": 2500,
        "daily_itinerary": [
            {
                "day": 1,
                "date": "2025-03-01",
                "theme": "Arrival",
                "activities": [
                    {"time": "08:00", "name": "Flight to Paris", "type": "flight", "duration": "7h", "location": "CDG"},
                    {"time": "19:00", "name": "Dinner", "type": "dining", "duration": "2h", "location": "Le Marais"},
                ],
            },
            {
                "day": 2,
                "date": "2025-03-02",
                "theme": "Departure",
                "activities": [
                    {"time": "16:00", "name": "Flight home", "type": "flight", "duration": "8h", "location": "CDG"},
                ],
            },
        ],
        "flights": {"outbound": "JFK → CDG", "return": "CDG → JFK", "total_cost": 800},
        "accommodation": {"name": "Hotel Le Marais", "nights": 1, "total_cost": 600},
    }

    itinerary = assemble_itinerary(payload, FORM)

    assert itinerary.destination == "Paris, France"
    assert itinerary.dates == "March 1-3"
    assert itinerary.travelers == 3
    assert itinerary.comfort_level == 2
    assert itinerary.comfort_level_name == "Economy"
    assert itinerary.total_cost == 2500
    assert len(itinerary.daily_itinerary) == 2
    assert itinerary.daily_itinerary[0].theme == "Arrival"
    assert itinerary.daily_itinerary[0].activities[0].name == "Flight to Paris"
    assert itinerary.daily_itinerary[-1].activities[-1].name == "Flight home"
    assert itinerary.to_payload()["flights"] == {"outbound": "JFK → CDG", "return": "CDG → JFK", "total_cost": 800.0}
    assert itinerary.accommodation.name == "Hotel Le Marais"
    assert itinerary.accommodation.nights == 1


def test_day_list_defaults_are_filled_from_form():
    payload = {
        "daily_itinerary": [
            {"activities": [{"name": "Louvre", "cost": 20}, {"name": "Flight out", "type": "flight", "cost": 250}]},
            {"activities": "not a list"},
        ]
    }

    itinerary = assemble_itinerary(payload, FORM)

    day1, day2 = itinerary.daily_itinerary
    assert (day1.day, day1.date, day1.theme) == (1, "2025-03-01", "Day 1")
    assert (day2.day, day2.date, day2.theme) == (2, "2025-03-02", "Day 2")
    assert day1.activities[1].location == "Paris"
    assert itinerary.destination == "Paris"
    assert itinerary.dates == "2025-03-01 - 2025-03-03"
    assert itinerary.comfort_level_name == "Premium"
    assert itinerary.total_cost == 270
    assert itinerary.flights.total_cost == 250
    assert itinerary.flights.outbound == "NYC → Paris"
    assert itinerary.accommodation.name == "Hotel in Paris"
    assert itinerary.accommodation.nights == 2
    _assert_bookends(itinerary)


@pytest.mark.parametrize(
    "payload",
    [
        [{"daily_itinerary": [{"activities": []}]}],
        {"data": {"daily_itinerary": [{"activities": []}]}},
        {"itinerary": [{"activities": []}]},
    ],
)
def test_wrapped_and_legacy_day_lists_are_accepted(payload):
    shape, _ = classify_payload(payload)
    assert shape is PayloadShape.DAY_LIST

    itinerary = assemble_itinerary(payload, FORM)
    assert len(itinerary.daily_itinerary) == 1
    assert [a.notes for a in itinerary.daily_itinerary[0].activities] == ["Departure flight", "Return flight"]


def test_classify_payload_variants():
    assert classify_payload(ACTIVITY_STREAM)[0] is PayloadShape.BARE_ACTIVITY_LIST
    assert classify_payload({"data": ACTIVITY_STREAM})[0] is PayloadShape.DATA_ENVELOPE


@pytest.mark.parametrize(
    "payload",
    [
        {"foo": "bar"},
        "plain text",
        None,
        42,
        [],
        [["nested"]],
        {"daily_itinerary": []},
        {"daily_itinerary": "day one"},
        {"data": "not usable"},
        {"data": {"foo": "bar"}},
    ],
)
def test_unusable_payloads_are_malformed(payload):
    with pytest.raises(MalformedResponseError):
        assemble_itinerary(payload, FORM)


def test_non_object_day_is_malformed():
    with pytest.raises(MalformedResponseError):
        assemble_itinerary({"daily_itinerary": ["day one"]}, FORM)


def test_huge_integer_header_fields_fall_back_to_form():
    payload = {
        "daily_itinerary": [
            {"day": 10**400, "activities": [{"time": "10:00", "name": "Louvre", "type": "sightseeing", "cost": 25}]}
        ],
        "travelers": 10**400,
        "comfort_level": 10**400,
        "total_cost": 10**400,
        "accommodation": {"nights": 10**400},
    }

    itinerary = assemble_itinerary(payload, FORM)

    assert itinerary.travelers == FORM.travelers
    assert itinerary.comfort_level == FORM.comfort_level
    assert itinerary.daily_itinerary[0].day == 1
    assert itinerary.total_cost == 25
    assert itinerary.accommodation.nights == 2
