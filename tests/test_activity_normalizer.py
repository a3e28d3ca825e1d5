import pytest

from app.agents.activity_normalizer import coerce_number, normalize_activity


def test_missing_required_fields_take_defaults():
    activity = normalize_activity({}, "Lisbon")

    assert activity.time == "09:00"
    assert activity.name == "Activity"
    assert activity.type == "activity"
    assert activity.duration == "1h"
    assert activity.location == "Lisbon"


def test_falsy_required_fields_are_replaced():
    activity = normalize_activity(
        {"time": "", "name": None, "type": "", "duration": 0, "location": ""}, "Lisbon"
    )

    assert activity.time == "09:00"
    assert activity.name == "Activity"
    assert activity.duration == "1h"
    assert activity.location == "Lisbon"


@pytest.mark.parametrize("raw_type", ["spa", 42, None, ["flight"]])
def test_unknown_type_maps_to_activity(raw_type):
    activity = normalize_activity({"name": "Thermal baths", "type": raw_type}, "Budapest")
    assert activity.type == "activity"


def test_type_matching_ignores_case_and_whitespace():
    assert normalize_activity({"type": " Flight "}, "Rome").type == "flight"


@pytest.mark.parametrize("raw", [None, "not a record", 17, ["time", "name"]])
def test_never_raises_on_non_record_input(raw):
    activity = normalize_activity(raw, "Oslo")
    assert activity.location == "Oslo"
    assert activity.model_dump() == {
        "time": "09:00",
        "name": "Activity",
        "type": "activity",
        "duration": "1h",
        "location": "Oslo",
    }


def test_optional_fields_pass_through_verbatim():
    raw = {
        "time": "20:00",
        "name": "Hotel Le Marais",
        "type": "accommodation",
        "duration": "4 nights",
        "location": "Le Marais",
        "cost": 600,
        "notes": "Late check-in",
        "booking_url": "https://example.com/book",
        "image_url": "https://example.com/img.jpg",
        "amenities": ["WiFi", "Pool"],
        "flight_class": "economy",
        "rating": 4.5,
        "address": "1 Rue de Rivoli",
        "phone": "+33 1 23 45 67",
        "website": "https://example.com",
        "confirmation_code": "ABC123",
        "provider": "Booking.com",
        "category": "boutique hotel",
    }

    dumped = normalize_activity(raw, "Paris").model_dump()

    assert dumped == {**raw, "cost": 600.0}


def test_absent_optional_fields_are_omitted_not_nulled():
    activity = normalize_activity({"name": "Walk", "notes": None}, "Paris")

    dumped = activity.model_dump()
    assert "notes" not in dumped
    assert "cost" not in dumped
    assert not activity.has("notes")


def test_explicit_empty_string_is_kept():
    activity = normalize_activity({"name": "Walk", "notes": ""}, "Paris")

    assert activity.has("notes")
    assert activity.model_dump()["notes"] == ""


def test_zero_cost_is_kept():
    activity = normalize_activity({"name": "Free museum day", "cost": 0}, "Paris")
    assert activity.model_dump()["cost"] == 0.0


@pytest.mark.parametrize("amenities", ["WiFi", ["WiFi", 3], {"wifi": True}])
def test_malformed_amenities_are_dropped(amenities):
    activity = normalize_activity({"amenities": amenities}, "Paris")
    assert "amenities" not in activity.model_dump()


def test_wrong_shaped_optionals_are_dropped():
    activity = normalize_activity({"cost": "cheap", "rating": {"stars": 4}, "phone": ["1"]}, "Paris")

    dumped = activity.model_dump()
    assert "cost" not in dumped
    assert "rating" not in dumped
    assert "phone" not in dumped


def test_numeric_strings_and_numbers_are_coerced():
    activity = normalize_activity({"cost": "25.5", "phone": 5551234}, "Paris")

    assert activity.cost == 25.5
    assert activity.phone == "5551234"


def test_cost_is_not_range_checked():
    assert normalize_activity({"cost": -40}, "Paris").cost == -40.0


@pytest.mark.parametrize("value", [None, True, "nan", float("inf"), [], "abc"])
def test_coerce_number_rejects_non_finite_and_non_numeric(value):
    assert coerce_number(value) is None


def test_huge_integers_never_raise():
    activity = normalize_activity({"name": "Vault", "cost": 10**400, "rating": -(10**400), "phone": 10**5000}, "Bern")

    assert activity.name == "Vault"
    assert not activity.has("cost")
    assert not activity.has("rating")
    assert not activity.has("phone")
    assert coerce_number(10**400) is None


def test_long_integer_text_fields_are_stringified():
    activity = normalize_activity({"phone": 10**30, "name": 10**5000}, "Bern")

    assert activity.phone == str(10**30)
    assert activity.name == "Activity"
