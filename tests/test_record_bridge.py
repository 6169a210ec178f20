from datetime import datetime, timedelta, timezone
from decimal import Decimal

from cargo_planner.core.flight_selection import select_optimal_flight
from cargo_planner.core.models import FlightOffer
from cargo_planner.services.record_bridge import recommendation_to_record

READY = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def test_record_for_selected_flight():
    departure = datetime(2024, 3, 1, 11, 0, tzinfo=timezone.utc)
    offer = FlightOffer(
        id="2024-03-01-1",
        departure_time=departure,
        arrival_time=departure + timedelta(hours=5),
        total_duration_minutes=300,
        is_direct=True,
        aircraft_descriptor="789",
        price_total=Decimal("412.50"),
        currency="USD",
    )
    rec = select_optimal_flight([offer], READY, destination_drive_minutes=30)

    record = recommendation_to_record(rec, "YYZ", "YVR")

    assert record["origin_airport"] == "YYZ"
    assert record["destination_airport"] == "YVR"
    assert record["offer_id"] == "2024-03-01-1"
    assert record["reason_code"] == "SAME_DAY_OPTIMAL"
    assert record["departure_time"] == "2024-03-01T11:00:00+00:00"
    assert record["arrival_time"] == "2024-03-01T16:00:00+00:00"
    assert record["cargo_ready_at"] == "2024-03-01T17:30:00+00:00"
    assert record["estimated_delivery_time"] == "2024-03-01T18:00:00+00:00"
    assert record["price_total"] == "412.50"
    assert record["is_direct"] is True


def test_record_for_no_flight_found():
    rec = select_optimal_flight([], READY)

    record = recommendation_to_record(rec, "YYZ", "YVR")

    assert record["reason_code"] == "NO_FLIGHTS_FOUND"
    assert record["offer_id"] is None
    assert record["departure_time"] is None
    assert record["estimated_delivery_time"] is None
    assert record["explanation"]
