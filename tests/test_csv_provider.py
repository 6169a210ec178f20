from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from cargo_planner.core.models import FlightSearchParams
from cargo_planner.providers.csv_provider import DATA_PATH, CSVProvider

CSV = """id,origin,destination,departure_time,arrival_time,total_duration_minutes,stops,aircraft,price_total,currency
a,YYZ,YVR,2024-03-01T11:00:00Z,2024-03-01T16:30:00Z,330,0,789,412.50,CAD
b,yyz,yvr,2024-03-01T14:00:00Z,2024-03-01T21:00:00Z,,1,"738, CR9",300,CAD
bad,YYZ,YVR,not-a-date,2024-03-01T21:00:00Z,,0,789,100,CAD
c,YYZ,YVR,2024-03-02T11:00:00Z,2024-03-02T16:30:00Z,330,0,789,450,CAD
d,YUL,YVR,2024-03-01T11:00:00Z,2024-03-01T16:30:00Z,330,0,789,450,CAD
"""


@pytest.fixture
def offers_csv(tmp_path):
    path = tmp_path / "offers.csv"
    path.write_text(CSV)
    return str(path)


def test_csv_provider_filters_route_and_date(offers_csv):
    offers = CSVProvider(offers_csv).search(FlightSearchParams("YYZ", "YVR", date(2024, 3, 1)))

    assert [o.id for o in offers] == ["a", "b"]


def test_csv_provider_maps_columns(offers_csv):
    a, b = CSVProvider(offers_csv).search(FlightSearchParams("YYZ", "YVR", date(2024, 3, 1)))

    assert a.departure_time == datetime(2024, 3, 1, 11, 0, tzinfo=timezone.utc)
    assert a.is_direct
    assert a.price_total == Decimal("412.5")
    assert a.currency == "CAD"
    assert not b.is_direct
    assert b.total_duration_minutes == 420
    assert b.aircraft_descriptor == "738, CR9"


def test_csv_provider_non_stop_filter(offers_csv):
    offers = CSVProvider(offers_csv).search(
        FlightSearchParams("YYZ", "YVR", date(2024, 3, 1), non_stop=True)
    )
    assert [o.id for o in offers] == ["a"]


def test_csv_provider_missing_file_returns_nothing(tmp_path):
    provider = CSVProvider(str(tmp_path / "missing.csv"))
    assert provider.search(FlightSearchParams("YYZ", "YVR", date(2024, 3, 1))) == []


def test_csv_provider_rejects_file_without_required_columns(tmp_path):
    path = tmp_path / "broken.csv"
    path.write_text("origin,destination\nYYZ,YVR\n")
    with pytest.raises(ValueError):
        CSVProvider(str(path)).search(FlightSearchParams("YYZ", "YVR", date(2024, 3, 1)))


def test_bundled_sample_offers_load():
    offers = CSVProvider(DATA_PATH).search(FlightSearchParams("JFK", "LAX", date(2025, 3, 10)))
    assert [o.id for o in offers] == ["JFK-LAX-1", "JFK-LAX-2"]
