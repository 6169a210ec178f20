from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
import requests

from cargo_planner.core.flight_selection import select_optimal_flight
from cargo_planner.core.models import FlightSearchParams, ReasonCode
from cargo_planner.providers.amadeus_provider import AmadeusProvider, flatten_offer
from cargo_planner.services.amadeus_client import FLIGHT_OFFERS_PATH, AmadeusClient
from cargo_planner.services.token_provider import AccessToken, TokenProvider
from fakes import FakeResponse, FakeSession

BASE_URL = "https://test.api.amadeus.com"


class StaticTokenProvider(TokenProvider):
    def __init__(self):
        self.issued = 0
        self.invalidated = 0

    def get_token(self):
        self.issued += 1
        return AccessToken(value=f"token-{self.issued}", expires_at=0.0)

    def invalidate(self):
        self.invalidated += 1


def _segment(origin, destination, dep, arr, aircraft):
    return {
        "departure": {"iataCode": origin, "at": dep},
        "arrival": {"iataCode": destination, "at": arr},
        "carrierCode": "AC",
        "number": "101",
        "aircraft": {"code": aircraft},
    }


def _raw_offer(offer_id, segments, duration="PT5H30M", price="412.50"):
    return {
        "id": offer_id,
        "itineraries": [{"duration": duration, "segments": segments}],
        "price": {"currency": "USD", "total": price, "grandTotal": price},
    }


DIRECT = _raw_offer("1", [_segment("YYZ", "YVR", "2024-03-01T11:00:00", "2024-03-01T16:30:00", "789")])
CONNECTING = _raw_offer("2", [
    _segment("YYZ", "YWG", "2024-03-01T10:00:00", "2024-03-01T12:30:00", "738"),
    _segment("YWG", "YVR", "2024-03-01T13:30:00", "2024-03-01T16:00:00", "CR9"),
], duration="PT6H")
NO_SEGMENTS = {"id": "3", "itineraries": [{"segments": []}], "price": {}}
BACKWARDS = _raw_offer("4", [_segment("YYZ", "YVR", "2024-03-01T16:00:00", "2024-03-01T11:00:00", "789")])


# -----------------------------------------------------------------------------
# client
# -----------------------------------------------------------------------------

def test_client_sends_bearer_token():
    session = FakeSession([FakeResponse(200, {"data": []})])
    client = AmadeusClient(StaticTokenProvider(), BASE_URL, session=session)

    assert client.get(FLIGHT_OFFERS_PATH, {"max": 5}) == {"data": []}
    call = session.calls[0]
    assert call["url"] == BASE_URL + FLIGHT_OFFERS_PATH
    assert call["headers"] == {"Authorization": "Bearer token-1"}
    assert call["params"] == {"max": 5}


def test_client_refreshes_token_once_on_401():
    tokens = StaticTokenProvider()
    session = FakeSession([FakeResponse(401), FakeResponse(200, {"data": ["ok"]})])
    client = AmadeusClient(tokens, BASE_URL, session=session)

    assert client.get(FLIGHT_OFFERS_PATH, {}) == {"data": ["ok"]}
    assert tokens.invalidated == 1
    assert session.calls[1]["headers"] == {"Authorization": "Bearer token-2"}


def test_client_does_not_retry_twice():
    session = FakeSession([FakeResponse(401), FakeResponse(401)])
    client = AmadeusClient(StaticTokenProvider(), BASE_URL, session=session)

    with pytest.raises(requests.HTTPError):
        client.get(FLIGHT_OFFERS_PATH, {})
    assert len(session.calls) == 2


def test_client_propagates_server_errors():
    session = FakeSession([FakeResponse(500, text="boom")])
    client = AmadeusClient(StaticTokenProvider(), BASE_URL, session=session)

    with pytest.raises(requests.HTTPError):
        client.get(FLIGHT_OFFERS_PATH, {})
    assert len(session.calls) == 1


# -----------------------------------------------------------------------------
# flattening + provider
# -----------------------------------------------------------------------------

def test_flatten_direct_offer():
    offer = flatten_offer(DIRECT, "2024-03-01-")

    assert offer.id == "2024-03-01-1"
    # 11:00 in Toronto (UTC-5), 16:30 in Vancouver (UTC-8)
    assert offer.departure_time == datetime(2024, 3, 1, 16, 0, tzinfo=timezone.utc)
    assert offer.arrival_time == datetime(2024, 3, 2, 0, 30, tzinfo=timezone.utc)
    assert offer.total_duration_minutes == 330
    assert offer.is_direct
    assert offer.aircraft_descriptor == "789"
    assert offer.price_total == Decimal("412.50")
    assert offer.currency == "USD"


def test_flatten_connecting_offer_uses_first_and_last_segment():
    offer = flatten_offer(CONNECTING)

    assert not offer.is_direct
    assert offer.stops == 1
    assert offer.departure_time == datetime(2024, 3, 1, 15, 0, tzinfo=timezone.utc)
    assert offer.arrival_time == datetime(2024, 3, 2, 0, 0, tzinfo=timezone.utc)
    assert offer.segments[0].arr_at.utcoffset() == timedelta(hours=-6)
    assert offer.total_duration_minutes == 360
    assert offer.aircraft_descriptor == "738, CR9"


def test_flatten_rejects_offer_without_segments():
    with pytest.raises(ValueError):
        flatten_offer(NO_SEGMENTS)


def test_flatten_reads_segment_times_in_airport_local_time():
    offer = flatten_offer(_raw_offer("5", [
        _segment("JFK", "LAX", "2024-03-01T10:00:00", "2024-03-01T13:30:00", "321"),
    ], duration="PT6H30M"))
    ready = datetime(2024, 3, 1, 9, 0, tzinfo=timezone(timedelta(hours=-5)))

    assert offer.departure_time == datetime(2024, 3, 1, 15, 0, tzinfo=timezone.utc)
    assert offer.arrival_time == datetime(2024, 3, 1, 21, 30, tzinfo=timezone.utc)
    rec = select_optimal_flight([offer], ready)
    assert rec.reason_code == ReasonCode.SAME_DAY_OPTIMAL
    assert rec.offer_id == "5"


def test_flatten_summer_time_and_offset_timestamps():
    summer = flatten_offer(_raw_offer("6", [
        _segment("LHR", "JFK", "2024-07-01T10:00:00", "2024-07-01T13:00:00", "77W"),
    ], duration="PT8H"))
    explicit = flatten_offer(_raw_offer("7", [
        _segment("LHR", "JFK", "2024-07-01T10:00:00+01:00", "2024-07-01T13:00:00-04:00", "77W"),
    ], duration="PT8H"))

    assert summer.departure_time == datetime(2024, 7, 1, 9, 0, tzinfo=timezone.utc)
    assert summer.arrival_time == datetime(2024, 7, 1, 17, 0, tzinfo=timezone.utc)
    assert explicit.departure_time == summer.departure_time
    assert explicit.arrival_time == summer.arrival_time


def test_flatten_unknown_airport_uses_default_zone():
    raw = _raw_offer("8", [_segment("XXA", "XXB", "2024-03-01T10:00:00", "2024-03-01T12:00:00", "789")],
                     duration="PT2H")
    tokyo = timezone(timedelta(hours=9))

    assert flatten_offer(raw).departure_time == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
    assert flatten_offer(raw, default_tz=tokyo).departure_time == datetime(2024, 3, 1, 1, 0, tzinfo=timezone.utc)


class FakeAmadeusClient:
    def __init__(self, payload):
        self.payload = payload
        self.requests = []

    def get(self, path, params):
        self.requests.append((path, params))
        return self.payload


def test_provider_skips_malformed_offers_and_prefixes_ids():
    client = FakeAmadeusClient({"data": [DIRECT, NO_SEGMENTS, CONNECTING, BACKWARDS]})
    provider = AmadeusProvider(client)

    offers = provider.search(FlightSearchParams("YYZ", "YVR", date(2024, 3, 1)))

    assert [o.id for o in offers] == ["2024-03-01-1", "2024-03-01-2"]
    path, params = client.requests[0]
    assert path == FLIGHT_OFFERS_PATH
    assert params["originLocationCode"] == "YYZ"
    assert params["destinationLocationCode"] == "YVR"
    assert params["departureDate"] == "2024-03-01"
    assert params["currencyCode"] == "USD"
    assert "nonStop" not in params


def test_provider_passes_non_stop_flag():
    client = FakeAmadeusClient({"data": []})
    AmadeusProvider(client).search(FlightSearchParams("YYZ", "YVR", date(2024, 3, 1), non_stop=True))
    assert client.requests[0][1]["nonStop"] == "true"
