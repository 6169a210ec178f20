from datetime import datetime, timezone

import pytest

from cargo_planner.core.models import GeoPoint
from cargo_planner.providers.base import PlaceQuery
from cargo_planner.providers.google_places_provider import GooglePlacesProvider, place_to_candidate
from cargo_planner.providers.google_routes_provider import GoogleRoutesProvider
from cargo_planner.services.google_maps_client import (
    MAPS_BASE_URL,
    NEARBY_SEARCH_PATH,
    GoogleMapsClient,
)
from fakes import FakeResponse, FakeSession

PEARSON = {
    "place_id": "ChIJ-pearson",
    "name": "Toronto Pearson International Airport",
    "geometry": {"location": {"lat": 43.6777, "lng": -79.6248}},
    "types": ["airport", "point_of_interest", "establishment"],
    "rating": 3.9,
    "vicinity": "6301 Silver Dart Dr, Mississauga",
}


# -----------------------------------------------------------------------------
# client
# -----------------------------------------------------------------------------

def test_client_requires_api_key():
    with pytest.raises(ValueError):
        GoogleMapsClient("")


def test_nearby_search_sends_location_type_and_key():
    session = FakeSession([FakeResponse(200, {"status": "OK", "results": [PEARSON]})])
    client = GoogleMapsClient("k", session=session)

    results = client.nearby_search(43.68, -79.62, 80467.0, place_type="airport")

    assert results == [PEARSON]
    call = session.calls[0]
    assert call["url"] == MAPS_BASE_URL + NEARBY_SEARCH_PATH
    assert call["params"]["location"] == "43.68,-79.62"
    assert call["params"]["type"] == "airport"
    assert call["params"]["key"] == "k"
    assert "keyword" not in call["params"]


def test_zero_results_is_not_an_error():
    session = FakeSession([FakeResponse(200, {"status": "ZERO_RESULTS", "results": []})])
    assert GoogleMapsClient("k", session=session).text_search("airport", 0.0, 0.0, 1000.0) == []


def test_error_status_raises():
    session = FakeSession([FakeResponse(200, {"status": "REQUEST_DENIED", "error_message": "bad key"})])
    with pytest.raises(ValueError):
        GoogleMapsClient("k", session=session).geocode("Toronto")


# -----------------------------------------------------------------------------
# places provider
# -----------------------------------------------------------------------------

def test_place_to_candidate():
    c = place_to_candidate(PEARSON)
    assert c.place_id == "ChIJ-pearson"
    assert c.latitude == 43.6777
    assert "airport" in c.types
    assert c.rating == 3.9
    assert c.formatted_address.startswith("6301")


class FakeMapsClient:
    def __init__(self, places=None, routes=None, geocodes=None):
        self.places = places or []
        self.routes = routes or []
        self.geocodes = geocodes or []
        self.calls = []

    def nearby_search(self, lat, lng, radius, place_type=None, keyword=None):
        self.calls.append(("nearby", place_type, keyword))
        return self.places

    def text_search(self, query, lat, lng, radius):
        self.calls.append(("text", query))
        return self.places

    def directions(self, origin, destination, departure_time="now"):
        self.calls.append(("directions", origin, destination, departure_time))
        return self.routes

    def geocode(self, address):
        return self.geocodes


def test_places_provider_dispatches_and_skips_malformed_places():
    broken = {"place_id": "x", "name": "No Geometry Airport", "types": ["airport"]}
    client = FakeMapsClient(places=[PEARSON, broken])
    provider = GooglePlacesProvider(client)

    nearby = provider.search(PlaceQuery("nearby", 43.68, -79.62, 1000.0, place_type="airport"))
    text = provider.search(PlaceQuery("text", 43.68, -79.62, 1000.0, text="international airport"))

    assert [c.place_id for c in nearby] == ["ChIJ-pearson"]
    assert [c.place_id for c in text] == ["ChIJ-pearson"]
    assert client.calls == [("nearby", "airport", None), ("text", "international airport")]


def test_places_provider_rejects_unknown_query_kind():
    with pytest.raises(ValueError):
        GooglePlacesProvider(FakeMapsClient()).search(PlaceQuery("radar", 0.0, 0.0, 1.0))


# -----------------------------------------------------------------------------
# routes provider
# -----------------------------------------------------------------------------

def _route(seconds, meters, traffic_seconds=None):
    leg = {"duration": {"value": seconds}, "distance": {"value": meters}}
    if traffic_seconds is not None:
        leg["duration_in_traffic"] = {"value": traffic_seconds}
    return {"legs": [leg]}


ORIGIN = GeoPoint(43.70, -79.40, "Downtown")
PEARSON_POINT = GeoPoint(43.6777, -79.6248, "YYZ")


def test_drive_route_prefers_traffic_duration():
    client = FakeMapsClient(routes=[_route(1800, 27000, traffic_seconds=2700)])

    route = GoogleRoutesProvider(client).drive_route(ORIGIN, PEARSON_POINT)

    assert route.duration_minutes == 45
    assert route.traffic_aware
    assert route.distance_miles == pytest.approx(27000 / 1609.34)
    assert client.calls[0] == ("directions", "43.7,-79.4", "43.6777,-79.6248", "now")


def test_drive_route_without_traffic_data():
    client = FakeMapsClient(routes=[_route(1800, 27000)])
    route = GoogleRoutesProvider(client).drive_route(ORIGIN, PEARSON_POINT)
    assert route.duration_minutes == 30
    assert not route.traffic_aware


def test_drive_route_passes_departure_as_epoch_seconds():
    client = FakeMapsClient(routes=[_route(600, 1000)])
    departure = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)

    GoogleRoutesProvider(client).drive_route(ORIGIN, PEARSON_POINT, departure)

    assert client.calls[0][3] == int(departure.timestamp())


def test_drive_route_returns_none_without_routes():
    assert GoogleRoutesProvider(FakeMapsClient(routes=[])).drive_route(ORIGIN, PEARSON_POINT) is None


def test_geocode_returns_first_match():
    client = FakeMapsClient(geocodes=[{
        "formatted_address": "Toronto, ON, Canada",
        "geometry": {"location": {"lat": 43.6532, "lng": -79.3832}},
    }])

    point = GoogleRoutesProvider(client).geocode("Toronto")

    assert point == GeoPoint(43.6532, -79.3832, "Toronto, ON, Canada")
    assert GoogleRoutesProvider(FakeMapsClient()).geocode("Nowhere") is None
