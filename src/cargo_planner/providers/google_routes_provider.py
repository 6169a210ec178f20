# src/cargo_planner/providers/google_routes_provider.py

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Union

from cargo_planner.core.geo import METERS_PER_MILE
from cargo_planner.core.models import DriveRoute, GeoPoint, as_utc
from cargo_planner.providers.base import RouteProvider
from cargo_planner.services.google_maps_client import GoogleMapsClient

logger = logging.getLogger(__name__)


def _latlng(point: GeoPoint) -> str:
    return f"{point.latitude},{point.longitude}"


def _departure_param(departure_at: Optional[datetime]) -> Union[str, int]:
    if departure_at is None:
        return "now"
    return int(as_utc(departure_at).timestamp())


class GoogleRoutesProvider(RouteProvider):
    """Driving distance and time, traffic-aware when the service reports it."""

    def __init__(self, client: GoogleMapsClient):
        self.client = client

    def drive_route(
        self,
        origin: GeoPoint,
        destination: GeoPoint,
        departure_at: Optional[datetime] = None,
    ) -> Optional[DriveRoute]:
        routes = self.client.directions(
            _latlng(origin), _latlng(destination), departure_time=_departure_param(departure_at)
        )
        if not routes or not routes[0].get("legs"):
            logger.warning(f"No driving route from {_latlng(origin)} to {_latlng(destination)}")
            return None

        leg = routes[0]["legs"][0]
        in_traffic = (leg.get("duration_in_traffic") or {}).get("value")
        seconds = in_traffic if in_traffic else (leg.get("duration") or {}).get("value", 0)
        meters = (leg.get("distance") or {}).get("value", 0)

        route = DriveRoute(
            origin=origin,
            destination=destination,
            distance_miles=meters / METERS_PER_MILE,
            duration_minutes=int(round(seconds / 60)),
            traffic_aware=bool(in_traffic),
        )
        logger.info(
            f"Drive {origin.label or _latlng(origin)} -> {destination.label or _latlng(destination)}: "
            f"{route.distance_miles:.1f} mi, {route.duration_minutes} min"
            f"{' (with traffic)' if route.traffic_aware else ''}"
        )
        return route

    def geocode(self, address: str) -> Optional[GeoPoint]:
        """First geocoding match for an address, or None."""
        results = self.client.geocode(address)
        if not results:
            return None

        location = (results[0].get("geometry", {}) or {}).get("location", {}) or {}
        if location.get("lat") is None or location.get("lng") is None:
            logger.warning(f"Geocoding result for {address!r} has no location")
            return None
        return GeoPoint(
            latitude=float(location["lat"]),
            longitude=float(location["lng"]),
            label=results[0].get("formatted_address", address),
        )
