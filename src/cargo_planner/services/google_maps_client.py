# src/cargo_planner/services/google_maps_client.py

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

import requests

from cargo_planner.config import Settings

logger = logging.getLogger(__name__)

MAPS_BASE_URL = "https://maps.googleapis.com/maps/api"
NEARBY_SEARCH_PATH = "/place/nearbysearch/json"
TEXT_SEARCH_PATH = "/place/textsearch/json"
DIRECTIONS_PATH = "/directions/json"
GEOCODE_PATH = "/geocode/json"

OK_STATUSES = ("OK", "ZERO_RESULTS")


class GoogleMapsClient:
    """
    Thin client over the Google Maps web services (Places, Directions, Geocoding).

    Every call returns the decoded JSON payload; a service status other than
    OK / ZERO_RESULTS raises ValueError.
    """

    def __init__(
        self,
        api_key: str,
        timeout_seconds: int = 20,
        base_url: str = MAPS_BASE_URL,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = (api_key or "").strip()
        if not self.api_key:
            raise ValueError("Missing Google Maps API key. Set GOOGLE_MAPS_API_KEY.")

        self.timeout_seconds = timeout_seconds
        self.base_url = base_url.rstrip("/")
        self._http = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "GoogleMapsClient":
        return cls(settings.google_maps_api_key, timeout_seconds=settings.http_timeout_seconds)

    def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        query = dict(params)
        query["key"] = self.api_key

        resp = self._http.get(f"{self.base_url}{path}", params=query, timeout=self.timeout_seconds)
        resp.raise_for_status()
        payload = resp.json()

        status = payload.get("status", "OK")
        if status not in OK_STATUSES:
            detail = payload.get("error_message", "")
            logger.error(f"Google Maps {path} returned {status}: {detail}")
            raise ValueError(f"Google Maps request failed: {status} {detail}".strip())
        return payload

    def nearby_search(
        self,
        latitude: float,
        longitude: float,
        radius_meters: float,
        place_type: Optional[str] = None,
        keyword: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {
            "location": f"{latitude},{longitude}",
            "radius": radius_meters,
        }
        if place_type:
            params["type"] = place_type
        if keyword:
            params["keyword"] = keyword
        return self._get(NEARBY_SEARCH_PATH, params).get("results", []) or []

    def text_search(
        self,
        query: str,
        latitude: float,
        longitude: float,
        radius_meters: float,
    ) -> List[Dict[str, Any]]:
        params = {
            "query": query,
            "location": f"{latitude},{longitude}",
            "radius": radius_meters,
        }
        return self._get(TEXT_SEARCH_PATH, params).get("results", []) or []

    def directions(
        self,
        origin: str,
        destination: str,
        departure_time: Union[str, int] = "now",
    ) -> List[Dict[str, Any]]:
        """Driving routes between two "lat,lng" strings or addresses, ferries avoided."""
        params = {
            "origin": origin,
            "destination": destination,
            "mode": "driving",
            "units": "metric",
            "avoid": "ferries",
            "departure_time": departure_time,
        }
        return self._get(DIRECTIONS_PATH, params).get("routes", []) or []

    def geocode(self, address: str) -> List[Dict[str, Any]]:
        return self._get(GEOCODE_PATH, {"address": address}).get("results", []) or []
