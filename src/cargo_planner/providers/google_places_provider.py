# src/cargo_planner/providers/google_places_provider.py

from __future__ import annotations

import logging
from typing import Any, Dict, List

from cargo_planner.core.models import AirportCandidate
from cargo_planner.providers.base import PlaceQuery, PlaceSearchProvider
from cargo_planner.services.google_maps_client import GoogleMapsClient

logger = logging.getLogger(__name__)


def place_to_candidate(place: Dict[str, Any]) -> AirportCandidate:
    """Raises ValueError when the place has no id, name or location."""
    place_id = place.get("place_id")
    name = place.get("name")
    location = (place.get("geometry", {}) or {}).get("location", {}) or {}
    lat = location.get("lat")
    lng = location.get("lng")

    if not place_id or not name:
        raise ValueError("place has no place_id or name")
    if lat is None or lng is None:
        raise ValueError("place has no geometry")

    rating = place.get("rating")
    return AirportCandidate(
        name=str(name),
        place_id=str(place_id),
        latitude=float(lat),
        longitude=float(lng),
        types=frozenset(place.get("types", []) or []),
        rating=float(rating) if rating is not None else None,
        formatted_address=place.get("formatted_address") or place.get("vicinity") or "",
    )


class GooglePlacesProvider(PlaceSearchProvider):

    def __init__(self, client: GoogleMapsClient):
        self.client = client

    def search(self, query: PlaceQuery) -> List[AirportCandidate]:
        if query.kind == "nearby":
            results = self.client.nearby_search(
                query.latitude,
                query.longitude,
                query.radius_meters,
                place_type=query.place_type,
                keyword=query.keyword,
            )
        elif query.kind == "text":
            results = self.client.text_search(
                query.text or "", query.latitude, query.longitude, query.radius_meters
            )
        else:
            raise ValueError(f"Unknown place query kind: {query.kind!r}")

        candidates: List[AirportCandidate] = []
        for place in results:
            try:
                candidates.append(place_to_candidate(place))
            except ValueError as e:
                logger.warning(f"Skipping malformed place {place.get('name')!r}: {e}")
        return candidates
