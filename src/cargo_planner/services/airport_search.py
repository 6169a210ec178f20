# src/cargo_planner/services/airport_search.py

from __future__ import annotations

import logging
from typing import FrozenSet, List, Optional

from cargo_planner.core.airport_catalog import AIRPORT_TYPE
from cargo_planner.core.airport_ranking import MAX_RESULTS, rank_airports
from cargo_planner.core.geo import miles_to_meters
from cargo_planner.core.models import AirportCandidate, ScoredAirport
from cargo_planner.core.regions import CA, EU, UK, US, detect_regions, is_near_montreal, suggested_airports
from cargo_planner.providers.base import PlaceQuery, PlaceSearchProvider

logger = logging.getLogger(__name__)

DEFAULT_RADIUS_MILES = 50.0

CANADA_QUERIES = (
    "YUL Montreal Trudeau airport",
    "YYZ Toronto Pearson airport",
    "YVR Vancouver airport",
    "Pierre Elliott Trudeau airport",
)
MONTREAL_QUERY = "Montreal international airport"


def build_search_queries(
    latitude: float,
    longitude: float,
    radius_miles: float = DEFAULT_RADIUS_MILES,
    regions: Optional[FrozenSet[str]] = None,
) -> List[PlaceQuery]:
    """
    Ordered place-search strategies around a point.

    Generic airport searches come first, then region-specific searches for
    suggested metro airports, then a broad establishment search.
    """
    if regions is None:
        regions = detect_regions(latitude, longitude)
    radius = miles_to_meters(radius_miles)

    def nearby(place_type: str, keyword: Optional[str] = None) -> PlaceQuery:
        return PlaceQuery("nearby", latitude, longitude, radius, place_type=place_type, keyword=keyword)

    def text(q: str) -> PlaceQuery:
        return PlaceQuery("text", latitude, longitude, radius, text=q)

    queries = [
        nearby(AIRPORT_TYPE),
        text("international airport"),
        text("airport -travel -agency -hotel"),
    ]

    if US in regions:
        queries.extend(text(f"{code} airport") for code in suggested_airports(latitude, longitude, US))
    if CA in regions:
        queries.extend(text(q) for q in CANADA_QUERIES)
    if UK in regions:
        queries.extend(text(f"{code} airport") for code in suggested_airports(latitude, longitude, UK))
    if EU in regions:
        queries.extend(text(f"{code} airport") for code in suggested_airports(latitude, longitude, EU))
    if is_near_montreal(latitude, longitude):
        queries.append(text(MONTREAL_QUERY))

    queries.append(nearby("establishment", keyword="airport"))
    return queries


class AirportSearch:
    """Runs every search strategy through a place provider and ranks the results."""

    def __init__(self, places: PlaceSearchProvider, radius_miles: float = DEFAULT_RADIUS_MILES):
        self.places = places
        self.radius_miles = radius_miles

    def find_airports(
        self,
        latitude: float,
        longitude: float,
        radius_miles: Optional[float] = None,
        limit: int = MAX_RESULTS,
    ) -> List[ScoredAirport]:
        radius_miles = self.radius_miles if radius_miles is None else radius_miles
        regions = detect_regions(latitude, longitude)
        queries = build_search_queries(latitude, longitude, radius_miles, regions)

        batches: List[List[AirportCandidate]] = []
        for i, query in enumerate(queries, start=1):
            results = self.places.search(query)
            logger.debug(
                f"Strategy {i}/{len(queries)} ({query.kind} {query.text or query.place_type}): "
                f"{len(results)} results"
            )
            batches.append(results)

        return rank_airports(latitude, longitude, batches, regions=regions, limit=limit)
