# src/cargo_planner/providers/base.py

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from cargo_planner.core.models import (
    AirportCandidate,
    DriveRoute,
    FlightOffer,
    FlightSearchParams,
    GeoPoint,
)


class FlightSearchProvider(ABC):

    @abstractmethod
    def search(self, params: FlightSearchParams) -> List[FlightOffer]:
        ...


@dataclass(frozen=True)
class PlaceQuery:
    """
    One place-search request around a point.

    kind == "nearby": category search (`place_type`, optional `keyword`)
    kind == "text":   free-text search (`text`)
    """

    kind: str
    latitude: float
    longitude: float
    radius_meters: float
    text: Optional[str] = None
    place_type: Optional[str] = None
    keyword: Optional[str] = None


class PlaceSearchProvider(ABC):

    @abstractmethod
    def search(self, query: PlaceQuery) -> List[AirportCandidate]:
        ...


class RouteProvider(ABC):

    @abstractmethod
    def drive_route(
        self,
        origin: GeoPoint,
        destination: GeoPoint,
        departure_at: Optional[datetime] = None,
    ) -> Optional[DriveRoute]:
        ...

    @abstractmethod
    def geocode(self, address: str) -> Optional[GeoPoint]:
        ...
