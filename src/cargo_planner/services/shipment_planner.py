# src/cargo_planner/services/shipment_planner.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional

from cargo_planner.config import Settings
from cargo_planner.core.flight_selection import recommend_from_batches
from cargo_planner.core.models import (
    DailyOffers,
    DriveRoute,
    FlightRecommendation,
    FlightSearchParams,
    GeoPoint,
    ScoredAirport,
    as_utc,
)
from cargo_planner.providers.amadeus_provider import AmadeusProvider
from cargo_planner.providers.base import FlightSearchProvider, RouteProvider
from cargo_planner.providers.google_places_provider import GooglePlacesProvider
from cargo_planner.providers.google_routes_provider import GoogleRoutesProvider
from cargo_planner.services.airport_search import AirportSearch
from cargo_planner.services.amadeus_client import AmadeusClient
from cargo_planner.services.google_maps_client import GoogleMapsClient

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_DAYS = 3


@dataclass(frozen=True)
class ShipmentPlan:
    """Door-to-door plan: pickup drive, flight, delivery drive."""

    pickup: GeoPoint
    delivery: GeoPoint
    ready_at: datetime
    origin_airport: Optional[ScoredAirport]
    destination_airport: Optional[ScoredAirport]
    pickup_route: Optional[DriveRoute]
    delivery_route: Optional[DriveRoute]
    airport_ready_at: Optional[datetime]
    recommendation: Optional[FlightRecommendation]

    @property
    def estimated_delivery_time(self) -> Optional[datetime]:
        if self.recommendation is None:
            return None
        return self.recommendation.estimated_delivery_time


class ShipmentPlanner:
    """
    Ties the collaborators together: nearest airports on both ends, drive
    times to and from them, and the flight recommendation in between.
    """

    def __init__(
        self,
        airport_search: AirportSearch,
        flights: FlightSearchProvider,
        routes: RouteProvider,
        search_days: int = DEFAULT_SEARCH_DAYS,
    ):
        self.airport_search = airport_search
        self.flights = flights
        self.routes = routes
        self.search_days = search_days

    @classmethod
    def from_settings(cls, settings: Settings) -> "ShipmentPlanner":
        """Wire the live Google Maps and Amadeus collaborators."""
        maps = GoogleMapsClient.from_settings(settings)
        return cls(
            airport_search=AirportSearch(
                GooglePlacesProvider(maps), radius_miles=settings.airport_search_radius_miles
            ),
            flights=AmadeusProvider(AmadeusClient.from_settings(settings)),
            routes=GoogleRoutesProvider(maps),
            search_days=settings.flight_search_days,
        )

    def find_nearest_airport(self, point: GeoPoint) -> Optional[ScoredAirport]:
        """Best-ranked airport near the point that has an IATA code."""
        ranked = self.airport_search.find_airports(point.latitude, point.longitude)
        for airport in ranked:
            if airport.iata_code:
                return airport
        logger.warning(
            f"No coded airport found near {point.label or (point.latitude, point.longitude)}"
        )
        return None

    def drive_route(
        self,
        origin: GeoPoint,
        destination: GeoPoint,
        departure_at: Optional[datetime] = None,
    ) -> Optional[DriveRoute]:
        return self.routes.drive_route(origin, destination, departure_at)

    def drive_minutes(
        self,
        origin: GeoPoint,
        destination: GeoPoint,
        departure_at: Optional[datetime] = None,
    ) -> Optional[int]:
        route = self.drive_route(origin, destination, departure_at)
        return route.duration_minutes if route else None

    def search_days_from(
        self,
        origin_code: str,
        destination_code: str,
        ready_at: datetime,
        search_days: Optional[int] = None,
    ) -> List[DailyOffers]:
        """One flight search per consecutive date starting on the ready date."""
        days = self.search_days if search_days is None else search_days
        first_day = ready_at.date()

        batches: List[DailyOffers] = []
        for offset in range(max(1, days)):
            day = first_day + timedelta(days=offset)
            params = FlightSearchParams(
                origin=origin_code,
                destination=destination_code,
                departure_date=day,
            )
            offers = self.flights.search(params)
            logger.info(f"{origin_code}->{destination_code} {day.isoformat()}: {len(offers)} offers")
            batches.append(DailyOffers(day=day, offers=offers))
        return batches

    def recommend_flight(
        self,
        origin_code: str,
        destination_code: str,
        ready_at: datetime,
        destination_drive_minutes: int = 0,
        search_days: Optional[int] = None,
    ) -> FlightRecommendation:
        batches = self.search_days_from(origin_code, destination_code, ready_at, search_days)
        return recommend_from_batches(batches, ready_at, destination_drive_minutes)

    def plan(self, pickup: GeoPoint, delivery: GeoPoint, ready_at: datetime) -> ShipmentPlan:
        """
        Plan a shipment picked up at `pickup` at `ready_at`.

        Cargo is ready at the origin airport once the pickup drive completes;
        the delivery drive is added to the flight's estimated delivery time.
        """
        origin_airport = self.find_nearest_airport(pickup)
        destination_airport = self.find_nearest_airport(delivery)

        pickup_route = None
        delivery_route = None
        airport_ready_at = None
        recommendation = None

        if origin_airport is not None and destination_airport is not None:
            pickup_route = self.drive_route(pickup, origin_airport.point, ready_at)
            airport_ready_at = ready_at if ready_at.tzinfo else as_utc(ready_at)
            if pickup_route is not None:
                airport_ready_at += timedelta(minutes=pickup_route.duration_minutes)

            delivery_route = self.drive_route(destination_airport.point, delivery)
            delivery_minutes = delivery_route.duration_minutes if delivery_route else 0

            recommendation = self.recommend_flight(
                origin_airport.iata_code,
                destination_airport.iata_code,
                airport_ready_at,
                destination_drive_minutes=delivery_minutes,
            )

        return ShipmentPlan(
            pickup=pickup,
            delivery=delivery,
            ready_at=ready_at,
            origin_airport=origin_airport,
            destination_airport=destination_airport,
            pickup_route=pickup_route,
            delivery_route=delivery_route,
            airport_ready_at=airport_ready_at,
            recommendation=recommendation,
        )

    def plan_addresses(
        self, pickup_address: str, delivery_address: str, ready_at: datetime
    ) -> Optional[ShipmentPlan]:
        """Geocode both addresses, then `plan`. None when either cannot be located."""
        pickup = self.routes.geocode(pickup_address)
        delivery = self.routes.geocode(delivery_address)
        if pickup is None or delivery is None:
            missing = pickup_address if pickup is None else delivery_address
            logger.warning(f"Could not geocode {missing!r}")
            return None
        return self.plan(pickup, delivery, ready_at)
