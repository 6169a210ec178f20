# src/cargo_planner/core/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple


def as_utc(value: datetime) -> datetime:
    # Naive timestamps are treated as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float
    label: str = ""


@dataclass(frozen=True)
class AirportCandidate:
    """One raw place record returned by a place-search collaborator."""

    name: str
    place_id: str
    latitude: float
    longitude: float
    types: FrozenSet[str] = frozenset()
    rating: Optional[float] = None
    formatted_address: str = ""


@dataclass(frozen=True)
class ScoreRuleResult:
    rule: str
    delta: float


@dataclass(frozen=True)
class ScoredAirport:
    """Non-mutating scored wrapper around an accepted AirportCandidate."""

    candidate: AirportCandidate
    iata_code: Optional[str]
    icao_code: Optional[str]
    distance_miles: float
    score: float
    reasons: Tuple[ScoreRuleResult, ...] = ()

    @property
    def name(self) -> str:
        return self.candidate.name

    @property
    def place_id(self) -> str:
        return self.candidate.place_id

    @property
    def latitude(self) -> float:
        return self.candidate.latitude

    @property
    def longitude(self) -> float:
        return self.candidate.longitude

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude, self.name)


@dataclass(frozen=True)
class Segment:
    """A single flight leg."""

    origin: str
    destination: str
    dep_at: Optional[datetime] = None
    arr_at: Optional[datetime] = None
    carrier_code: Optional[str] = None  # e.g. "AC"
    flight_number: Optional[str] = None  # e.g. "1234"
    aircraft_code: Optional[str] = None  # e.g. "32N"


@dataclass(frozen=True)
class FlightOffer:
    """
    One itinerary flattened from a flight-search response.

    Timestamps are normalized to UTC on construction; an offer whose arrival is
    not strictly after its departure is rejected with ValueError.
    """

    id: str
    departure_time: datetime
    arrival_time: datetime
    total_duration_minutes: int
    is_direct: bool
    aircraft_descriptor: Optional[str] = None
    price_total: Optional[Decimal] = None
    currency: Optional[str] = None
    segments: Tuple[Segment, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.departure_time, datetime) or not isinstance(self.arrival_time, datetime):
            raise ValueError(f"Flight offer {self.id!r} is missing a departure or arrival timestamp")

        departure = as_utc(self.departure_time)
        arrival = as_utc(self.arrival_time)
        if arrival <= departure:
            raise ValueError(
                f"Flight offer {self.id!r} arrives ({arrival.isoformat()}) "
                f"before it departs ({departure.isoformat()})"
            )

        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "departure_time", departure)
        object.__setattr__(self, "arrival_time", arrival)
        object.__setattr__(self, "segments", tuple(self.segments))

    @property
    def stops(self) -> int:
        return max(0, len(self.segments) - 1)


class ReasonCode(str, Enum):
    SAME_DAY_OPTIMAL = "SAME_DAY_OPTIMAL"
    SAME_DAY_AVAILABLE = "SAME_DAY_AVAILABLE"
    NEXT_DAY_EARLIEST = "NEXT_DAY_EARLIEST"
    NO_FLIGHTS_FOUND = "NO_FLIGHTS_FOUND"


@dataclass(frozen=True)
class FlightDetails:
    """Display timings for a selected flight."""

    departure_time_utc: datetime
    arrival_time_utc: datetime
    flight_duration: str  # e.g. "5h 30m"
    flight_duration_minutes: int
    cargo_processing_minutes: int
    # when cargo can leave the destination airport
    cargo_ready_at: datetime
    final_delivery_at: datetime
    is_direct: bool


@dataclass(frozen=True)
class FlightRecommendation:
    selected_offer: Optional[FlightOffer]
    estimated_delivery_time: Optional[datetime]
    reason_code: ReasonCode
    explanation: str
    details: Optional[FlightDetails] = None

    @property
    def found(self) -> bool:
        return self.reason_code is not ReasonCode.NO_FLIGHTS_FOUND

    @property
    def offer_id(self) -> Optional[str]:
        return self.selected_offer.id if self.selected_offer else None


@dataclass(frozen=True)
class DailyOffers:
    day: date
    offers: List[FlightOffer] = field(default_factory=list)


@dataclass
class FlightSearchResults:
    """Offers merged from several daily searches, earliest departure first."""

    all: List[FlightOffer] = field(default_factory=list)
    direct: List[FlightOffer] = field(default_factory=list)
    connecting: List[FlightOffer] = field(default_factory=list)
    by_date: List[DailyOffers] = field(default_factory=list)

    @property
    def total_offers(self) -> int:
        return len(self.all)


@dataclass(frozen=True)
class FlightSearchParams:
    origin: str
    destination: str
    departure_date: date
    adults: int = 1
    travel_class: str = "ECONOMY"
    currency: str = "USD"
    non_stop: bool = False
    max_results: int = 50


@dataclass(frozen=True)
class DriveRoute:
    origin: GeoPoint
    destination: GeoPoint
    distance_miles: float
    duration_minutes: int
    traffic_aware: bool = False
