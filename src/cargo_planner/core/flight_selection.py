# src/cargo_planner/core/flight_selection.py

"""
Flight selection for time-critical cargo.

Given the moment cargo is ready, pick one itinerary:
  1. drop regional / turboprop equipment
  2. drop flights leaving before the ready time
  3. prefer same-day flights, direct first, earliest departure
  4. otherwise take the earliest later flight
and derive a delivery ETA from the arrival time.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from operator import attrgetter
from typing import Iterable, List, Optional, Sequence, Tuple

from cargo_planner.core.geo import format_duration
from cargo_planner.core.models import (
    DailyOffers,
    FlightDetails,
    FlightOffer,
    FlightRecommendation,
    FlightSearchResults,
    ReasonCode,
    as_utc,
)

logger = logging.getLogger(__name__)

CARGO_PROCESSING_MINUTES = 90

REGIONAL_AIRCRAFT_CODES: Tuple[str, ...] = (
    "CRJ", "CR2", "CR7", "CR9",  # Canadair regional jets
    "DH8", "DHC", "DH1", "DH2", "DH3", "DH4",  # Dash 8
    "EMB", "ERJ", "ER3", "ER4", "E70", "E75", "E7W", "E90", "E95",  # Embraer regional
    "E170", "E175", "E190", "E195",
    "AT4", "AT5", "AT7", "ATR",  # ATR turboprops
    "SF3", "SH3", "SH6",  # Saab / Shorts
    "BEC", "BE1", "BE9",  # Beechcraft
    "CNA", "CNJ",  # Cessna
)

REGIONAL_AIRCRAFT_NAMES: Tuple[str, ...] = (
    "CANADAIR", "DE HAVILLAND", "DASH", "EMBRAER", "SAAB", "BEECH",
)

MSG_NO_FLIGHTS = "No flights available for the selected route and dates"
MSG_NO_SUITABLE_AIRCRAFT = "No flights available on suitable aircraft"
MSG_NONE_AFTER_READY = "No flights depart after the ready time"


def is_regional_aircraft(descriptor: Optional[str]) -> bool:
    """
    True if any aircraft in a comma-separated descriptor (codes or names,
    e.g. "738, CRJ900") is regional equipment. No descriptor means no evidence.
    """
    if not descriptor:
        return False
    for plane in descriptor.split(","):
        plane = plane.strip().upper()
        if not plane:
            continue
        if any(code in plane for code in REGIONAL_AIRCRAFT_CODES):
            return True
        if any(name in plane for name in REGIONAL_AIRCRAFT_NAMES):
            return True
    return False


def filter_out_regional_aircraft(offers: Iterable[FlightOffer]) -> List[FlightOffer]:
    return [o for o in offers if not is_regional_aircraft(o.aircraft_descriptor)]


def filter_feasible(offers: Iterable[FlightOffer], ready_at: datetime) -> List[FlightOffer]:
    """Offers departing at or after the ready time."""
    ready_utc = as_utc(ready_at)
    return [o for o in offers if o.departure_time >= ready_utc]


def _calendar_day(ready_at: datetime) -> date:
    return ready_at.date()


def _departure_day(offer: FlightOffer, ready_at: datetime) -> date:
    # compare in the ready time's own zone; naive ready times are UTC
    tz = ready_at.tzinfo or timezone.utc
    return offer.departure_time.astimezone(tz).date()


def _earliest(offers: Sequence[FlightOffer]) -> FlightOffer:
    # sorted() is stable, so exact ties keep input order
    return sorted(offers, key=lambda o: o.departure_time)[0]


def estimate_delivery(offer: FlightOffer, destination_drive_minutes: int = 0) -> datetime:
    return offer.arrival_time + timedelta(
        minutes=CARGO_PROCESSING_MINUTES + destination_drive_minutes
    )


def build_flight_details(offer: FlightOffer, destination_drive_minutes: int = 0) -> FlightDetails:
    cargo_ready_at = offer.arrival_time + timedelta(minutes=CARGO_PROCESSING_MINUTES)
    return FlightDetails(
        departure_time_utc=offer.departure_time,
        arrival_time_utc=offer.arrival_time,
        flight_duration=format_duration(offer.total_duration_minutes),
        flight_duration_minutes=offer.total_duration_minutes,
        cargo_processing_minutes=CARGO_PROCESSING_MINUTES,
        cargo_ready_at=cargo_ready_at,
        final_delivery_at=cargo_ready_at + timedelta(minutes=destination_drive_minutes),
        is_direct=offer.is_direct,
    )


def _not_found(explanation: str) -> FlightRecommendation:
    logger.info(f"Flight selection: {ReasonCode.NO_FLIGHTS_FOUND.value} ({explanation})")
    return FlightRecommendation(
        selected_offer=None,
        estimated_delivery_time=None,
        reason_code=ReasonCode.NO_FLIGHTS_FOUND,
        explanation=explanation,
    )


def select_optimal_flight(
    offers: Sequence[FlightOffer],
    ready_at: datetime,
    destination_drive_minutes: int = 0,
) -> FlightRecommendation:
    """
    Pick the flight closest to the ready time, preferring same-day departures
    and, among those, direct flights.

    Never raises for "no result"; returns NO_FLIGHTS_FOUND with an explanation.
    """
    if not offers:
        return _not_found(MSG_NO_FLIGHTS)

    suitable = filter_out_regional_aircraft(offers)
    if not suitable:
        return _not_found(MSG_NO_SUITABLE_AIRCRAFT)

    available = filter_feasible(suitable, ready_at)
    if not available:
        return _not_found(MSG_NONE_AFTER_READY)

    ready_day = _calendar_day(ready_at)
    same_day = [o for o in available if _departure_day(o, ready_at) == ready_day]

    if same_day:
        same_day_direct = [o for o in same_day if o.is_direct]
        if same_day_direct:
            selected = _earliest(same_day_direct)
            reason = ReasonCode.SAME_DAY_OPTIMAL
            explanation = "Selected earliest same-day direct flight"
        else:
            selected = _earliest(same_day)
            reason = ReasonCode.SAME_DAY_AVAILABLE
            explanation = "Selected earliest same-day connecting flight (no direct flights available)"
    else:
        selected = _earliest(available)
        reason = ReasonCode.NEXT_DAY_EARLIEST
        explanation = "No same-day flights available, selected earliest next-day flight"

    eta = estimate_delivery(selected, destination_drive_minutes)
    logger.info(
        f"Flight selection: {reason.value} offer={selected.id} "
        f"departs={selected.departure_time.isoformat()} eta={eta.isoformat()}"
    )
    return FlightRecommendation(
        selected_offer=selected,
        estimated_delivery_time=eta,
        reason_code=reason,
        explanation=explanation,
        details=build_flight_details(selected, destination_drive_minutes),
    )


def merge_daily_batches(batches: Iterable[DailyOffers]) -> FlightSearchResults:
    """
    Merge independently fetched daily offer batches into one pool.
    Regional aircraft are filtered per batch; every view is sorted by departure.
    """
    merged = FlightSearchResults()

    for batch in batches:
        kept = filter_out_regional_aircraft(batch.offers)
        merged.all.extend(kept)
        merged.direct.extend(o for o in kept if o.is_direct)
        merged.connecting.extend(o for o in kept if not o.is_direct)
        merged.by_date.append(DailyOffers(day=batch.day, offers=kept))

    by_departure = attrgetter("departure_time")
    merged.all.sort(key=by_departure)
    merged.direct.sort(key=by_departure)
    merged.connecting.sort(key=by_departure)

    logger.info(
        f"Merged {len(merged.by_date)} daily batches: {merged.total_offers} offers "
        f"({len(merged.direct)} direct, {len(merged.connecting)} connecting)"
    )
    return merged


def recommend_from_batches(
    batches: Iterable[DailyOffers],
    ready_at: datetime,
    destination_drive_minutes: int = 0,
) -> FlightRecommendation:
    merged = merge_daily_batches(batches)
    return select_optimal_flight(merged.all, ready_at, destination_drive_minutes)
