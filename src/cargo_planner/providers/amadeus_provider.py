# src/cargo_planner/providers/amadeus_provider.py

from __future__ import annotations

import logging
from datetime import tzinfo
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from cargo_planner.core.airport_timezones import localize
from cargo_planner.core.geo import parse_dt, parse_iso8601_duration_minutes
from cargo_planner.core.models import FlightOffer, FlightSearchParams, Segment
from cargo_planner.providers.base import FlightSearchProvider
from cargo_planner.services.amadeus_client import FLIGHT_OFFERS_PATH, AmadeusClient

logger = logging.getLogger(__name__)


def _build_segments(
    itinerary: Dict[str, Any], default_tz: Optional[tzinfo] = None
) -> List[Segment]:
    # Amadeus "at" values are local to the airport and carry no offset.
    segs: List[Segment] = []
    for seg in itinerary.get("segments", []) or []:
        dep = seg.get("departure", {}) or {}
        arr = seg.get("arrival", {}) or {}
        aircraft = seg.get("aircraft", {}) or {}

        carrier_code = seg.get("carrierCode")
        aircraft_code = aircraft.get("code")
        origin = str(dep.get("iataCode", ""))
        destination = str(arr.get("iataCode", ""))
        segs.append(
            Segment(
                origin=origin,
                destination=destination,
                dep_at=localize(parse_dt(dep.get("at")), origin, default_tz),
                arr_at=localize(parse_dt(arr.get("at")), destination, default_tz),
                carrier_code=str(carrier_code) if carrier_code else None,
                flight_number=str(seg.get("number")) if seg.get(
                    "number") is not None else None,
                aircraft_code=str(aircraft_code) if aircraft_code else None,
            )
        )
    return segs


def _aircraft_descriptor(segments: List[Segment]) -> Optional[str]:
    codes = [s.aircraft_code for s in segments if s.aircraft_code]
    return ", ".join(codes) if codes else None


def _parse_price(price: Dict[str, Any]) -> Optional[Decimal]:
    total = price.get("grandTotal") or price.get("total")
    if total is None:
        return None
    try:
        return Decimal(str(total))
    except InvalidOperation:
        return None


def flatten_offer(
    offer_raw: Dict[str, Any],
    id_prefix: str = "",
    default_tz: Optional[tzinfo] = None,
) -> FlightOffer:
    """
    Convert one Amadeus flight-offer into a FlightOffer.

    Only the outbound itinerary is considered: departure of its first segment,
    arrival of its last, direct iff it has a single segment. Local segment
    times are resolved in each airport's zone; `default_tz` covers airports
    missing from the zone table.
    Raises ValueError when the record cannot be flattened.
    """
    itineraries = offer_raw.get("itineraries", []) or []
    if not itineraries:
        raise ValueError("offer has no itineraries")

    itinerary = itineraries[0]
    segments = _build_segments(itinerary, default_tz)
    if not segments:
        raise ValueError("itinerary has no segments")

    departure = segments[0].dep_at
    arrival = segments[-1].arr_at
    if departure is None or arrival is None:
        raise ValueError("itinerary is missing a departure or arrival timestamp")

    duration = parse_iso8601_duration_minutes(itinerary.get("duration"))
    if duration is None:
        duration = int((arrival - departure).total_seconds() // 60)

    price = offer_raw.get("price", {}) or {}
    raw_id = str(offer_raw.get("id", ""))

    return FlightOffer(
        id=f"{id_prefix}{raw_id}",
        departure_time=departure,
        arrival_time=arrival,
        total_duration_minutes=duration,
        is_direct=len(segments) == 1,
        aircraft_descriptor=_aircraft_descriptor(segments),
        price_total=_parse_price(price),
        currency=price.get("currency"),
        segments=tuple(segments),
    )


def flatten_offers(
    data: List[Dict[str, Any]],
    id_prefix: str = "",
    default_tz: Optional[tzinfo] = None,
) -> List[FlightOffer]:
    """Flatten a response's offers, skipping (and logging) malformed records."""
    offers: List[FlightOffer] = []
    for o in data:
        try:
            offers.append(flatten_offer(o, id_prefix, default_tz))
        except ValueError as e:
            logger.warning(f"Skipping malformed flight offer {o.get('id')!r}: {e}")
    return offers


class AmadeusProvider(FlightSearchProvider):
    """
    Live provider (Amadeus Self-Service Flight Offers Search).

    Offer ids are prefixed with the searched date because Amadeus numbers
    offers per response ("1", "2", ...).
    """

    def __init__(self, client: AmadeusClient, default_tz: Optional[tzinfo] = None):
        self.client = client
        self.default_tz = default_tz

    def _query(self, params: FlightSearchParams) -> Dict[str, Any]:
        query: Dict[str, Any] = {
            "originLocationCode": params.origin,
            "destinationLocationCode": params.destination,
            "departureDate": params.departure_date.isoformat(),
            "adults": max(1, int(params.adults)),
            "travelClass": params.travel_class,
            "currencyCode": params.currency,
            "max": params.max_results,
        }
        if params.non_stop:
            query["nonStop"] = "true"
        return query

    def search(self, params: FlightSearchParams) -> List[FlightOffer]:
        payload = self.client.get(FLIGHT_OFFERS_PATH, self._query(params))
        data = payload.get("data", []) or []

        offers = flatten_offers(
            data,
            id_prefix=f"{params.departure_date.isoformat()}-",
            default_tz=self.default_tz,
        )
        logger.info(
            f"Amadeus {params.origin}->{params.destination} on "
            f"{params.departure_date.isoformat()}: {len(offers)}/{len(data)} offers usable"
        )
        return offers
