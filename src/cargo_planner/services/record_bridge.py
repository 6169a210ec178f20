# src/cargo_planner/services/record_bridge.py

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from cargo_planner.core.models import FlightRecommendation


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def recommendation_to_record(
    rec: FlightRecommendation,
    origin_code: str,
    destination_code: str,
) -> Dict[str, Any]:
    """
    Flatten a recommendation into plain values for a persistence collaborator.
    Flight fields are None when no flight was found.
    """
    offer = rec.selected_offer
    details = rec.details

    return {
        "origin_airport": origin_code,
        "destination_airport": destination_code,
        "offer_id": rec.offer_id,
        "reason_code": rec.reason_code.value,
        "explanation": rec.explanation,
        "departure_time": _iso(offer.departure_time) if offer else None,
        "arrival_time": _iso(offer.arrival_time) if offer else None,
        "flight_duration_minutes": offer.total_duration_minutes if offer else None,
        "is_direct": offer.is_direct if offer else None,
        "aircraft": offer.aircraft_descriptor if offer else None,
        # Decimal -> str keeps the exact amount
        "price_total": str(offer.price_total) if offer and offer.price_total is not None else None,
        "currency": offer.currency if offer else None,
        "cargo_ready_at": _iso(details.cargo_ready_at) if details else None,
        "estimated_delivery_time": _iso(rec.estimated_delivery_time),
    }
