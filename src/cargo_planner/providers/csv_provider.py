# src/cargo_planner/providers/csv_provider.py

from __future__ import annotations

import logging
import os
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

import pandas as pd

from cargo_planner.core.models import FlightOffer, FlightSearchParams
from cargo_planner.providers.base import FlightSearchProvider

logger = logging.getLogger(__name__)

DATA_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(__file__)))),
    "data",
    "sample_offers.csv",
)

REQUIRED_COLUMNS = ("id", "origin", "destination", "departure_time", "arrival_time")


def load_offer_rows(path: str, params: FlightSearchParams) -> pd.DataFrame:
    """
    Load offers from a local CSV and keep the rows for the searched route and date.

    Expected columns:
      id, origin, destination, departure_time, arrival_time,
      total_duration_minutes, stops, aircraft, price_total, currency
    Timestamps are ISO-8601; rows whose timestamps cannot be parsed come back as NaT.
    """
    if not os.path.exists(path):
        logger.warning(f"Offer file not found: {path}")
        return pd.DataFrame()

    df = pd.read_csv(path, dtype={"id": str, "aircraft": str})
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Offer file {path} is missing columns: {', '.join(missing)}")

    df["origin"] = df["origin"].astype(str).str.upper().str.strip()
    df["destination"] = df["destination"].astype(str).str.upper().str.strip()
    df = df[(df["origin"] == params.origin.upper()) &
            (df["destination"] == params.destination.upper())].copy()

    df["departure_time"] = pd.to_datetime(df["departure_time"], utc=True, errors="coerce")
    df["arrival_time"] = pd.to_datetime(df["arrival_time"], utc=True, errors="coerce")

    # Unparseable departures are kept so the caller can report them.
    on_date = df["departure_time"].dt.date == params.departure_date
    df = df[on_date | df["departure_time"].isna()]

    if params.non_stop and "stops" in df.columns:
        df = df[df["stops"].fillna(0).astype(int) == 0]

    return df


def _optional_str(value: Any) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def _row_to_offer(d: Dict[str, Any]) -> FlightOffer:
    dep = d.get("departure_time")
    arr = d.get("arrival_time")
    if pd.isna(dep) or pd.isna(arr):
        raise ValueError("unparseable departure or arrival timestamp")

    departure = dep.to_pydatetime()
    arrival = arr.to_pydatetime()

    duration = d.get("total_duration_minutes")
    if duration is None or pd.isna(duration):
        duration = (arrival - departure).total_seconds() // 60

    stops = d.get("stops")
    stops = 0 if stops is None or pd.isna(stops) else int(stops)

    price: Optional[Decimal] = None
    raw_price = d.get("price_total")
    if raw_price is not None and not pd.isna(raw_price):
        try:
            price = Decimal(str(raw_price))
        except InvalidOperation:
            price = None

    return FlightOffer(
        id=str(d.get("id")),
        departure_time=departure,
        arrival_time=arrival,
        total_duration_minutes=int(duration),
        is_direct=stops == 0,
        aircraft_descriptor=_optional_str(d.get("aircraft")),
        price_total=price,
        currency=_optional_str(d.get("currency")),
    )


class CSVProvider(FlightSearchProvider):
    """Offline flight-offer source backed by a CSV file."""

    def __init__(self, path: str = DATA_PATH):
        self.path = path

    def search(self, params: FlightSearchParams) -> List[FlightOffer]:
        df = load_offer_rows(self.path, params)
        if df is None or df.empty:
            return []

        offers: List[FlightOffer] = []
        for d in df.to_dict(orient="records"):
            try:
                offers.append(_row_to_offer(d))
            except ValueError as e:
                logger.warning(f"Skipping malformed CSV offer {d.get('id')!r}: {e}")

        if params.max_results:
            offers = offers[: params.max_results]
        return offers
