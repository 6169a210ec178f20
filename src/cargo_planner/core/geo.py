# src/cargo_planner/core/geo.py

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional

EARTH_RADIUS_MILES = 3959.0
METERS_PER_MILE = 1609.34


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance in miles between two points given in decimal degrees.
    """
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(dlon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def miles_to_meters(miles: float) -> float:
    return miles * METERS_PER_MILE


def parse_dt(value: Optional[str]) -> Optional[datetime]:
    """
    Parse collaborator datetime strings like:
      - '2026-02-15T10:30:00'
      - '2026-02-15T10:30:00Z'
      - '2026-02-15T10:30:00+00:00'
    Returns None for empty or unparseable values.
    """
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def parse_iso8601_duration_minutes(duration: Optional[str]) -> Optional[int]:
    """
    Parse durations like 'PT6H30M' into total minutes.
    Day components ('P1DT2H') are honoured; seconds are ignored.
    """
    if not duration or not isinstance(duration, str) or not duration.startswith("P"):
        return None

    days = hours = minutes = 0
    in_time = False
    num = ""
    for ch in duration[1:]:
        if ch.isdigit():
            num += ch
            continue
        if ch == "T":
            in_time = True
        elif ch == "D" and num:
            days = int(num)
        elif ch == "H" and num and in_time:
            hours = int(num)
        elif ch == "M" and num and in_time:
            minutes = int(num)
        num = ""

    return days * 24 * 60 + hours * 60 + minutes


def format_duration(minutes: int) -> str:
    hours, mins = divmod(int(minutes), 60)
    if hours > 0:
        return f"{hours}h {mins}m" if mins > 0 else f"{hours}h"
    return f"{mins}m"
