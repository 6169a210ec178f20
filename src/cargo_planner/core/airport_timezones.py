# src/cargo_planner/core/airport_timezones.py

from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from typing import Dict, Optional, Tuple
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

# IANA zone -> IATA codes of the catalogued airports.
_ZONES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("America/New_York", (
        "EWR", "JFK", "LGA", "MIA", "FLL", "DCA", "IAD", "BWI", "BOS", "ATL",
        "DTW", "PHL", "CLT", "MCO", "TPA", "PWM",
    )),
    ("America/Chicago", (
        "ORD", "MDW", "DFW", "DAL", "IAH", "HOU", "MSP", "BNA", "AUS", "MSY",
        "STL", "MCI", "BHM",
    )),
    ("America/Denver", ("DEN", "SLC")),
    ("America/Phoenix", ("PHX",)),
    ("America/Los_Angeles", (
        "LAX", "SFO", "OAK", "SJC", "SEA", "LAS", "BUR", "LGB", "SAN", "PDX",
    )),
    ("America/Anchorage", ("ANC",)),
    ("Pacific/Honolulu", ("HNL",)),
    ("America/Toronto", ("YUL", "YMX", "YTZ", "YYZ", "YOW", "YQB")),
    ("America/Winnipeg", ("YWG",)),
    ("America/Edmonton", ("YYC", "YEG")),
    ("America/Vancouver", ("YVR",)),
    ("America/Halifax", ("YHZ",)),
    ("Europe/London", (
        "LHR", "LGW", "STN", "LTN", "LCY", "MAN", "BHX", "EDI", "PIK", "GLA",
        "BRS", "NCL", "LPL", "CWL", "BHD", "BFS",
    )),
    ("Europe/Dublin", ("DUB",)),
    ("Europe/Lisbon", ("LIS", "OPO")),
    ("Europe/Paris", ("CDG", "ORY", "LYS", "NCE", "MRS")),
    ("Europe/Amsterdam", ("AMS", "RTM")),
    ("Europe/Brussels", ("CRL", "BRU", "ANR")),
    ("Europe/Berlin", ("HHN", "FRA", "MUC", "BER", "DUS", "HAM", "CGN")),
    ("Europe/Zurich", ("ZRH", "GVA")),
    ("Europe/Vienna", ("VIE",)),
    ("Europe/Copenhagen", ("CPH",)),
    ("Europe/Oslo", ("OSL",)),
    ("Europe/Stockholm", ("ARN",)),
    ("Europe/Helsinki", ("HEL",)),
    ("Europe/Madrid", ("MAD", "BCN", "VLC", "SVQ")),
    ("Europe/Rome", ("CIA", "FCO", "MXP", "LIN", "VCE", "NAP")),
    ("Europe/Athens", ("ATH",)),
    ("Europe/Istanbul", ("SAW", "IST")),
    ("Europe/Warsaw", ("WAW",)),
    ("Europe/Prague", ("PRG",)),
    ("Europe/Budapest", ("BUD",)),
    ("Europe/Bucharest", ("OTP",)),
    ("Europe/Sofia", ("SOF",)),
    ("Asia/Dubai", ("DWC", "DXB", "AUH")),
    ("Asia/Qatar", ("DOH",)),
    ("Asia/Riyadh", ("RUH", "JED")),
    ("Asia/Muscat", ("MCT",)),
    ("Asia/Bahrain", ("BAH",)),
    ("Asia/Kuwait", ("KWI",)),
    ("Asia/Amman", ("AMM",)),
    ("Asia/Beirut", ("BEY",)),
    ("Asia/Jerusalem", ("TLV",)),
    ("Asia/Nicosia", ("LCA",)),
    ("Africa/Cairo", ("CAI",)),
    ("Asia/Tokyo", ("HND", "NRT", "KIX")),
    ("Asia/Seoul", ("ICN",)),
    ("Asia/Shanghai", ("PEK", "PKX", "PVG", "SHA")),
    ("Asia/Hong_Kong", ("HKG",)),
    ("Asia/Taipei", ("TPE",)),
    ("Asia/Manila", ("MNL",)),
    ("Asia/Singapore", ("SIN",)),
    ("Asia/Bangkok", ("BKK",)),
    ("Asia/Kolkata", ("DEL", "BOM")),
    ("Australia/Sydney", ("SYD",)),
    ("Australia/Melbourne", ("MEL",)),
    ("Pacific/Auckland", ("AKL",)),
    ("America/Mexico_City", ("MEX",)),
    ("America/Panama", ("PTY",)),
    ("America/Costa_Rica", ("SJO",)),
    ("America/Bogota", ("BOG",)),
    ("America/Lima", ("LIM",)),
    ("America/Santiago", ("SCL",)),
    ("America/Sao_Paulo", ("GRU", "GIG")),
    ("America/Argentina/Buenos_Aires", ("EZE",)),
    ("Africa/Johannesburg", ("JNB",)),
    ("Africa/Nairobi", ("NBO",)),
    ("Africa/Addis_Ababa", ("ADD",)),
)

AIRPORT_TIMEZONES: Dict[str, str] = {
    code: zone for zone, codes in _ZONES for code in codes
}


def airport_timezone(iata_code: Optional[str]) -> Optional[tzinfo]:
    """IANA zone of a catalogued airport, or None when the code is unknown."""
    zone = AIRPORT_TIMEZONES.get((iata_code or "").upper())
    return ZoneInfo(zone) if zone else None


def localize(
    value: Optional[datetime],
    iata_code: Optional[str],
    default_tz: Optional[tzinfo] = None,
) -> Optional[datetime]:
    """
    Attach the airport's zone to a naive local timestamp.

    Aware values are returned unchanged. Unknown airports use `default_tz`,
    or UTC when none is given.
    """
    if value is None or value.tzinfo is not None:
        return value

    tz = airport_timezone(iata_code)
    if tz is None:
        tz = default_tz or timezone.utc
        logger.warning(f"No timezone known for airport {iata_code!r}; reading local time as {tz}")
    return value.replace(tzinfo=tz)
