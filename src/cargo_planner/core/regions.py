# src/cargo_planner/core/regions.py

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple

from cargo_planner.core.geo import haversine_miles

US = "US"
CA = "CA"
UK = "UK"
EU = "EU"

# (lat_min, lat_max, lon_min, lon_max)
_BOUNDS: Dict[str, List[Tuple[float, float, float, float]]] = {
    US: [
        (24.0, 49.0, -125.0, -66.0),  # continental
        (54.0, 72.0, -180.0, -129.0),  # alaska
        (18.0, 23.0, -162.0, -154.0),  # hawaii
    ],
    CA: [(41.0, 84.0, -141.0, -52.0)],
    UK: [(49.5, 61.0, -8.5, 2.0)],
    EU: [(35.0, 72.0, -10.0, 40.0)],
}

MONTREAL = (45.5017, -73.5673)
MONTREAL_RADIUS_MILES = 62.0


def _in_bounds(lat: float, lon: float, region: str) -> bool:
    return any(
        lat_min <= lat <= lat_max and lon_min <= lon <= lon_max
        for lat_min, lat_max, lon_min, lon_max in _BOUNDS[region]
    )


def detect_regions(lat: float, lon: float) -> FrozenSet[str]:
    """
    Rough bounding-box classification of a query point.

    The boxes overlap along the US/Canada border, so a point may belong to
    more than one region. Continental Europe excludes the UK box.
    """
    regions = {r for r in (US, CA, UK) if _in_bounds(lat, lon, r)}
    if UK not in regions and _in_bounds(lat, lon, EU):
        regions.add(EU)
    return frozenset(regions)


def is_near_montreal(lat: float, lon: float) -> bool:
    return haversine_miles(lat, lon, *MONTREAL) < MONTREAL_RADIUS_MILES


@dataclass(frozen=True)
class MetroArea:
    name: str
    lat: float
    lon: float
    airports: Tuple[str, ...]
    radius_miles: float = 50.0


METRO_AREAS: Dict[str, Tuple[MetroArea, ...]] = {
    US: (
        MetroArea("NYC", 40.7, -74.0, ("JFK", "LGA", "EWR")),
        MetroArea("LA", 34.0, -118.2, ("LAX", "BUR", "LGB")),
        MetroArea("Chicago", 41.9, -87.6, ("ORD", "MDW")),
        MetroArea("Miami", 25.8, -80.2, ("MIA", "FLL")),
        MetroArea("SF", 37.8, -122.4, ("SFO", "OAK", "SJC")),
        MetroArea("DC", 38.9, -77.0, ("DCA", "IAD", "BWI")),
        MetroArea("Boston", 42.4, -71.0, ("BOS",)),
        MetroArea("Atlanta", 33.6, -84.4, ("ATL",)),
        MetroArea("Dallas", 32.9, -96.8, ("DFW", "DAL")),
        MetroArea("Houston", 29.8, -95.4, ("IAH", "HOU")),
        MetroArea("Phoenix", 33.4, -112.1, ("PHX",)),
        MetroArea("Seattle", 47.4, -122.3, ("SEA",)),
    ),
    UK: (
        MetroArea("London", 51.5, -0.1, ("LHR", "LGW", "STN", "LTN"), 60.0),
        MetroArea("Manchester", 53.5, -2.2, ("MAN",)),
        MetroArea("Birmingham", 52.5, -1.9, ("BHX",), 40.0),
        MetroArea("Edinburgh", 55.9, -3.2, ("EDI",), 40.0),
        MetroArea("Glasgow", 55.9, -4.3, ("GLA",), 40.0),
        MetroArea("Bristol", 51.4, -2.6, ("BRS",), 40.0),
        MetroArea("Newcastle", 55.0, -1.6, ("NCL",), 40.0),
        MetroArea("Liverpool", 53.4, -3.0, ("LPL",), 40.0),
        MetroArea("Cardiff", 51.5, -3.2, ("CWL",), 40.0),
        MetroArea("Belfast", 54.6, -5.9, ("BFS",), 40.0),
    ),
    EU: (
        MetroArea("Paris", 48.9, 2.3, ("CDG", "ORY"), 60.0),
        MetroArea("Lyon", 45.8, 4.9, ("LYS",)),
        MetroArea("Nice", 43.7, 7.3, ("NCE",)),
        MetroArea("Marseille", 43.3, 5.4, ("MRS",)),
        MetroArea("Frankfurt", 50.1, 8.7, ("FRA",)),
        MetroArea("Munich", 48.1, 11.6, ("MUC",)),
        MetroArea("Berlin", 52.5, 13.4, ("BER",)),
        MetroArea("Hamburg", 53.6, 10.0, ("HAM",)),
        MetroArea("Cologne", 50.9, 6.9, ("CGN",)),
        MetroArea("Düsseldorf", 51.2, 6.8, ("DUS",)),
        MetroArea("Amsterdam", 52.4, 4.9, ("AMS",)),
        MetroArea("Rotterdam", 51.9, 4.5, ("RTM",), 40.0),
        MetroArea("Madrid", 40.4, -3.7, ("MAD",)),
        MetroArea("Barcelona", 41.4, 2.2, ("BCN",)),
        MetroArea("Valencia", 39.5, -0.5, ("VLC",)),
        MetroArea("Seville", 37.4, -5.9, ("SVQ",)),
        MetroArea("Rome", 41.9, 12.5, ("FCO", "CIA")),
        MetroArea("Milan", 45.5, 9.2, ("MXP", "LIN")),
        MetroArea("Venice", 45.4, 12.3, ("VCE",)),
        MetroArea("Naples", 40.9, 14.3, ("NAP",)),
        MetroArea("Brussels", 50.8, 4.4, ("BRU",)),
        MetroArea("Antwerp", 51.2, 4.4, ("ANR",), 40.0),
        MetroArea("Zurich", 47.4, 8.5, ("ZRH",)),
        MetroArea("Geneva", 46.2, 6.1, ("GVA",)),
        MetroArea("Vienna", 48.2, 16.4, ("VIE",)),
        MetroArea("Lisbon", 38.7, -9.1, ("LIS",)),
        MetroArea("Porto", 41.2, -8.6, ("OPO",)),
        MetroArea("Stockholm", 59.3, 18.1, ("ARN",)),
        MetroArea("Copenhagen", 55.7, 12.6, ("CPH",)),
        MetroArea("Oslo", 59.9, 10.8, ("OSL",)),
        MetroArea("Helsinki", 60.2, 24.9, ("HEL",)),
        MetroArea("Warsaw", 52.2, 21.0, ("WAW",)),
        MetroArea("Prague", 50.1, 14.4, ("PRG",)),
        MetroArea("Budapest", 47.5, 19.0, ("BUD",)),
        MetroArea("Athens", 37.9, 23.7, ("ATH",)),
    ),
}


def suggested_airports(lat: float, lon: float, region: str) -> Tuple[str, ...]:
    """IATA codes of the first metro area in `region` whose radius covers the point."""
    for metro in METRO_AREAS.get(region, ()):
        if haversine_miles(lat, lon, metro.lat, metro.lon) <= metro.radius_miles:
            return metro.airports
    return ()


# -----------------------------------------------------------------------------
# Region consistency rules: region -> predicate over an airport's IATA code.
# An airport whose code satisfies a rule of the query region is "domestic".
# -----------------------------------------------------------------------------

_THREE_LETTERS = re.compile(r"^[A-Z]{3}$")

CodeRule = Callable[[str], bool]


def _us_code(iata: str) -> bool:
    return bool(_THREE_LETTERS.match(iata)) and not iata.startswith("Y")


def _canadian_code(iata: str) -> bool:
    return iata.startswith("Y")


REGION_CODE_RULES: Dict[str, CodeRule] = {
    US: _us_code,
    CA: _canadian_code,
}


def region_code_match(
    iata: Optional[str],
    regions: FrozenSet[str],
    rules: Optional[Dict[str, CodeRule]] = None,
) -> Optional[bool]:
    """
    True if any query region's rule accepts the code, False if the query regions
    have rules but none accepts it, None when no rule applies.
    """
    if not iata:
        return None
    rules = REGION_CODE_RULES if rules is None else rules
    applicable = [rules[r] for r in sorted(regions) if r in rules]
    if not applicable:
        return None
    return any(rule(iata) for rule in applicable)
