# src/cargo_planner/core/airport_ranking.py

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable, List, Optional, Tuple

from cargo_planner.core.airport_catalog import (
    AIRPORT_TYPE,
    ALL_MAJOR_AIRPORT_FRAGMENTS,
    EXCLUDED_NAME_TERMS,
    EXCLUDED_PLACE_TYPES,
    INTERNATIONAL_AIRPORT,
    contains_term,
    is_major_hub,
    lookup_codes,
)
from cargo_planner.core.geo import haversine_miles
from cargo_planner.core.models import AirportCandidate, ScoredAirport, ScoreRuleResult
from cargo_planner.core.regions import detect_regions, region_code_match

logger = logging.getLogger(__name__)

MAX_RESULTS = 10
SCORE_TIE_WINDOW = 10.0


# -----------------------------------------------------------------------------
# Step 1: classification
# -----------------------------------------------------------------------------

def is_major_airport_name(name: str) -> bool:
    lowered = name.lower()
    return INTERNATIONAL_AIRPORT in lowered or any(
        fragment in lowered for fragment in ALL_MAJOR_AIRPORT_FRAGMENTS
    )


def is_excluded(candidate: AirportCandidate) -> bool:
    if candidate.types & EXCLUDED_PLACE_TYPES:
        return True
    lowered = candidate.name.lower()
    return any(contains_term(lowered, term) for term in EXCLUDED_NAME_TERMS)


def is_valid_airport(candidate: AirportCandidate) -> bool:
    """
    Only major commercial airports pass: the place must be tagged as an
    airport, carry a known major-airport name and hit nothing on the exclude list.
    """
    has_type = AIRPORT_TYPE in candidate.types
    is_major = is_major_airport_name(candidate.name)
    excluded = is_excluded(candidate)
    valid = has_type and is_major and not excluded
    logger.debug(
        f"{'accepted' if valid else 'rejected'} {candidate.name!r}: "
        f"has_type={has_type}, is_major={is_major}, excluded={excluded}"
    )
    return valid


# -----------------------------------------------------------------------------
# Step 4: scoring rules
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class AirportFacts:
    """Everything a scoring rule may look at."""

    name: str  # lower-cased
    iata: Optional[str]
    icao: Optional[str]
    distance_miles: float
    regions: FrozenSet[str]

    @property
    def major_hub(self) -> bool:
        return is_major_hub(self.iata)


ScoringRule = Callable[[AirportFacts], float]


def _commercial_tier(f: AirportFacts) -> float:
    if f.major_hub:
        return 2000.0
    if f.iata and "international" in f.name:
        return 1500.0
    if f.iata:
        return 1000.0
    if "international" in f.name:
        return 300.0
    return 0.0


def _icao(f: AirportFacts) -> float:
    return 100.0 if f.icao else 0.0


_NAME_BONUSES: Tuple[Tuple[Tuple[str, ...], float], ...] = (
    (("regional",), 50.0),
    (("municipal",), 30.0),
    (("airport",), 20.0),
    (("airfield",), 15.0),
    (("air base", "airbase"), 15.0),
)


def _name_bonuses(f: AirportFacts) -> float:
    return sum(
        bonus for terms, bonus in _NAME_BONUSES if any(t in f.name for t in terms)
    )


# (term, penalty, applies only when the airport has no IATA code)
_NAME_PENALTIES: Tuple[Tuple[str, float, bool], ...] = (
    ("heliport", -500.0, False),
    ("hq", -400.0, False),
    ("headquarters", -400.0, False),
    ("metropolitan", -300.0, True),
    ("travel", -300.0, False),
    ("voyages", -300.0, False),
    ("agency", -300.0, False),
    ("rental", -200.0, False),
    ("parking", -200.0, False),
    ("hotel", -150.0, False),
    ("motel", -150.0, False),
    ("inn", -150.0, False),
    ("cargo", -100.0, True),
    ("fbo", -100.0, False),
    ("private", -200.0, False),
    ("club", -150.0, False),
)


def _name_penalties(f: AirportFacts) -> float:
    total = 0.0
    for term, penalty, uncoded_only in _NAME_PENALTIES:
        if uncoded_only and f.iata:
            continue
        if contains_term(f.name, term):
            total += penalty
    return total


def _distance(f: AirportFacts) -> float:
    if f.major_hub:
        rate = 0.05
    elif f.iata:
        rate = 0.2
    else:
        rate = 2.0
    return -f.distance_miles * rate


def _region_consistency(f: AirportFacts) -> float:
    match = region_code_match(f.iata, f.regions)
    if match is None:
        return 0.0
    return 1000.0 if match else -1500.0


SCORING_RULES: Tuple[Tuple[str, ScoringRule], ...] = (
    ("commercial_tier", _commercial_tier),
    ("icao", _icao),
    ("name_bonuses", _name_bonuses),
    ("name_penalties", _name_penalties),
    ("distance", _distance),
    ("region_consistency", _region_consistency),
)


def score_facts(facts: AirportFacts) -> Tuple[float, Tuple[ScoreRuleResult, ...]]:
    """
    Fold the scoring rules over one airport. Higher is better.
    Returns the total and the non-zero per-rule deltas in rule order.
    """
    score = 0.0
    reasons: List[ScoreRuleResult] = []
    for rule_name, rule in SCORING_RULES:
        delta = rule(facts)
        if delta:
            score += delta
            reasons.append(ScoreRuleResult(rule_name, delta))
    return score, tuple(reasons)


def score_airport(
    candidate: AirportCandidate,
    origin_lat: float,
    origin_lon: float,
    regions: Optional[FrozenSet[str]] = None,
) -> ScoredAirport:
    """Assign codes, distance and score to an already classified candidate."""
    if regions is None:
        regions = detect_regions(origin_lat, origin_lon)

    iata, icao = lookup_codes(candidate.name)
    distance = haversine_miles(origin_lat, origin_lon, candidate.latitude, candidate.longitude)
    facts = AirportFacts(
        name=candidate.name.lower(),
        iata=iata,
        icao=icao,
        distance_miles=distance,
        regions=regions,
    )
    score, reasons = score_facts(facts)

    logger.debug(
        f"{candidate.name}: {score:.1f} points "
        f"(IATA: {iata or 'N/A'}, {distance:.1f} mi)"
    )
    return ScoredAirport(
        candidate=candidate,
        iata_code=iata,
        icao_code=icao,
        distance_miles=distance,
        score=score,
        reasons=reasons,
    )


# -----------------------------------------------------------------------------
# Step 5: dedup + ranking
# -----------------------------------------------------------------------------

def dedup_candidates(candidates: Iterable[AirportCandidate]) -> List[AirportCandidate]:
    """Keep the first occurrence of every place_id."""
    seen = set()
    unique: List[AirportCandidate] = []
    for c in candidates:
        if c.place_id in seen:
            continue
        seen.add(c.place_id)
        unique.append(c)
    return unique


def _compare(a: ScoredAirport, b: ScoredAirport) -> int:
    # Not transitive across chained near-ties (100/108/116 points); their
    # final order depends on input order.
    if abs(a.score - b.score) > SCORE_TIE_WINDOW:
        return -1 if a.score > b.score else 1
    # scores are close: nearer airport wins
    return (a.distance_miles > b.distance_miles) - (a.distance_miles < b.distance_miles)


def sort_scored(airports: Iterable[ScoredAirport]) -> List[ScoredAirport]:
    return sorted(airports, key=functools.cmp_to_key(_compare))


def rank_airports(
    origin_lat: float,
    origin_lon: float,
    batches: Iterable[Iterable[AirportCandidate]],
    regions: Optional[FrozenSet[str]] = None,
    limit: int = MAX_RESULTS,
) -> List[ScoredAirport]:
    """
    Merge raw candidate batches, keep valid major airports, score and rank them.

    An empty result means no airport was found near the point.
    """
    if regions is None:
        regions = detect_regions(origin_lat, origin_lon)

    accepted: List[AirportCandidate] = []
    total = 0
    for batch in batches:
        for candidate in batch:
            total += 1
            if is_valid_airport(candidate):
                accepted.append(candidate)

    unique = dedup_candidates(accepted)
    scored = [score_airport(c, origin_lat, origin_lon, regions) for c in unique]
    ranked = sort_scored(scored)[:limit]

    logger.info(
        f"Airport ranking at ({origin_lat:.4f}, {origin_lon:.4f}) regions={sorted(regions)}: "
        f"{total} candidates, {len(accepted)} accepted, {len(unique)} unique, "
        f"{len(ranked)} returned"
    )
    return ranked
