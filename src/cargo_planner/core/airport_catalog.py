# src/cargo_planner/core/airport_catalog.py

"""
Curated airport reference data used by the ranking engine.

Everything here is a business decision, not derived data:
  - which names count as a major commercial airport (allow-list)
  - which place types / name terms disqualify a candidate (exclude lists)
  - which name fragments map to which (IATA, ICAO) pair
  - which IATA codes are major hubs
"""

from __future__ import annotations

import re
from typing import Dict, FrozenSet, Optional, Tuple

from cargo_planner.core.regions import CA, EU, UK, US

ME = "ME"
APAC = "APAC"
LATAM = "LATAM"
AFRICA = "AFRICA"

AIRPORT_TYPE = "airport"

# -----------------------------------------------------------------------------
# Allow-list: lower-case name fragments of major / international airports
# -----------------------------------------------------------------------------

INTERNATIONAL_AIRPORT = "international airport"

MAJOR_AIRPORT_FRAGMENTS: Dict[str, Tuple[str, ...]] = {
    CA: (
        "trudeau", "pierre elliott", "pearson", "vancouver international",
        "calgary international", "ottawa international", "macdonald-cartier",
        "halifax international", "stanfield", "edmonton international",
        "winnipeg james armstrong richardson", "jean lesage",
    ),
    US: (
        "newark liberty", "kennedy international", "laguardia",
        "los angeles international", "o'hare", "o’hare", "ohare", "midway international",
        "miami international", "fort lauderdale", "san francisco international",
        "oakland international", "mineta", "seattle tacoma", "seattle-tacoma",
        "seattle–tacoma",
        "denver international", "phoenix sky harbor", "dallas fort worth",
        "dallas/fort worth", "love field", "houston intercontinental",
        "bush intercontinental", "hobby airport", "atlanta international",
        "hartsfield", "boston logan", "logan international",
        "baltimore washington", "baltimore/washington", "reagan national",
        "dulles international", "harry reid", "mccarran", "hollywood burbank",
        "long beach airport", "minneapolis", "detroit metropolitan",
        "philadelphia international", "charlotte douglas", "orlando international",
        "tampa international", "san diego international", "portland international",
        "salt lake city international", "nashville international",
        "austin-bergstrom", "louis armstrong", "lambert", "kansas city international",
        "honolulu", "daniel k. inouye", "ted stevens",
    ),
    UK: (
        "heathrow", "gatwick", "stansted", "luton", "london city airport",
        "manchester airport", "birmingham airport", "edinburgh airport",
        "glasgow airport", "bristol airport", "newcastle international",
        "liverpool john lennon", "cardiff airport", "belfast international",
        "george best",
    ),
    EU: (
        "charles de gaulle", "orly", "lyon-saint", "saint-exupéry", "côte d'azur",
        "cote d'azur", "marseille provence", "schiphol", "frankfurt", "munich",
        "berlin brandenburg", "düsseldorf", "dusseldorf", "hamburg", "cologne bonn",
        "köln", "zurich", "geneva", "vienna", "brussels", "copenhagen", "oslo",
        "gardermoen", "arlanda", "helsinki", "dublin", "barajas", "madrid",
        "el prat", "barcelona", "valencia airport", "seville airport", "lisbon",
        "humberto delgado", "porto airport", "sá carneiro", "sa carneiro", "athens",
        "fiumicino", "ciampino", "malpensa", "linate", "marco polo", "naples",
        "capodichino", "istanbul", "sabiha gokcen", "sabiha gökçen", "prague",
        "václav havel", "budapest", "chopin", "warsaw", "bucharest", "otopeni",
        "sofia", "rotterdam the hague",
    ),
    ME: (
        "dubai", "abu dhabi", "hamad international", "doha", "king khalid",
        "riyadh", "king abdulaziz", "jeddah", "muscat", "bahrain international",
        "kuwait international", "queen alia", "amman", "rafic hariri", "beirut",
        "ben gurion", "tel aviv", "cairo international", "cairo", "larnaca",
    ),
    APAC: (
        "haneda", "narita", "kansai", "incheon", "changi", "hong kong international",
        "beijing capital", "daxing", "pudong", "hongqiao", "suvarnabhumi",
        "kingsford smith", "tullamarine", "auckland airport", "indira gandhi",
        "chhatrapati shivaji", "taoyuan", "ninoy aquino",
    ),
    LATAM: (
        "benito juárez", "benito juarez", "guarulhos", "galeão", "galeao", "ezeiza",
        "ministro pistarini", "arturo merino", "jorge chávez", "jorge chavez",
        "el dorado", "tocumen", "juan santamaría", "juan santamaria",
    ),
    AFRICA: (
        "o. r. tambo", "or tambo", "jomo kenyatta", "bole international",
    ),
}

ALL_MAJOR_AIRPORT_FRAGMENTS: Tuple[str, ...] = tuple(
    fragment for fragments in MAJOR_AIRPORT_FRAGMENTS.values() for fragment in fragments
)

# -----------------------------------------------------------------------------
# Exclude lists
# -----------------------------------------------------------------------------

EXCLUDED_PLACE_TYPES: FrozenSet[str] = frozenset({
    "travel_agency",
    "lodging",
    "store",
    "car_rental",
    "parking",
    "transit_station",
    "train_station",
    "subway_station",
    "light_rail_station",
})

EXCLUDED_NAME_TERMS: Tuple[str, ...] = (
    "travel", "voyages", "hotel", "motel", "inn", "resort", "rental", "parking",
    "taxi", "shuttle", "heliport", "helipad", "regional airport",
    "municipal airport", "county airport", "field airport", "airfield",
    "airstrip", "private", "corporate", "executive", "fbo", "cargo", "freight",
)

# Short terms that match only as the exact word; every other term may also
# take a plural ending ("shuttles" but not "shuttlesworth").
WHOLE_WORD_TERMS: FrozenSet[str] = frozenset({"inn", "hq", "fbo", "club", "taxi"})

_TERM_PATTERNS: Dict[str, "re.Pattern[str]"] = {}


def contains_term(lowered_name: str, term: str) -> bool:
    """Whole-word containment check on an already lower-cased name."""
    pattern = _TERM_PATTERNS.get(term)
    if pattern is None:
        plural = "" if term in WHOLE_WORD_TERMS else "(?:e?s)?"
        pattern = re.compile(r"(?<![a-z])" + re.escape(term) + plural + r"(?![a-z])")
        _TERM_PATTERNS[term] = pattern
    return pattern.search(lowered_name) is not None


# -----------------------------------------------------------------------------
# Code table: (name fragments, IATA, ICAO), evaluated top to bottom.
# More specific fragments precede broader ones that would also match.
# -----------------------------------------------------------------------------

AIRPORT_CODES: Tuple[Tuple[Tuple[str, ...], str, str], ...] = (
    # United States
    (("newark",), "EWR", "KEWR"),
    (("kennedy",), "JFK", "KJFK"),
    (("laguardia",), "LGA", "KLGA"),
    (("los angeles international",), "LAX", "KLAX"),
    (("o'hare", "o’hare", "ohare"), "ORD", "KORD"),
    (("midway",), "MDW", "KMDW"),
    (("miami international",), "MIA", "KMIA"),
    (("fort lauderdale",), "FLL", "KFLL"),
    (("san francisco international",), "SFO", "KSFO"),
    (("oakland international",), "OAK", "KOAK"),
    (("mineta",), "SJC", "KSJC"),
    (("reagan", "washington national"), "DCA", "KDCA"),
    (("dulles",), "IAD", "KIAD"),
    (("baltimore",), "BWI", "KBWI"),
    (("logan",), "BOS", "KBOS"),
    (("hartsfield", "atlanta international"), "ATL", "KATL"),
    (("dallas fort worth", "dallas/fort worth", "dallas-fort worth"), "DFW", "KDFW"),
    (("love field",), "DAL", "KDAL"),
    (("houston intercontinental", "bush intercontinental"), "IAH", "KIAH"),
    (("hobby",), "HOU", "KHOU"),
    (("sky harbor",), "PHX", "KPHX"),
    (("seattle tacoma", "seattle-tacoma", "seattle–tacoma", "sea-tac"), "SEA", "KSEA"),
    (("denver international",), "DEN", "KDEN"),
    (("harry reid", "mccarran"), "LAS", "KLAS"),
    (("hollywood burbank", "bob hope"), "BUR", "KBUR"),
    (("long beach",), "LGB", "KLGB"),
    (("minneapolis",), "MSP", "KMSP"),
    (("detroit metropolitan",), "DTW", "KDTW"),
    (("philadelphia international",), "PHL", "KPHL"),
    (("charlotte douglas",), "CLT", "KCLT"),
    (("orlando international",), "MCO", "KMCO"),
    (("tampa international",), "TPA", "KTPA"),
    (("san diego international",), "SAN", "KSAN"),
    (("jetport",), "PWM", "KPWM"),
    (("portland international",), "PDX", "KPDX"),
    (("salt lake city",), "SLC", "KSLC"),
    (("nashville",), "BNA", "KBNA"),
    (("austin-bergstrom", "austin bergstrom"), "AUS", "KAUS"),
    (("louis armstrong",), "MSY", "KMSY"),
    (("lambert",), "STL", "KSTL"),
    (("kansas city international",), "MCI", "KMCI"),
    (("daniel k. inouye", "honolulu"), "HNL", "PHNL"),
    (("ted stevens",), "ANC", "PANC"),
    (("shuttlesworth",), "BHM", "KBHM"),
    # Canada
    (("trudeau", "pierre elliott"), "YUL", "CYUL"),
    (("mirabel",), "YMX", "CYMX"),
    (("billy bishop",), "YTZ", "CYTZ"),
    (("pearson",), "YYZ", "CYYZ"),
    (("vancouver international",), "YVR", "CYVR"),
    (("calgary international",), "YYC", "CYYC"),
    (("ottawa", "macdonald-cartier"), "YOW", "CYOW"),
    (("halifax", "stanfield"), "YHZ", "CYHZ"),
    (("edmonton international",), "YEG", "CYEG"),
    (("james armstrong richardson",), "YWG", "CYWG"),
    (("jean lesage",), "YQB", "CYQB"),
    # United Kingdom & Ireland
    (("heathrow",), "LHR", "EGLL"),
    (("gatwick",), "LGW", "EGKK"),
    (("stansted",), "STN", "EGSS"),
    (("luton",), "LTN", "EGGW"),
    (("london city",), "LCY", "EGLC"),
    (("manchester airport",), "MAN", "EGCC"),
    (("birmingham airport",), "BHX", "EGBB"),
    (("edinburgh",), "EDI", "EGPH"),
    (("prestwick",), "PIK", "EGPK"),
    (("glasgow",), "GLA", "EGPF"),
    (("bristol airport",), "BRS", "EGGD"),
    (("newcastle international",), "NCL", "EGNT"),
    (("john lennon",), "LPL", "EGGP"),
    (("cardiff",), "CWL", "EGFF"),
    (("george best", "belfast city"), "BHD", "EGAC"),
    (("belfast international",), "BFS", "EGAA"),
    (("dublin",), "DUB", "EIDW"),
    # Continental Europe
    (("charles de gaulle",), "CDG", "LFPG"),
    (("orly",), "ORY", "LFPO"),
    (("saint-exupéry", "lyon-saint"), "LYS", "LFLL"),
    (("côte d'azur", "cote d'azur"), "NCE", "LFMN"),
    (("marseille",), "MRS", "LFML"),
    (("schiphol",), "AMS", "EHAM"),
    (("rotterdam",), "RTM", "EHRD"),
    (("hahn",), "HHN", "EDFH"),
    (("frankfurt",), "FRA", "EDDF"),
    (("munich",), "MUC", "EDDM"),
    (("berlin brandenburg",), "BER", "EDDB"),
    (("düsseldorf", "dusseldorf"), "DUS", "EDDL"),
    (("hamburg",), "HAM", "EDDH"),
    (("cologne", "köln"), "CGN", "EDDK"),
    (("zurich",), "ZRH", "LSZH"),
    (("geneva",), "GVA", "LSGG"),
    (("vienna",), "VIE", "LOWW"),
    (("charleroi",), "CRL", "EBCI"),
    (("brussels",), "BRU", "EBBR"),
    (("antwerp",), "ANR", "EBAW"),
    (("copenhagen",), "CPH", "EKCH"),
    (("gardermoen", "oslo"), "OSL", "ENGM"),
    (("arlanda",), "ARN", "ESSA"),
    (("helsinki",), "HEL", "EFHK"),
    (("barajas", "madrid"), "MAD", "LEMD"),
    (("el prat", "barcelona"), "BCN", "LEBL"),
    (("valencia airport",), "VLC", "LEVC"),
    (("seville airport", "sevilla"), "SVQ", "LEZL"),
    (("humberto delgado", "lisbon"), "LIS", "LPPT"),
    (("sá carneiro", "sa carneiro", "porto airport"), "OPO", "LPPR"),
    (("athens",), "ATH", "LGAV"),
    (("ciampino",), "CIA", "LIRA"),
    (("fiumicino",), "FCO", "LIRF"),
    (("malpensa",), "MXP", "LIMC"),
    (("linate",), "LIN", "LIML"),
    (("marco polo",), "VCE", "LIPZ"),
    (("capodichino", "naples"), "NAP", "LIRN"),
    (("sabiha gokcen", "sabiha gökçen"), "SAW", "LTFJ"),
    (("istanbul",), "IST", "LTFM"),
    (("chopin", "warsaw"), "WAW", "EPWA"),
    (("václav havel", "vaclav havel", "prague"), "PRG", "LKPR"),
    (("ferenc liszt", "budapest"), "BUD", "LHBP"),
    (("otopeni", "bucharest"), "OTP", "LROP"),
    (("sofia",), "SOF", "LBSF"),
    # Middle East
    (("al maktoum", "dubai world central"), "DWC", "OMDW"),
    (("dubai",), "DXB", "OMDB"),
    (("abu dhabi",), "AUH", "OMAA"),
    (("hamad international", "doha"), "DOH", "OTHH"),
    (("king khalid", "riyadh"), "RUH", "OERK"),
    (("king abdulaziz", "jeddah"), "JED", "OEJN"),
    (("muscat",), "MCT", "OOMS"),
    (("bahrain",), "BAH", "OBBI"),
    (("kuwait",), "KWI", "OKBK"),
    (("queen alia", "amman"), "AMM", "OJAI"),
    (("rafic hariri", "beirut"), "BEY", "OLBA"),
    (("ben gurion", "tel aviv"), "TLV", "LLBG"),
    (("cairo",), "CAI", "HECA"),
    (("larnaca",), "LCA", "LCLK"),
    # Asia-Pacific
    (("haneda",), "HND", "RJTT"),
    (("narita",), "NRT", "RJAA"),
    (("kansai",), "KIX", "RJBB"),
    (("incheon",), "ICN", "RKSI"),
    (("changi",), "SIN", "WSSS"),
    (("hong kong international",), "HKG", "VHHH"),
    (("beijing capital",), "PEK", "ZBAA"),
    (("daxing",), "PKX", "ZBAD"),
    (("pudong",), "PVG", "ZSPD"),
    (("hongqiao",), "SHA", "ZSSS"),
    (("suvarnabhumi",), "BKK", "VTBS"),
    (("kingsford smith",), "SYD", "YSSY"),
    (("tullamarine",), "MEL", "YMML"),
    (("auckland airport",), "AKL", "NZAA"),
    (("indira gandhi",), "DEL", "VIDP"),
    (("chhatrapati shivaji",), "BOM", "VABB"),
    (("taoyuan",), "TPE", "RCTP"),
    (("ninoy aquino",), "MNL", "RPLL"),
    # Latin America
    (("benito juárez", "benito juarez"), "MEX", "MMMX"),
    (("guarulhos",), "GRU", "SBGR"),
    (("galeão", "galeao"), "GIG", "SBGL"),
    (("ezeiza", "ministro pistarini"), "EZE", "SAEZ"),
    (("arturo merino",), "SCL", "SCEL"),
    (("jorge chávez", "jorge chavez"), "LIM", "SPJC"),
    (("el dorado",), "BOG", "SKBO"),
    (("tocumen",), "PTY", "MPTO"),
    (("juan santamaría", "juan santamaria"), "SJO", "MROC"),
    # Africa
    (("o. r. tambo", "or tambo"), "JNB", "FAOR"),
    (("jomo kenyatta",), "NBO", "HKJK"),
    (("bole international",), "ADD", "HAAB"),
)


def lookup_codes(name: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Resolve (IATA, ICAO) from an airport name.

    First pass: the first table entry with a fragment contained in the
    lower-cased name. Second pass: an IATA code written in capitals as a
    standalone word, e.g. "JFK Terminal 4". No other inference is made.
    """
    lowered = (name or "").lower()
    for fragments, iata, icao in AIRPORT_CODES:
        if any(fragment in lowered for fragment in fragments):
            return iata, icao

    for _, iata, icao in AIRPORT_CODES:
        if re.search(r"\b" + iata + r"\b", name or ""):
            return iata, icao

    return None, None


# -----------------------------------------------------------------------------
# Major hubs per region
# -----------------------------------------------------------------------------

MAJOR_HUBS: Dict[str, FrozenSet[str]] = {
    US: frozenset({
        "JFK", "LAX", "ORD", "ATL", "DFW", "DEN", "SFO", "SEA", "LAS", "PHX",
        "IAH", "MIA", "BOS", "EWR", "LGA", "BWI", "DCA", "IAD",
    }),
    CA: frozenset({"YUL", "YYZ", "YVR", "YYC", "YOW", "YHZ"}),
}

ALL_MAJOR_HUBS: FrozenSet[str] = frozenset().union(*MAJOR_HUBS.values())


def is_major_hub(iata: Optional[str]) -> bool:
    return bool(iata) and iata in ALL_MAJOR_HUBS
