import pytest

from cargo_planner.core.airport_catalog import contains_term, is_major_hub, lookup_codes


@pytest.mark.parametrize(
    "name, codes",
    [
        ("John F. Kennedy International Airport", ("JFK", "KJFK")),
        ("Toronto Pearson International Airport", ("YYZ", "CYYZ")),
        ("Montréal-Trudeau International Airport", ("YUL", "CYUL")),
        ("London Heathrow Airport", ("LHR", "EGLL")),
        ("Frankfurt-Hahn Airport", ("HHN", "EDFH")),
        ("Frankfurt Airport", ("FRA", "EDDF")),
        ("Chicago O'Hare International Airport", ("ORD", "KORD")),
    ],
)
def test_lookup_codes_by_name_fragment(name, codes):
    assert lookup_codes(name) == codes


def test_lookup_codes_falls_back_to_standalone_iata_code():
    assert lookup_codes("Terminal 4 JFK") == ("JFK", "KJFK")


def test_lookup_codes_does_not_guess_from_capitalised_words():
    assert lookup_codes("Springfield Municipal Airport") == (None, None)
    assert lookup_codes("") == (None, None)


def test_contains_term_respects_word_boundaries_for_short_terms():
    assert contains_term("airport inn", "inn")
    assert not contains_term("minneapolis-saint paul international airport", "inn")
    assert contains_term("airport hotel", "hotel")
    assert not contains_term("xyz fbos", "fbo")


def test_contains_term_allows_plurals_but_not_longer_words():
    assert contains_term("airport shuttles", "shuttle")
    assert contains_term("long term parking", "parking")
    assert not contains_term("birmingham-shuttlesworth international airport", "shuttle")
    assert not contains_term("cargolux hangar", "cargo")


def test_is_major_hub():
    assert is_major_hub("JFK")
    assert is_major_hub("YVR")
    assert not is_major_hub("BUR")
    assert not is_major_hub(None)
