import copy
import logging

import pytest

from tablescout.core.geo import Coordinate
from tablescout.services.ranking import SortMode, VenueRankingEngine, venues
from tests.helpers import SF, make_slot, make_venue, slots_at

MILES_PER_DEGREE_LAT = 3959 * 3.141592653589793 / 180


def _north_of_sf(miles: float) -> tuple[float, float]:
    return (SF[0] + miles / MILES_PER_DEGREE_LAT, SF[1])


def _names(venues):
    return [v["name"] for v in venues]


@pytest.fixture
def batch():
    return [
        make_venue("Zuni", slots=slots_at(18, 19, 20), price=3, rating=4.6, geo=_north_of_sf(2.0)),
        make_venue("Tartine", slots=[], price=1, rating=4.8, geo=_north_of_sf(0.5)),
        make_venue("Nopa", slots=slots_at(12), price=2, geo=_north_of_sf(10.0)),
        make_venue("Flour + Water", slots=slots_at(17, 21), price=2, rating=4.4),
    ]


def test_with_availability(batch):
    engine = VenueRankingEngine(batch)
    assert _names(engine.with_availability()) == ["Zuni", "Nopa", "Flour + Water"]
    assert engine.total_count() == 4
    assert engine.available_count() == 3


def test_empty_price_selection_shows_everything(batch):
    engine = VenueRankingEngine(batch)
    assert engine.by_price_tier([]) == batch
    assert engine.by_price_tier(set()) == engine.venues()


def test_price_tier_filter(batch):
    engine = VenueRankingEngine(batch + [make_venue("No Price", slots=slots_at(19))])
    assert _names(engine.by_price_tier([2])) == ["Nopa", "Flour + Water"]
    assert _names(engine.by_price_tier({1, 3})) == ["Zuni", "Tartine"]


def test_time_window_uses_half_open_overlap():
    # 12:00-13:20
    lunch = make_venue("Lunch", slots=[make_slot("2026-10-19 12:00:00", "2026-10-19 13:20:00")])
    engine = VenueRankingEngine([lunch])

    assert engine.by_time_window(12 * 60 + 30, 14 * 60) == [lunch]
    # window starts exactly where the slot ends
    assert engine.by_time_window(13 * 60 + 20, 14 * 60) == []
    # window ends exactly where the slot starts
    assert engine.by_time_window(10 * 60, 12 * 60) == []
    assert engine.by_time_window(11 * 60, 12 * 60 + 1) == [lunch]


def test_time_window_reads_wall_clock_not_utc():
    slot = make_slot("2026-10-19T19:00:00-07:00", "2026-10-19T20:00:00-07:00")
    engine = VenueRankingEngine([make_venue("Local", slots=[slot])])
    assert len(engine.by_time_window(19 * 60, 19 * 60 + 30)) == 1
    assert engine.by_time_window(2 * 60, 3 * 60) == []


def test_time_window_skips_venues_without_usable_slots(batch):
    broken = make_venue("Broken", slots=[{"date": {"start": "soon"}}, {}])
    engine = VenueRankingEngine(batch + [broken])
    assert _names(engine.by_time_window(17 * 60, 18 * 60 + 30)) == ["Zuni", "Flour + Water"]


def test_combined_filter_applies_time_then_price(batch):
    engine = VenueRankingEngine(batch)
    assert _names(engine.combined_filter(17 * 60, 22 * 60)) == ["Zuni", "Flour + Water"]
    assert _names(engine.combined_filter(17 * 60, 22 * 60, [2])) == ["Flour + Water"]
    assert engine.combined_filter(17 * 60, 22 * 60, [1]) == []


def test_sort_by_rating_treats_missing_as_zero(batch):
    engine = VenueRankingEngine(batch)
    assert _names(engine.sort_by("rating")) == ["Tartine", "Zuni", "Flour + Water", "Nopa"]


def test_sort_by_distance_puts_missing_coordinates_last(batch):
    engine = VenueRankingEngine(batch, reference=Coordinate(*SF))
    ranked = engine.sort_by(SortMode.DISTANCE)

    assert _names(ranked) == ["Tartine", "Zuni", "Nopa", "Flour + Water"]
    assert engine.distance_miles(ranked[0]) == pytest.approx(0.5, abs=1e-6)
    assert engine.distance_miles(ranked[1]) == pytest.approx(2.0, abs=1e-6)
    assert engine.distance_miles(ranked[2]) == pytest.approx(10.0, abs=1e-6)
    assert engine.distance_miles(ranked[3]) is None


def test_sort_by_distance_without_reference_is_identity(batch, caplog):
    engine = VenueRankingEngine(batch)
    with caplog.at_level(logging.WARNING, logger="tablescout.services.ranking.engine"):
        ranked = engine.sort_by("distance")

    assert ranked == batch
    assert ranked is not engine.venues()
    assert "No search location available" in caplog.text


def test_availability_and_default_are_reverses_without_ties(batch):
    engine = VenueRankingEngine(batch)
    by_availability = engine.sort_by("availability")
    by_default = engine.sort_by("default")

    assert _names(by_availability) == ["Zuni", "Flour + Water", "Nopa", "Tartine"]
    assert by_default == list(reversed(by_availability))


def test_unknown_sort_mode_falls_back_to_default(batch):
    engine = VenueRankingEngine(batch)
    assert engine.sort_by("popularity") == engine.sort_by("default")
    assert engine.sort_by(None) == engine.sort_by(SortMode.DEFAULT)


def test_sorts_are_stable():
    venues = [make_venue(name, slots=slots_at(19), rating=4.0) for name in ("A", "B", "C", "D")]
    engine = VenueRankingEngine(venues)
    for mode in SortMode:
        assert _names(engine.sort_by(mode)) == ["A", "B", "C", "D"]


def test_sort_operates_on_a_filtered_subset(batch):
    engine = VenueRankingEngine(batch, reference=Coordinate(*SF))
    subset = engine.by_price_tier([2, 3])
    assert _names(engine.sort_by("distance", subset)) == ["Zuni", "Nopa", "Flour + Water"]
    assert _names(subset) == ["Zuni", "Nopa", "Flour + Water"]


def test_engine_never_mutates_input(batch):
    snapshot = copy.deepcopy(batch)
    order = list(batch)
    engine = VenueRankingEngine(batch, reference=Coordinate(*SF))

    for mode in SortMode:
        engine.sort_by(mode)
    engine.combined_filter(0, 24 * 60, [1, 2])
    engine.with_availability()
    [engine.summarize(v) for v in batch]

    assert batch == snapshot
    assert batch == order


def test_from_search_response_reads_hits_and_search_location():
    response = {
        "search": {"hits": [make_venue("Zuni", geo=_north_of_sf(2.0))]},
        "searchLocation": {"lat": SF[0], "lng": SF[1]},
    }
    engine = VenueRankingEngine.from_search_response(response)
    assert engine.reference == Coordinate(*SF)
    assert engine.total_count() == 1

    empty = VenueRankingEngine.from_search_response({})
    assert empty.reference is None
    assert empty.venues() == []


def test_summarize(batch):
    engine = VenueRankingEngine(batch, reference=Coordinate(*SF))
    summary = engine.summarize(batch[0])
    assert summary["name"] == "Zuni"
    assert summary["price"] == "$$$"
    assert summary["rating"] == 4.6
    assert summary["slot_count"] == 3
    assert summary["slot_times"] == ["6:00 PM", "7:00 PM", "8:00 PM"]
    assert summary["distance_miles"] == 2.0


def test_content_for_reads_flat_and_nested_shapes():
    flat = make_venue("Flat", content=[{"name": "about", "body": "Wood-fired"}, {"name": "need_to_know", "body": ""}])
    nested = make_venue("Nested", content={"en-us": {"why_we_like_it": {"body": "The roast chicken"}}})

    assert VenueRankingEngine.content_for(flat, "about") == "Wood-fired"
    assert VenueRankingEngine.content_for(flat, "need_to_know") is None
    assert VenueRankingEngine.content_for(flat, "why_we_like_it") is None
    assert VenueRankingEngine.content_for(nested, "why_we_like_it") == "The roast chicken"
    assert VenueRankingEngine.content_for(nested, "about") is None
    assert VenueRankingEngine.content_for(make_venue("None"), "about") is None


def test_display_name_fallbacks():
    highlighted = make_venue("zuni", _highlightResult={"name": {"value": "Zuni Café"}})
    assert VenueRankingEngine.display_name(highlighted) == "Zuni Café"
    assert VenueRankingEngine.display_name(make_venue("Nopa")) == "Nopa"
    assert VenueRankingEngine.display_name(make_venue(None)) == "Unknown Restaurant"


@pytest.mark.parametrize(
    "price,label",
    [(1, "$"), (2, "$$"), (3, "$$$"), (4, ""), (0, ""), (None, "")],
)
def test_price_label(price, label):
    assert VenueRankingEngine.price_label(make_venue("X", price=price)) == label


def test_slot_duration_and_format():
    slot = make_slot("2026-10-19 19:30:00", "2026-10-19 21:00:29")
    assert VenueRankingEngine.slot_duration_minutes(slot) == 90
    assert VenueRankingEngine.slot_duration_minutes(make_slot("2026-10-19 19:30:00", "2026-10-19 20:15:30")) == 46
    assert VenueRankingEngine.slot_duration_minutes({"date": {"start": "later"}}) == 0
    assert VenueRankingEngine.format_slot_time(slot) == "7:30 PM"
    assert VenueRankingEngine.format_slot_time(make_slot("2026-10-19 00:05:00", "2026-10-19 01:00:00")) == "12:05 AM"
    assert VenueRankingEngine.format_slot_time(make_slot("2026-10-19 12:00:00", "2026-10-19 13:00:00")) == "12:00 PM"
    assert VenueRankingEngine.format_slot_time({}) == ""


def test_cuisine_and_neighborhood():
    venue = make_venue(
        "Zuni",
        _highlightResult={
            "cuisine": [{"value": "Californian"}, {"value": ""}, {"value": "Mediterranean"}],
            "neighborhood": {"value": "Hayes Valley"},
        },
    )
    assert VenueRankingEngine.cuisine_types(venue) == ["Californian", "Mediterranean"]
    assert VenueRankingEngine.neighborhood(venue) == "Hayes Valley"
    assert VenueRankingEngine.neighborhood(make_venue("Bare")) is None


def test_venue_url():
    venue = make_venue("Zuni", url_slug="zuni-cafe", location={"url_slug": "san-francisco-ca"})
    assert (
        VenueRankingEngine.venue_url(venue, "2026-10-19", 2)
        == "https://resy.com/cities/san-francisco-ca/venues/zuni-cafe?date=2026-10-19&seats=2"
    )
    bare = make_venue("Carbone", url_slug="carbone")
    assert VenueRankingEngine.venue_url(bare, "2026-10-20", "4").startswith(
        "https://resy.com/cities/san-francisco-ca/venues/carbone?"
    )


@pytest.mark.parametrize(
    "value,minutes",
    [("19:30", 1170), ("7", 420), ("00:00", 0), ("24:00", 1440), ("24:30", None), ("7:75", None), ("", None), (None, None), ("noon", None)],
)
def test_clock_to_minutes(value, minutes):
    assert venues.clock_to_minutes(value) == minutes


def test_scalar_nested_fields_degrade_to_defaults():
    odd = make_venue(
        "Odd",
        rating=None,
        availability="none",
        location="san-francisco-ca",
        _highlightResult={"name": "Odd Bar", "neighborhood": ["Mission"], "cuisine": "Bar"},
        url_slug="odd",
    )
    odd["rating"] = 4.5
    rated = make_venue("Rated", slots=slots_at(19), rating=4.0)
    engine = VenueRankingEngine([odd, rated])

    assert _names(engine.sort_by("rating")) == ["Rated", "Odd"]
    assert _names(engine.sort_by("availability")) == ["Rated", "Odd"]
    assert engine.with_availability() == [rated]
    assert engine.by_time_window(0, 24 * 60) == [rated]
    assert engine.display_name(odd) == "Odd"
    assert engine.neighborhood(odd) is None
    assert engine.cuisine_types(odd) == []
    assert engine.venue_url(odd, "2026-10-19", 2).startswith("https://resy.com/cities/san-francisco-ca/venues/odd?")
    assert engine.slot_duration_minutes({"date": "2026-10-19 19:00:00"}) == 0


def test_from_search_response_tolerates_odd_shapes():
    engine = VenueRankingEngine.from_search_response({"search": [], "searchLocation": "SF"})
    assert engine.venues() == []
    assert engine.reference is None
