"""Unit tests for the column registry."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from autopfs_viz.models import MISSING_DATE
from autopfs_viz.rendering.columns import (
    COLUMNS,
    Filter,
    apply_filters,
    get_column,
    parse_filter,
)
from tests.conftest import make_session


def cell(column_name, session):
    return get_column(column_name).render(session).plain


def compare(column_name, a, b, ascending=True):
    return get_column(column_name).compare(a, b, ascending)


class TestRegistry:
    """Test the registry layout."""

    def test_column_order(self):
        assert [c.name for c in COLUMNS] == [
            "Date",
            "System",
            "Event #",
            "Character",
            "Season",
            "Number",
            "Variant",
            "Scenario Name",
            "Player/GM",
        ]

    def test_every_column_has_a_filter(self):
        assert all(c.select is not None for c in COLUMNS)

    def test_get_column_unknown(self):
        assert get_column("Nope") is None


class TestRenderers:
    """Test cell rendering."""

    def test_date(self):
        session = make_session(date=datetime(2019, 5, 4, tzinfo=timezone.utc))
        assert cell("Date", session) == "2019-05-04"

    def test_missing_date(self):
        assert cell("Date", make_session(date=MISSING_DATE)) == "(missing)"

    def test_event_numbers(self):
        session = make_session(event_numbers=[12345, "x"])
        assert cell("Event #", session) == "12345, (missing)"

    def test_characters_mark_gm_role(self):
        session = make_session(characters=[101, -202, "bad"])
        assert cell("Character", session) == "101, 202ᴳᴹ, bad"

    def test_not_applicable_numbers(self):
        session = make_session(season=-1, number="abc")
        assert cell("Season", session) == "N/A"
        assert cell("Number", session) == "abc"

    @pytest.mark.parametrize(
        "player,gm,expected",
        [(True, True, "P/GM"), (True, False, "P"), (False, True, "GM"), (False, False, "P")],
    )
    def test_role(self, player, gm, expected):
        assert cell("Player/GM", make_session(player=player, gm=gm)) == expected


class TestComparators:
    """Test comparator contracts."""

    def test_scalar_ignores_direction(self):
        """Test scalar comparators give the same answer either way."""
        a, b = make_session(season=1), make_session(season=4)
        assert compare("Season", a, b, True) < 0
        assert compare("Season", a, b, False) < 0

    def test_multi_valued_uses_direction(self):
        """Test min keys ascending and max keys descending."""
        a = make_session(event_numbers=[3, 7])
        b = make_session(event_numbers=[1, 9])
        assert compare("Event #", a, b, True) > 0  # 3 vs 1
        assert compare("Event #", a, b, False) < 0  # 7 vs 9

    def test_empty_set_sorts_first(self):
        empty, full = make_session(event_numbers=[]), make_session(event_numbers=[1])
        assert compare("Event #", empty, full, True) < 0
        assert compare("Event #", full, empty, False) > 0
        assert compare("Event #", empty, make_session(), True) == 0

    def test_role_weights(self):
        """Test player=1, GM=2, both=3."""
        player = make_session(player=True, gm=False)
        gm = make_session(player=False, gm=True)
        both = make_session(player=True, gm=True)
        assert compare("Player/GM", player, gm) < 0
        assert compare("Player/GM", gm, both) < 0
        assert compare("Player/GM", both, both) == 0

    def test_dates(self):
        early = make_session(date=datetime(2018, 1, 1, tzinfo=timezone.utc))
        assert compare("Date", early, make_session()) < 0
        assert compare("Date", make_session(date=MISSING_DATE), early) < 0

    def test_text_columns(self):
        a, b = make_session(scenario_name="Alpha"), make_session(scenario_name="Beta")
        assert compare("Scenario Name", a, b) < 0
        assert compare("Scenario Name", b, a) > 0


class TestFilters:
    """Test row filters."""

    @pytest.fixture
    def sessions(self):
        return [
            make_session(scenario_name="old", game="PFS", date=datetime(2017, 6, 1, tzinfo=timezone.utc), characters=[101]),
            make_session(scenario_name="new", game="PFS2", date=datetime(2021, 6, 1, tzinfo=timezone.utc), characters=[-202]),
        ]

    def test_parse_filter(self):
        assert parse_filter("System=PFS,SFS") == Filter("System", ("PFS", "SFS"), "")
        assert parse_filter("Date>=2019-01-01") == Filter("Date", ("2019-01-01",), "after")
        assert parse_filter("Date<=2019-01-01") == Filter("Date", ("2019-01-01",), "before")

    def test_parse_filter_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_filter("System")

    def test_no_filters_keeps_everything(self, sessions):
        assert apply_filters(sessions, []) == sessions

    def test_value_filter(self, sessions):
        kept = apply_filters(sessions, [parse_filter("System=PFS2")])
        assert [s.scenario_name for s in kept] == ["new"]

    def test_date_filters(self, sessions):
        after = apply_filters(sessions, [parse_filter("Date>=2019-01-01")])
        before = apply_filters(sessions, [parse_filter("Date<=2019-01-01")])
        assert [s.scenario_name for s in after] == ["new"]
        assert [s.scenario_name for s in before] == ["old"]

    def test_character_filter_matches_gm_characters(self, sessions):
        kept = apply_filters(sessions, [parse_filter("Character=202")])
        assert [s.scenario_name for s in kept] == ["new"]

    def test_unknown_column_filter_is_ignored(self, sessions):
        assert apply_filters(sessions, [Filter("Nope", ("x",))]) == sessions
