"""Unit tests for session table rendering - NON-INTERACTIVE tests only."""

from __future__ import annotations

from autopfs_viz.rendering.columns import COLUMNS, parse_filter
from autopfs_viz.rendering.table_renderer import TableRenderer
from autopfs_viz.transformer import parse_job
from tests.conftest import make_job, make_session


def plain(rows):
    return [[cell.plain for cell in row] for row in rows]


class TestBuildRows:
    """Test row construction."""

    def test_one_row_per_session_one_cell_per_column(self, raw_job):
        rows = TableRenderer().build_rows(parse_job(raw_job))
        assert len(rows) == 3
        assert all(len(row) == len(COLUMNS) for row in rows)

    def test_rows_follow_session_order(self):
        job = make_job([make_session(scenario_name="z"), make_session(scenario_name="a")])
        rows = plain(TableRenderer().build_rows(job))
        assert [row[7] for row in rows] == ["z", "a"]

    def test_render_is_idempotent(self, raw_job):
        """Test building twice yields identical visible content."""
        renderer = TableRenderer()
        job = parse_job(raw_job)
        first = plain(renderer.build_rows(job))
        second = plain(renderer.build_rows(job))
        assert first == second
        assert [s.scenario_name for s in job.sessions] == [
            "The Night March of Kalkamedes",
            "The Blackros Matrix",
            "Quest for the Perfect Planet",
        ]

    def test_malformed_values_render(self, raw_job):
        """Test raw tokens and sentinels render without raising."""
        rows = plain(TableRenderer().build_rows(parse_job(raw_job)))
        date, system, events, characters, season, number, variant, name, role = rows[2]
        assert date == "(missing)"
        assert events == ""
        assert season == "N/A"
        assert number == "abc"
        assert role == "GM"
        assert rows[0][3] == "101, 2ᴳᴹ"

    def test_no_job_renders_nothing(self):
        assert TableRenderer().build_rows(None) == []

    def test_filters_hide_rows(self, raw_job):
        rows = TableRenderer().build_rows(parse_job(raw_job), [parse_filter("System=PFS2")])
        assert plain(rows)[0][7] == "The Blackros Matrix"
        assert len(rows) == 1


class TestHeader:
    """Test header labels."""

    def test_header_label_with_marker(self):
        renderer = TableRenderer()
        label = renderer.header_label(COLUMNS[0], " ▲")
        assert label.plain == "Date ▲"

    def test_header_label_without_marker(self):
        assert TableRenderer().header_label(COLUMNS[2]).plain == "Event #"
