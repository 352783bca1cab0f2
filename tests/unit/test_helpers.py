"""Unit tests for parsing and ordering helpers."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from autopfs_viz.utils.helpers import compare_values, parse_int, parse_timestamp, value_key


class TestParseInt:
    """Test parseInt-like integer parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [(12, 12), ("12", 12), (" -3", -3), ("+7", 7), ("12abc", 12), (4.9, 4)],
    )
    def test_parses(self, value, expected):
        assert parse_int(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", None, True, [1]])
    def test_keeps_raw_token(self, value):
        assert parse_int(value) == value

    def test_logs_warning(self):
        from loguru import logger

        messages = []
        handler_id = logger.add(messages.append, level="WARNING")
        try:
            parse_int("abc", "Number")
        finally:
            logger.remove(handler_id)
        assert any("Number" in str(m) for m in messages)


class TestParseTimestamp:
    """Test timestamp parsing."""

    def test_zulu(self):
        assert parse_timestamp("2020-02-01T10:00:00Z") == datetime(2020, 2, 1, 10, tzinfo=timezone.utc)

    def test_naive_is_utc(self):
        assert parse_timestamp("2020-02-01T10:00:00").tzinfo == timezone.utc

    @pytest.mark.parametrize("value", [None, "", "soon", 12])
    def test_unusable(self, value):
        assert parse_timestamp(value) is None

    @pytest.mark.parametrize(
        "value,microsecond",
        [(".5", 500000), (".12", 120000), (".1234", 123400), (".123456", 123456), (".123456789", 123456)],
    )
    def test_fraction_lengths(self, value, microsecond):
        parsed = parse_timestamp(f"2020-02-01T10:00:00{value}Z")
        assert parsed == datetime(2020, 2, 1, 10, 0, 0, microsecond, tzinfo=timezone.utc)


class TestOrdering:
    """Test the mixed int/raw-token order."""

    def test_ints_subtract(self):
        assert compare_values(3, 10) < 0

    def test_raw_tokens_after_ints(self):
        assert compare_values("abc", 10) > 0
        assert compare_values(10, "abc") < 0

    def test_value_key(self):
        assert sorted(["b", 3, "a", -1], key=value_key) == [-1, 3, "a", "b"]
