"""Unit tests for page location helpers."""

import pytest

from autopfs_viz.core.location import (
    is_view_mode,
    job_id,
    origin,
    result_url,
    ws_url,
)


class TestLocation:
    """Test URL derivation."""

    def test_job_id(self):
        assert job_id("http://h:8080/status?id=abc123&view") == "abc123"
        assert job_id("http://h:8080/status") == ""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("http://h/status?id=1", False),
            ("http://h/status?id=1&view", True),
            ("http://h/status?view=&id=1", True),
            ("http://h/status?view=false", True),
            ("http://h/status?id=1&viewer=1", False),
        ],
    )
    def test_view_mode_is_presence(self, url, expected):
        assert is_view_mode(url) is expected

    def test_ws_url(self):
        assert ws_url("http://h:8080/status?id=1") == "ws://h:8080/status/ws?id=1"
        assert ws_url("https://h/status?id=1&view") == "wss://h/status/ws?id=1&view"

    def test_result_urls(self):
        page = "https://h:8443/status?id=abc&view"
        assert result_url(page, "abc") == "https://h:8443/html?id=abc"
        assert origin(page) == "https://h:8443"
