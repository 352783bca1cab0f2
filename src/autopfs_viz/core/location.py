"""Page location helpers.

The dashboard is addressed with the same URLs the web frontend uses
(``/status?id=...``, ``/html?id=...``), so the stream endpoint, the result
endpoint and the view-mode flag are all derived from a page URL.
"""

from __future__ import annotations

from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

STREAM_SUFFIX = "/ws"


def query_param(page_url: str, name: str) -> str:
    """Return a query parameter's first value, or "" if it is absent."""
    values = parse_qs(urlsplit(page_url).query, keep_blank_values=True).get(name)
    if not values:
        return ""
    return values[0]


def job_id(page_url: str) -> str:
    return query_param(page_url, "id")


def is_view_mode(page_url: str) -> bool:
    """True when the ``view`` parameter is present, whatever its value."""
    params = parse_qs(urlsplit(page_url).query, keep_blank_values=True)
    return "view" in params


def ws_url(page_url: str) -> str:
    """Derive the live stream endpoint from the page URL.

    The scheme is upgraded to ``wss`` for an ``https`` page and ``ws``
    otherwise, ``/ws`` is appended to the path, and the query is kept.
    """
    parts = urlsplit(page_url)
    scheme = "wss" if parts.scheme == "https" else "ws"
    return urlunsplit((scheme, parts.netloc, parts.path + STREAM_SUFFIX, parts.query, ""))


def _origin_url(page_url: str, path: str, job: str) -> str:
    parts = urlsplit(page_url)
    return urlunsplit((parts.scheme, parts.netloc, path, urlencode({"id": job}), ""))


def result_url(page_url: str, job: str) -> str:
    """Post-completion page for a job (``/html?id=<job>``) on the page's origin."""
    return _origin_url(page_url, "/html", job)


def origin(page_url: str) -> str:
    parts = urlsplit(page_url)
    return urlunsplit((parts.scheme, parts.netloc, "", "", ""))
