"""Unit tests for the result API client."""

from __future__ import annotations

import httpx
import pytest

from autopfs_viz.core.client import ApiClient
from autopfs_viz.core.config import ApiConfig
from autopfs_viz.utils.errors import APIError


def make_client(handler, **config):
    transport = httpx.MockTransport(handler)
    return ApiClient(
        ApiConfig(base_url="http://h:8080/", retry_delay=0.0, **config),
        client=httpx.AsyncClient(transport=transport),
    )


class TestApiClient:
    """Test fetching the job document."""

    @pytest.mark.asyncio
    async def test_fetch_job(self, raw_job):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=raw_job)

        client = make_client(handler)
        try:
            data = await client.fetch_job("abc123")
        finally:
            await client.close()

        assert data["JobId"] == "abc123"
        assert str(requests[0].url) == "http://h:8080/json?id=abc123"

    @pytest.mark.asyncio
    async def test_http_error_raises_api_error(self):
        client = make_client(lambda request: httpx.Response(500, text="boom"))
        try:
            with pytest.raises(APIError):
                await client.fetch_job("abc123")
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_malformed_json_raises_api_error(self):
        client = make_client(lambda request: httpx.Response(200, text="{not json"))
        try:
            with pytest.raises(APIError):
                await client.fetch_job("abc123")
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_retries(self, raw_job):
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) < 3:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, json=raw_job)

        client = make_client(handler, max_retries=3)
        try:
            data = await client.fetch_job("abc123")
        finally:
            await client.close()

        assert len(calls) == 3
        assert data["State"] == "done"

    @pytest.mark.asyncio
    async def test_single_attempt_by_default(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("refused", request=request)

        client = make_client(handler)
        try:
            with pytest.raises(APIError):
                await client.fetch_job("abc123")
        finally:
            await client.close()
        assert len(calls) == 1
