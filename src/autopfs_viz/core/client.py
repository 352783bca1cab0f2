"""API client for the autopfs result endpoint."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

import httpx
from loguru import logger

from autopfs_viz.core.config import ApiConfig
from autopfs_viz.utils.errors import APIError


class ApiClient:
    """Async HTTP client for the job result document."""

    def __init__(self, config: ApiConfig, client: Optional[httpx.AsyncClient] = None) -> None:
        """Initialize API client.

        Args:
            config: API configuration
            client: Pre-built httpx client (tests pass one with a mock transport)
        """
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(config.timeout),
            limits=httpx.Limits(
                max_connections=10,
                max_keepalive_connections=5
            )
        )
        logger.info(f"API Client initialized: {self.base_url}")

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()
        logger.debug("API Client closed")

    async def _request_with_retry(
        self,
        method: str,
        path: str,
        **kwargs
    ) -> Any:
        """Make HTTP request with retry logic.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path
            **kwargs: Additional request parameters

        Returns:
            Response JSON

        Raises:
            APIError: If the request or JSON decoding fails after all attempts
        """
        url = f"{self.base_url}{path}"
        attempts = max(1, self.config.max_retries)
        last_error: Optional[Exception] = None

        for attempt in range(attempts):
            try:
                logger.debug(f"Request {method} {url} (attempt {attempt + 1}/{attempts})")
                response = await self.client.request(method, url, **kwargs)
                response.raise_for_status()
                return response.json()

            except (httpx.HTTPError, ValueError) as e:
                last_error = e
                if attempt < attempts - 1:
                    delay = self.config.retry_delay * (2 ** attempt)
                    logger.warning(f"Request failed: {e}. Retrying in {delay}s...")
                    await asyncio.sleep(delay)
                else:
                    logger.error(f"Request failed after {attempts} attempts: {e}")

        raise APIError(f"{method} {url} failed: {last_error}") from last_error

    async def fetch_job(self, job_id: str) -> Dict[str, Any]:
        """Fetch the full job document.

        Args:
            job_id: Job ID

        Returns:
            Raw job document as decoded JSON
        """
        logger.info(f"Fetching job: {job_id}")
        return await self._request_with_retry("GET", "/json", params={"id": job_id})
