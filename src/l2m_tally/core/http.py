"""
Shared JSON fetcher for all upstream feeds.

Provides JsonFetcher, a thin async wrapper over httpx that issues a single
GET, validates the status and decodes the body into a pydantic model.
Failures surface as FetchError subclasses that always keep the raw body,
since the upstream feeds are not versioned and schema drift is common.

Usage:
    async with JsonFetcher(timeout=30.0) as fetcher:
        teams = await fetcher.fetch(url, LeagueResponse[Team])
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class FetchError(Exception):
    """Base exception for a failed fetch of an upstream JSON document."""

    def __init__(self, message: str, url: str, body: str = ""):
        super().__init__(message)
        self.message = message
        self.url = url
        self.body = body


class HttpError(FetchError):
    """Raised when the upstream answers with a non-success status."""

    def __init__(self, url: str, status: int, body: str):
        super().__init__(f"HTTP {status} for {url}", url=url, body=body)
        self.status = status


class DecodeError(FetchError):
    """Raised when the body does not match the expected shape."""

    def __init__(self, url: str, body: str, cause: Exception):
        super().__init__(f"Could not decode response from {url}: {cause}", url=url, body=body)
        self.cause = cause


class TransportError(FetchError):
    """Raised when no response could be obtained at all."""

    def __init__(self, url: str, cause: Exception):
        super().__init__(f"Request failed for {url}: {cause}", url=url)
        self.cause = cause


# ---------------------------------------------------------------------------
# Fetcher
# ---------------------------------------------------------------------------

class JsonFetcher:
    """
    Async JSON fetcher with typed decoding.

    Use as an async context manager, or rely on lazy initialisation and
    call close() when done. No retries and no caching are performed.
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        follow_redirects: bool = True,
    ):
        self._timeout = timeout
        self._follow_redirects = follow_redirects
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._adapters: dict[Any, TypeAdapter] = {}

    # -- Lifecycle -----------------------------------------------------------

    async def __aenter__(self) -> "JsonFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def client(self) -> httpx.AsyncClient:
        """Return the HTTP client, lazily creating it if needed."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
                follow_redirects=self._follow_redirects,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    # -- Fetching ------------------------------------------------------------

    def _adapter(self, model: Any) -> TypeAdapter:
        adapter = self._adapters.get(model)
        if adapter is None:
            adapter = self._adapters[model] = TypeAdapter(model)
        return adapter

    async def fetch(self, url: str, model: type[T]) -> T:
        """
        GET a URL and decode its JSON body as `model`.

        Raises:
            HttpError: If the response status is not 2xx
            DecodeError: If the body is not valid JSON for `model`
            TransportError: If the request could not be completed
        """
        logger.debug(f"GET {url}")
        try:
            response = await self.client.get(url)
        except httpx.RequestError as e:
            logger.warning(f"Request error for {url}: {e}")
            raise TransportError(url, e) from e

        body = response.text
        if not response.is_success:
            logger.warning(f"HTTP {response.status_code} for {url}")
            raise HttpError(url, response.status_code, body)

        try:
            return self._adapter(model).validate_json(body)
        except ValidationError as e:
            logger.warning(f"Schema mismatch for {url}: {e.error_count()} error(s)")
            raise DecodeError(url, body, e) from e
