"""
HTTP Fetcher - Upstream Request Module
======================================

Async HTTP client for price sources with:
- Async requests via httpx (one pooled client, safe for concurrent tasks)
- Browser-like headers and referer
- Fixed timeout
- Uniform failure signal (FetchError subclasses)

There is no retry here: the candidate walker moves on to the next URL.
"""

from typing import Any, Optional

import httpx

from pricefeed.core.errors import (
    ContentDecodeError,
    FetchNetworkError,
    FetchTimeoutError,
    HttpStatusError,
)
from pricefeed.utils.headers import HeaderManager
from pricefeed.utils.logger import get_logger

log = get_logger(__name__)

DEFAULT_TIMEOUT = 15.0


class Fetcher:
    """
    HTTP client for HTML pages and JSON endpoints
    """

    def __init__(
        self,
        header_manager: Optional[HeaderManager] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.header_manager = header_manager or HeaderManager()
        self.timeout = timeout
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            transport=transport,
        )
        log.debug(f"Fetcher initialized, timeout={timeout}s")

    async def close(self):
        """Close the underlying HTTP client"""
        await self.client.aclose()

    async def _do_fetch(self, url: str, mode: str) -> httpx.Response:
        headers = self.header_manager.get_headers(mode=mode)
        try:
            response = await self.client.get(url, headers=headers)
        except httpx.TimeoutException as e:
            raise FetchTimeoutError(f"Timed out after {self.timeout}s", url=url) from e
        except httpx.RequestError as e:
            raise FetchNetworkError(f"{e.__class__.__name__}: {e}", url=url) from e

        if not response.is_success:
            raise HttpStatusError(
                f"HTTP {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                url=url,
            )
        return response

    async def fetch_html(self, url: str) -> str:
        """
        Fetch an HTML page

        Raises:
            FetchError: on timeout, transport failure or non-2xx status
        """
        response = await self._do_fetch(url, mode="html")
        log.debug(f"Fetched {len(response.content)} bytes from {url}")
        return response.text

    async def fetch_json(self, url: str) -> Any:
        """
        Fetch and decode a JSON document

        Raises:
            FetchError: on timeout, transport failure, non-2xx status or invalid JSON
        """
        response = await self._do_fetch(url, mode="json")
        try:
            return response.json()
        except ValueError as e:
            raise ContentDecodeError(f"Invalid JSON body: {e}", url=url) from e

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
