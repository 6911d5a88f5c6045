from typing import Callable, Dict, List, Union

import httpx
import pytest

from pricefeed.core.config import FeedSettings
from pricefeed.core.fetcher import Fetcher
from pricefeed.core.models import InstrumentConfig

PROFILE_PAGE = """
<html>
  <head><title>Price 1402</title><script>var build = 20240101;</script></head>
  <body>
    <div class="header">Since 1390</div>
    <div class="price"><span class="value">{price}</span></div>
  </body>
</html>
"""

MALFORMED_PAGE = """
<html><body>
  <div class="unexpected-layout"><p>Last trade: {price} rial</p></div>
</body></html>
"""


def archive_page(rows: List[List[str]]) -> str:
    body = "".join(
        "<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>" for row in rows
    )
    return f"<html><body><table><thead><tr><th>Date</th><th>Open</th><th>Close</th></tr></thead><tbody>{body}</tbody></table></body></html>"


Response = Union[httpx.Response, Exception, str, dict]


class FakeUpstream:
    """httpx mock transport backed by a url -> response mapping; records requests."""

    def __init__(self, routes: Dict[str, Response]):
        self.routes = routes
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            raise httpx.ConnectError("unreachable", request=request)
        if isinstance(route, Exception):
            raise route
        if isinstance(route, httpx.Response):
            return route
        if isinstance(route, dict):
            return httpx.Response(200, json=route)
        return httpx.Response(200, text=route, headers={"content-type": "text/html; charset=utf-8"})

    @property
    def urls(self) -> List[str]:
        return [str(r.url) for r in self.requests]

    def fetcher(self, **kwargs) -> Fetcher:
        return Fetcher(transport=httpx.MockTransport(self), **kwargs)


@pytest.fixture
def upstream() -> Callable[[Dict[str, Response]], FakeUpstream]:
    return FakeUpstream


def _instrument(key: str, selectors=(".price .value",)) -> InstrumentConfig:
    return InstrumentConfig(
        key=key,
        label=key.title(),
        now_urls=(f"https://a.test/{key}", f"https://b.test/{key}"),
        history_urls=(f"https://a.test/archive/{key}", f"https://b.test/archive/{key}"),
        api_urls=(f"https://api.test/{key}",),
        selectors=selectors,
    )


@pytest.fixture
def feed_settings() -> FeedSettings:
    return FeedSettings(
        instruments=(_instrument("dollar"), _instrument("gold18"), _instrument("coin")),
        backend="html",
        history="archive",
        avg_rounding="round",
        timeout=2.0,
        locale="en-US",
        unavailable_label="n/a",
    )


@pytest.fixture
def api_feed_settings(feed_settings) -> FeedSettings:
    from dataclasses import replace

    return replace(feed_settings, backend="api", history="synthetic", avg_rounding="floor")
