import asyncio

import httpx
import pytest

from pricefeed.core.errors import (
    ContentDecodeError,
    FetchError,
    FetchNetworkError,
    FetchTimeoutError,
    HttpStatusError,
)
from pricefeed.core.fetcher import Fetcher
from pricefeed.utils.headers import HTML_ACCEPT, JSON_ACCEPT, HeaderManager

URL = "https://www.tgju.test/profile/price_dollar_rl"


def _run(coro):
    return asyncio.run(coro)


async def _fetch(handler, method="fetch_html", **kwargs):
    async with Fetcher(transport=httpx.MockTransport(handler), **kwargs) as fetcher:
        return await getattr(fetcher, method)(URL)


def test_fetch_html_returns_text_and_sends_browser_headers():
    seen = {}

    def handler(request):
        seen.update(request.headers)
        return httpx.Response(200, text="<html>580,000</html>")

    headers = HeaderManager(user_agents=["Mozilla/5.0 Test"], referer="https://www.tgju.org/")
    html = _run(_fetch(handler, header_manager=headers))

    assert html == "<html>580,000</html>"
    assert seen["user-agent"] == "Mozilla/5.0 Test"
    assert seen["referer"] == "https://www.tgju.org/"
    assert seen["accept"] == HTML_ACCEPT


def test_fetch_json_decodes_body_with_json_accept():
    seen = {}

    def handler(request):
        seen.update(request.headers)
        return httpx.Response(200, json={"data": {"p": 580000}})

    assert _run(_fetch(handler, method="fetch_json")) == {"data": {"p": 580000}}
    assert seen["accept"] == JSON_ACCEPT


def test_non_success_status_is_a_fetch_error():
    def handler(request):
        return httpx.Response(404, text="not here")

    with pytest.raises(HttpStatusError) as excinfo:
        _run(_fetch(handler))

    assert excinfo.value.status_code == 404
    assert excinfo.value.url == URL
    assert "404" in excinfo.value.message
    assert isinstance(excinfo.value, FetchError)


def test_timeout_is_a_fetch_error():
    def handler(request):
        raise httpx.ReadTimeout("slow upstream", request=request)

    with pytest.raises(FetchTimeoutError):
        _run(_fetch(handler, timeout=0.5))


def test_network_failure_is_a_fetch_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchNetworkError) as excinfo:
        _run(_fetch(handler))
    assert excinfo.value.as_dict()["error_type"] == "FetchNetworkError"


def test_invalid_json_is_a_fetch_error():
    def handler(request):
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(ContentDecodeError):
        _run(_fetch(handler, method="fetch_json"))
