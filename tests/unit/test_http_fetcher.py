"""HttpContentFetcher 单元测试（httpx.MockTransport，不访问网络）。"""

import httpx
import pytest

from src.modules.sources.domain.fetcher import FetchStatus
from src.modules.sources.infrastructure.fetchers import HttpContentFetcher

pytestmark = pytest.mark.anyio

PLAYLIST_URL = "https://upstream.example.com/news.m3u"
PLAYLIST_BODY = "#EXTM3U\n#EXTINF:-1 tvg-id=\"news\",News\nhttp://cdn.example.com/news.ts\n"


def _fetcher(handler, max_attempts: int = 1) -> HttpContentFetcher:
    return HttpContentFetcher(
        user_agent="iptvRelay-test",
        max_attempts=max_attempts,
        backoff_multiplier=0,
        transport=httpx.MockTransport(handler),
    )


class TestHttpContentFetcher:
    """HTTP 抓取测试。"""

    async def test_success_returns_body_verbatim(self):
        seen_headers: dict[str, str] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen_headers.update(request.headers)
            return httpx.Response(
                200,
                text=PLAYLIST_BODY,
                headers={"content-type": "audio/x-mpegurl"},
            )

        result = await _fetcher(handler).fetch(PLAYLIST_URL)

        assert result.status == FetchStatus.SUCCESS
        assert result.content == PLAYLIST_BODY
        assert result.status_code == 200
        assert result.metadata["content_type"] == "audio/x-mpegurl"
        assert seen_headers["user-agent"] == "iptvRelay-test"

    async def test_empty_body_is_a_success(self):
        result = await _fetcher(lambda request: httpx.Response(200, text="")).fetch(
            PLAYLIST_URL
        )
        assert result.is_success
        assert result.content == ""

    @pytest.mark.parametrize("status_code", [404, 500, 503])
    async def test_non_2xx_is_a_failure(self, status_code):
        result = await _fetcher(
            lambda request: httpx.Response(status_code, text="nope")
        ).fetch(PLAYLIST_URL)

        assert result.status == FetchStatus.FAILED
        assert result.status_code == status_code
        assert result.error_message == f"HTTP {status_code}"
        assert result.content is None

    async def test_follows_redirects(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/old.m3u":
                return httpx.Response(
                    302, headers={"location": PLAYLIST_URL}
                )
            return httpx.Response(200, text=PLAYLIST_BODY)

        result = await _fetcher(handler).fetch("https://upstream.example.com/old.m3u")

        assert result.is_success
        assert result.content == PLAYLIST_BODY

    async def test_connect_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        result = await _fetcher(handler).fetch(PLAYLIST_URL)

        assert result.status == FetchStatus.FAILED
        assert result.error_message == "Error: connection refused"

    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("read timed out", request=request)

        result = await _fetcher(handler).fetch(PLAYLIST_URL)

        assert result.status == FetchStatus.FAILED
        assert result.error_message.startswith("Timeout")

    async def test_transport_errors_are_retried(self):
        attempts = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal attempts
            attempts += 1
            if attempts == 1:
                raise httpx.ConnectError("connection reset", request=request)
            return httpx.Response(200, text=PLAYLIST_BODY)

        result = await _fetcher(handler, max_attempts=2).fetch(PLAYLIST_URL)

        assert attempts == 2
        assert result.is_success

    async def test_http_errors_are_not_retried(self):
        attempts = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal attempts
            attempts += 1
            return httpx.Response(500)

        result = await _fetcher(handler, max_attempts=3).fetch(PLAYLIST_URL)

        assert attempts == 1
        assert result.error_message == "HTTP 500"

