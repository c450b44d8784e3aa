"""HTTP 播放列表抓取器。

GET 上游 URL，返回原始文本。非 2xx 与网络错误都转换为 FetchResult.failed，
只有网络层错误（连接失败、超时）会按配置重试。
"""

import time

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.modules.sources.domain.fetcher import FetchResult

RETRYABLE_ERRORS = (httpx.TransportError,)


class HttpContentFetcher:
    """基于 httpx 的 ContentFetcher 实现。"""

    TIMEOUT = 30.0

    USER_AGENT = "iptvRelay/0.1 (+playlist refresher)"

    def __init__(
        self,
        *,
        timeout: float | None = None,
        user_agent: str | None = None,
        max_attempts: int = 2,
        backoff_multiplier: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout or self.TIMEOUT
        self.user_agent = user_agent or self.USER_AGENT
        self.max_attempts = max(1, max_attempts)
        self.backoff_multiplier = backoff_multiplier
        self._transport = transport

    async def fetch(self, url: str) -> FetchResult:
        """执行抓取。"""
        start_time = time.time()

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await self._get_with_retry(client, url)
                response.raise_for_status()

                return FetchResult.success(
                    content=response.text,
                    status_code=response.status_code,
                    duration_ms=self._elapsed_ms(start_time),
                    metadata={
                        "url": url,
                        "content_type": response.headers.get("content-type", ""),
                    },
                )

        except httpx.TimeoutException as e:
            logger.warning(f"Playlist fetch timeout for {url}: {e}")
            return FetchResult.failed(
                f"Timeout: {e}",
                duration_ms=self._elapsed_ms(start_time),
            )
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"Playlist fetch HTTP error for {url}: {e.response.status_code}"
            )
            return FetchResult.failed(
                f"HTTP {e.response.status_code}",
                status_code=e.response.status_code,
                duration_ms=self._elapsed_ms(start_time),
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Playlist fetch error for {url}: {e!r}")
            return FetchResult.failed(
                f"Error: {str(e) or type(e).__name__}",
                duration_ms=self._elapsed_ms(start_time),
            )

    async def _get_with_retry(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.backoff_multiplier, min=0, max=5),
            reraise=True,
        ):
            with attempt:
                return await client.get(
                    url,
                    headers={"User-Agent": self.user_agent, "Accept": "*/*"},
                )
        raise RuntimeError("unreachable")  # pragma: no cover

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return int((time.time() - start_time) * 1000)
