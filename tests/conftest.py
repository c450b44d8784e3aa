"""
pytest 配置和共享 fixtures。

测试分层：
- unit/: 单元测试（不依赖外部服务，KV 使用内存实现）
- e2e/: 端到端测试（完整 HTTP 流程，KV 使用内存实现）
- integration/: 集成测试（需要真实 Redis，默认不运行）

使用方法：
    # 运行单元与端到端测试
    uv run pytest

    # 只运行集成测试（需要 Redis）
    uv run pytest tests/integration/ -m integration
"""

import json
from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from src.core.config import Settings
from src.modules.sources.domain.fetcher import FetchResult

# ============================================
# 内存 KV
# ============================================


class InMemoryKVClient:
    """KVClient 的内存实现，记录每个 key 最近一次写入的 TTL。"""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}

    async def ping(self, timeout: float | None = None) -> None:
        return None

    async def get(self, key: str) -> str | None:
        return self.store.get(key)

    async def set(
        self,
        key: str,
        value: str,
        ex: int | timedelta | None = None,
    ) -> bool:
        self.store[key] = value
        if isinstance(ex, timedelta):
            ex = int(ex.total_seconds())
        self.ttls[key] = ex
        return True

    async def delete(self, *keys: str) -> int:
        deleted = 0
        for key in keys:
            if key in self.store:
                del self.store[key]
                self.ttls.pop(key, None)
                deleted += 1
        return deleted

    async def get_json(self, key: str) -> Any | None:
        value = await self.get(key)
        if value is None:
            return None
        return json.loads(value)

    async def set_json(
        self,
        key: str,
        value: Any,
        ex: int | timedelta | None = None,
    ) -> bool:
        return await self.set(key, json.dumps(value, ensure_ascii=False), ex=ex)


# ============================================
# 时间 / 抓取 / 队列 替身
# ============================================


class FakeClock:
    """可手动推进的时钟。"""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class StubFetcher:
    """按 URL 返回预设结果的 ContentFetcher；未配置的 URL 视为 HTTP 404。"""

    def __init__(self, responses: dict[str, FetchResult] | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[str] = []

    def respond(self, url: str, content: str, status_code: int = 200) -> None:
        self.responses[url] = FetchResult.success(content, status_code=status_code)

    def fail(self, url: str, error_message: str, status_code: int | None = None) -> None:
        self.responses[url] = FetchResult.failed(error_message, status_code=status_code)

    async def fetch(self, url: str) -> FetchResult:
        self.calls.append(url)
        return self.responses.get(url) or FetchResult.failed("HTTP 404", status_code=404)


class InlineRefreshQueue:
    """RefreshQueue 替身：记录入队，并在同一事件循环内立即执行。"""

    def __init__(self, kv, settings: Settings, clock, fetcher: StubFetcher) -> None:
        self.kv = kv
        self.settings = settings
        self.clock = clock
        self.fetcher = fetcher
        self.enqueued: list[str] = []
        self.batches = 0

    async def enqueue_refresh(self, directory_name: str) -> None:
        from src.modules.sources.infrastructure.dependencies import (
            build_refresh_service,
        )

        self.enqueued.append(directory_name)
        service = build_refresh_service(self.kv, self.settings, self.clock, self.fetcher)
        await service.refresh_by_name(directory_name)

    async def enqueue_batch(self) -> None:
        from src.modules.sources.infrastructure.dependencies import (
            build_scheduled_refresh_job,
        )

        async def _no_sleep(_seconds: float) -> None:
            return None

        self.batches += 1
        job = build_scheduled_refresh_job(
            self.kv, self.settings, self.clock, self.fetcher, sleep=_no_sleep
        )
        await job.run_once()


# ============================================
# 配置 Fixtures
# ============================================


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """应用基于 asyncio（redis.asyncio、asyncio.sleep 等）。"""
    return "asyncio"


@pytest.fixture
def test_settings() -> Settings:
    """测试环境配置。"""
    return Settings(
        ENVIRONMENT="local",
        REDIS_URL="redis://localhost:6379/1",  # 使用 DB 1 隔离测试
        ADMIN_USERNAME="admin",
        ADMIN_PASSWORD="admin123",
        BATCH_PACING_SEC=0,
        FETCH_MAX_ATTEMPTS=1,
    )


@pytest.fixture
def kv() -> InMemoryKVClient:
    """内存 KV 存储。"""
    return InMemoryKVClient()


@pytest.fixture
def clock() -> FakeClock:
    """固定起点的可推进时钟。"""
    return FakeClock(datetime(2025, 1, 6, 9, 0, 0, tzinfo=UTC))


@pytest.fixture
def stub_fetcher() -> StubFetcher:
    return StubFetcher()


@pytest.fixture
def refresh_queue(kv, test_settings, clock, stub_fetcher) -> InlineRefreshQueue:
    return InlineRefreshQueue(kv, test_settings, clock, stub_fetcher)


# ============================================
# Redis Fixtures
# ============================================


@pytest.fixture
async def redis_client():
    """真实 Redis 客户端（集成测试用）。

    注意：需要运行 Redis 才能使用。
    """
    from src.core.infrastructure.redis.client import RedisClient

    client = RedisClient(url="redis://localhost:6379/1")

    await client.client.flushdb()

    yield client

    await client.client.flushdb()
    await client.close()


# ============================================
# HTTP Client Fixtures
# ============================================


@pytest.fixture
async def async_client(
    test_settings, kv, clock, refresh_queue
) -> AsyncGenerator[AsyncClient, None]:
    """异步 HTTP 客户端（用于 API 测试）。"""
    from main import app
    from src.core.application.dependencies import get_clock, get_kv_client
    from src.core.config import get_settings
    from src.modules.sources.application.dependencies import get_refresh_queue

    original_overrides = dict(app.dependency_overrides)

    app.dependency_overrides[get_kv_client] = lambda: kv
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_refresh_queue] = lambda: refresh_queue

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    # 恢复 main.py 中的生产依赖覆盖
    app.dependency_overrides.clear()
    app.dependency_overrides.update(original_overrides)


def session_id_from(response) -> str:
    """从 Set-Cookie 响应头中取出 admin_session 的值。"""
    set_cookie = response.headers["set-cookie"]
    name, _, value = set_cookie.split(";")[0].partition("=")
    assert name.strip() == "admin_session"
    return value.strip()


@pytest.fixture
async def admin_headers(async_client: AsyncClient) -> dict[str, str]:
    """登录并返回携带会话 Cookie 的请求头。"""
    response = await async_client.post(
        "/admin/login",
        json={"username": "admin", "password": "admin123"},
        headers={"User-Agent": "pytest"},
    )
    assert response.status_code == 200
    session_id = session_id_from(response)
    async_client.cookies.clear()
    return {"Cookie": f"admin_session={session_id}"}


# ============================================
# 领域对象 Fixtures
# ============================================


@pytest.fixture
def sample_source_data() -> dict[str, Any]:
    """示例源数据（API 请求格式）。"""
    return {
        "directoryName": "news",
        "sourceUrl": "https://upstream.example.com/news.m3u",
        "extension": "m3u",
    }
