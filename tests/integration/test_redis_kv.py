"""Redis 集成测试。

需要本地 Redis（redis://localhost:6379/1）：
    uv run pytest tests/integration/ -m integration
"""

from datetime import UTC, datetime, timedelta

import pytest

from src.core.infrastructure.health import HealthStatus
from src.core.infrastructure.redis.keys import RedisKeys
from src.modules.auth.application.session_service import SessionManager
from src.modules.auth.infrastructure.mappers import AdminSessionMapper
from src.modules.auth.infrastructure.repositories import KVAdminSessionRepository
from src.modules.sources.domain.entities import SourceRecord
from src.modules.sources.infrastructure.mappers import SourceRecordMapper
from src.modules.sources.infrastructure.repositories import (
    KVContentCacheRepository,
    KVSourceCatalogRepository,
)

pytestmark = [pytest.mark.anyio, pytest.mark.integration]


class TestRedisClient:
    """RedisClient 作为 KVClient 的行为。"""

    async def test_health_check(self, redis_client):
        result = await redis_client.health_check()
        assert result.status == HealthStatus.OK
        assert result.connected is True

    async def test_json_round_trip_keeps_unicode(self, redis_client):
        await redis_client.set_json("logs", [{"message": "成功下载: news"}])
        assert await redis_client.get("logs") == '[{"message": "成功下载: news"}]'

    async def test_set_with_ttl_and_delete(self, redis_client):
        assert await redis_client.set("k", "v", ex=60) is True
        assert 0 < await redis_client.client.ttl("k") <= 60
        assert await redis_client.delete("k", "missing") == 1
        assert await redis_client.delete() == 0


class TestRepositoriesOnRedis:
    """KV 仓储在真实 Redis 上的行为。"""

    async def test_catalog_and_content(self, redis_client):
        content_cache = KVContentCacheRepository(redis_client)
        catalog = KVSourceCatalogRepository(
            redis_client, SourceRecordMapper(), content_cache
        )
        await catalog.add(
            SourceRecord(
                directory_name="news",
                source_url="https://upstream.example.com/news.m3u",
                extension="m3u",
                created=datetime(2025, 1, 1, tzinfo=UTC),
            )
        )
        await content_cache.put("news", "#EXTM3U")

        assert [r.directory_name for r in await catalog.list_all()] == ["news"]
        assert await redis_client.get(RedisKeys.content("news")) == "#EXTM3U"

        await catalog.remove("news")
        assert await redis_client.get(RedisKeys.content("news")) is None

    async def test_session_ttl_is_set(self, redis_client):
        manager = SessionManager(
            KVAdminSessionRepository(redis_client, AdminSessionMapper()),
            admin_username="admin",
            admin_password="admin123",
            ttl=timedelta(days=7),
        )

        session_id = await manager.login("admin", "admin123")

        ttl = await redis_client.client.ttl(RedisKeys.session(session_id))
        assert 604800 - 5 <= ttl <= 604800
        assert await manager.validate(session_id) == "admin"
