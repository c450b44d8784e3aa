"""活动日志单元测试。"""

from datetime import UTC, datetime

import pytest

from src.core.infrastructure.redis.keys import RedisKeys
from src.modules.logs.application.service import ActivityLogService
from src.modules.logs.domain.entities import LogEntry, LogType
from src.modules.logs.domain.repository import EventLogRepository
from src.modules.logs.infrastructure.mappers import LogEntryMapper
from src.modules.logs.infrastructure.repositories import KVEventLogRepository

pytestmark = pytest.mark.anyio


class FailingEventLogRepository(EventLogRepository):
    """append 总是失败的仓储。"""

    async def append(self, entry: LogEntry) -> None:
        raise ConnectionError("kv unavailable")

    async def list_recent(self) -> list[LogEntry]:
        return []


class TestEventLogRepository:
    """KVEventLogRepository 测试。"""

    async def test_newest_first(self, kv, clock):
        service = ActivityLogService(KVEventLogRepository(kv, LogEntryMapper()), clock)

        await service.info("first")
        clock.advance(seconds=1)
        await service.error("second")

        entries = await service.list_recent()
        assert [(e.type, e.message) for e in entries] == [
            (LogType.ERROR, "second"),
            (LogType.INFO, "first"),
        ]

    async def test_capped_at_max_entries(self, kv, clock):
        """超过上限时丢弃最旧的条目。"""
        repository = KVEventLogRepository(kv, LogEntryMapper(), max_entries=100)
        service = ActivityLogService(repository, clock)

        for i in range(105):
            await service.info(f"entry {i}")

        documents = await kv.get_json(RedisKeys.ACTIVITY_LOG)
        assert len(documents) == 100
        assert documents[0]["message"] == "entry 104"
        assert documents[-1]["message"] == "entry 5"

    async def test_document_format(self, kv):
        repository = KVEventLogRepository(kv, LogEntryMapper())
        await repository.append(
            LogEntry(
                time=datetime(2025, 1, 6, 9, 0, tzinfo=UTC),
                type=LogType.INFO,
                message="成功下载: news (https://upstream.example.com/news.m3u)",
            )
        )

        assert await kv.get_json(RedisKeys.ACTIVITY_LOG) == [
            {
                "time": "2025-01-06T09:00:00.000Z",
                "type": "info",
                "message": "成功下载: news (https://upstream.example.com/news.m3u)",
            }
        ]

    async def test_malformed_entries_are_skipped(self, kv):
        await kv.set_json(
            RedisKeys.ACTIVITY_LOG,
            [
                {"time": "2025-01-06T09:00:00.000Z", "type": "info", "message": "ok"},
                {"time": "garbage", "type": "info", "message": "bad time"},
                {"type": "warning", "message": "unknown type"},
            ],
        )
        repository = KVEventLogRepository(kv, LogEntryMapper())

        entries = await repository.list_recent()
        assert [e.message for e in entries] == ["ok"]


class TestActivityLogService:
    """ActivityLogService 测试。"""

    async def test_append_failure_is_swallowed(self, clock):
        """写日志失败不影响调用方。"""
        service = ActivityLogService(FailingEventLogRepository(), clock)

        await service.error("下载失败 news: HTTP 500")

        assert await service.list_recent() == []
