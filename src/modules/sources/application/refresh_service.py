"""播放列表刷新服务。

单个源的刷新流程：
1. 抓取 source_url
2. 成功：写入缓存内容 -> 更新 last_updated -> 记录 info 活动日志
3. 失败：记录一条 error 活动日志，last_updated 保持不变
4. 抓取期间源已被删除：删掉刚写入的缓存，返回 skipped，不写活动日志

任何失败（抓取或存储）都转换为 RefreshResult，不会向调用方抛出。
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from src.core.domain.clock import Clock, utc_now
from src.core.infrastructure.logging import BusinessEvents
from src.modules.logs.application.service import ActivityLogService
from src.modules.sources.domain.entities import SourceRecord
from src.modules.sources.domain.exceptions import SourceNotFoundError
from src.modules.sources.domain.fetcher import ContentFetcher
from src.modules.sources.domain.repository import (
    ContentCacheRepository,
    SourceCatalogRepository,
)


@dataclass(frozen=True)
class RefreshResult:
    """单次刷新结果。"""

    success: bool
    error_message: str | None = None
    # 抓取期间源被删除，已丢弃抓到的内容
    skipped: bool = False

    @classmethod
    def ok(cls) -> RefreshResult:
        return cls(success=True)

    @classmethod
    def failed(cls, error_message: str) -> RefreshResult:
        return cls(success=False, error_message=error_message)

    @classmethod
    def source_removed(cls) -> RefreshResult:
        return cls(success=False, skipped=True)


class RefreshService:
    """刷新单个源并更新缓存。"""

    def __init__(
        self,
        catalog: SourceCatalogRepository,
        content_cache: ContentCacheRepository,
        fetcher: ContentFetcher,
        activity_log: ActivityLogService,
        clock: Clock = utc_now,
    ):
        self.catalog = catalog
        self.content_cache = content_cache
        self.fetcher = fetcher
        self.activity_log = activity_log
        self.clock = clock
        self.logger = logger

    async def refresh(self, record: SourceRecord) -> RefreshResult:
        """刷新一个源。"""
        name = record.directory_name
        status_code: int | None = None

        try:
            fetch_result = await self.fetcher.fetch(record.source_url)
            status_code = fetch_result.status_code

            if fetch_result.is_success:
                content = fetch_result.content or ""
                await self.content_cache.put(name, content)
                if not await self.catalog.touch_last_updated(name, self.clock()):
                    # remove() 可能已先于 put 执行，删除后不能留下孤立内容
                    await self.content_cache.delete(name)
                    self.logger.info(
                        f"Source {name} was removed during refresh, discarded fetched content"
                    )
                    return RefreshResult.source_removed()

                BusinessEvents.source_refreshed(
                    directory_name=name,
                    bytes_cached=len(content.encode("utf-8")),
                    duration_ms=fetch_result.duration_ms,
                )
                await self.activity_log.info(f"成功下载: {name} ({record.source_url})")
                return RefreshResult.ok()

            error_message = fetch_result.error_message or "Unknown fetch error"
        except Exception as e:
            self.logger.exception(f"Refresh of source {name} failed: {e}")
            error_message = str(e) or type(e).__name__

        BusinessEvents.source_refresh_failed(
            directory_name=name,
            error=error_message,
            status_code=status_code,
        )
        await self.activity_log.error(f"下载失败 {name}: {error_message}")
        return RefreshResult.failed(error_message)

    async def refresh_by_name(self, directory_name: str) -> RefreshResult:
        """按目录名刷新。

        Raises:
            SourceNotFoundError: 源不存在（例如入队后已被删除）
        """
        record = await self.catalog.get(directory_name)
        if record is None:
            raise SourceNotFoundError(directory_name)
        return await self.refresh(record)
