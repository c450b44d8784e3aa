"""定时批量刷新。

run_once 读取一次源目录快照，按目录顺序串行刷新，每两个源之间固定停顿。
单个源失败不影响后续源，运行之间不保留失败状态。
快照中的源若在运行期间被删除，计入 skipped，不会留下缓存内容。
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from loguru import logger

from src.core.domain.clock import Clock, utc_now
from src.core.infrastructure.logging import BusinessEvents
from src.modules.sources.application.refresh_service import RefreshService
from src.modules.sources.domain.repository import (
    RefreshScheduleRepository,
    SourceCatalogRepository,
)

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class BatchRunSummary:
    """一次批量刷新的统计。"""

    started_at: datetime
    total: int
    succeeded: int
    failed: int
    interval_hours: int
    skipped: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            "started_at": self.started_at.isoformat(),
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "interval_hours": self.interval_hours,
            "skipped": self.skipped,
        }


class ScheduledRefreshJob:
    """定时批量刷新任务。"""

    def __init__(
        self,
        catalog: SourceCatalogRepository,
        schedule: RefreshScheduleRepository,
        refresh_service: RefreshService,
        *,
        pacing_sec: float = 1.0,
        clock: Clock = utc_now,
        sleep: Sleep = asyncio.sleep,
    ):
        self.catalog = catalog
        self.schedule = schedule
        self.refresh_service = refresh_service
        self.pacing_sec = pacing_sec
        self.clock = clock
        self.sleep = sleep
        self.logger = logger

    async def is_due(self) -> bool:
        """距上次批量刷新开始是否已超过刷新间隔（从未运行过视为到期）。"""
        last_check = await self.schedule.get_last_scheduled_check()
        if last_check is None:
            return True
        interval_hours = await self.schedule.get_interval_hours()
        return self.clock() - last_check >= timedelta(hours=interval_hours)

    async def run_once(self) -> BatchRunSummary:
        """执行一次批量刷新。"""
        records = await self.catalog.list_all()
        # 间隔只用于日志与调度判断，本方法本身从不跳过
        interval_hours = await self.schedule.get_interval_hours()

        started_at = self.clock()
        await self.schedule.set_last_scheduled_check(started_at)

        self.logger.info(f"Scheduled refresh started: {len(records)} sources")
        BusinessEvents.scheduled_refresh_started(
            total=len(records), interval_hours=interval_hours
        )

        succeeded = 0
        failed = 0
        skipped = 0
        for index, record in enumerate(records):
            if index > 0:
                await self.sleep(self.pacing_sec)
            result = await self.refresh_service.refresh(record)
            if result.success:
                succeeded += 1
            elif result.skipped:
                skipped += 1
            else:
                failed += 1

        summary = BatchRunSummary(
            started_at=started_at,
            total=len(records),
            succeeded=succeeded,
            failed=failed,
            interval_hours=interval_hours,
            skipped=skipped,
        )
        self.logger.info(
            f"Scheduled refresh completed: {succeeded} ok, {failed} failed, "
            f"{skipped} removed mid-run"
        )
        BusinessEvents.scheduled_refresh_completed(
            total=summary.total, succeeded=succeeded, failed=failed
        )
        return summary
