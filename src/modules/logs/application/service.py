"""活动日志服务。

写日志是“尽力而为”：追加失败只记录进程日志，不影响调用方的主流程。
"""

from loguru import logger

from src.core.domain.clock import Clock, utc_now
from src.modules.logs.domain.entities import LogEntry, LogType
from src.modules.logs.domain.repository import EventLogRepository


class ActivityLogService:
    """活动日志的写入与查询。"""

    def __init__(self, repository: EventLogRepository, clock: Clock = utc_now):
        self.repository = repository
        self.clock = clock
        self.logger = logger

    async def record(self, log_type: LogType, message: str) -> None:
        """追加一条活动日志，失败时吞掉异常。"""
        entry = LogEntry(time=self.clock(), type=log_type, message=message)
        try:
            await self.repository.append(entry)
        except Exception as e:
            self.logger.warning(f"Failed to append activity log ({log_type}): {e}")

    async def info(self, message: str) -> None:
        await self.record(LogType.INFO, message)

    async def error(self, message: str) -> None:
        await self.record(LogType.ERROR, message)

    async def list_recent(self) -> list[LogEntry]:
        return await self.repository.list_recent()
