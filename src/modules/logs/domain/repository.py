"""Activity log repository interface."""

from abc import ABC, abstractmethod

from src.modules.logs.domain.entities import LogEntry


class EventLogRepository(ABC):
    """有界的活动日志存储，最新条目在前。"""

    @abstractmethod
    async def append(self, entry: LogEntry) -> None:
        """Prepend an entry, dropping the oldest beyond the cap."""
        pass

    @abstractmethod
    async def list_recent(self) -> list[LogEntry]:
        """Return all retained entries, newest first."""
        pass
