"""Source repository interfaces."""

from abc import ABC, abstractmethod
from datetime import datetime

from src.modules.sources.domain.entities import SourceRecord


class SourceCatalogRepository(ABC):
    """源目录：一个有序列表文档，整读整写，后写覆盖先写。"""

    @abstractmethod
    async def list_all(self) -> list[SourceRecord]:
        """Return all records in catalog order; empty when never written."""
        pass

    @abstractmethod
    async def get(self, directory_name: str) -> SourceRecord | None:
        """Get a record by directory name."""
        pass

    @abstractmethod
    async def add(self, record: SourceRecord) -> None:
        """Append a record.

        Raises:
            SourceAlreadyExistsError: directory name already present
        """
        pass

    @abstractmethod
    async def remove(self, directory_name: str) -> bool:
        """Remove a record; returns False when it was absent."""
        pass

    @abstractmethod
    async def touch_last_updated(self, directory_name: str, timestamp: datetime) -> bool:
        """Set last_updated in place; returns False (no-op) when absent."""
        pass


class ContentCacheRepository(ABC):
    """缓存内容，与源目录分开存储。"""

    @abstractmethod
    async def get(self, directory_name: str) -> str | None:
        pass

    @abstractmethod
    async def put(self, directory_name: str, content: str) -> None:
        pass

    @abstractmethod
    async def delete(self, directory_name: str) -> None:
        pass


class RefreshScheduleRepository(ABC):
    """刷新间隔与最近一次批量刷新时间。"""

    @abstractmethod
    async def get_interval_hours(self) -> int:
        """Return the persisted interval, or the default when absent."""
        pass

    @abstractmethod
    async def set_interval_hours(self, hours: int) -> None:
        pass

    @abstractmethod
    async def get_last_scheduled_check(self) -> datetime | None:
        pass

    @abstractmethod
    async def set_last_scheduled_check(self, timestamp: datetime) -> None:
        pass
