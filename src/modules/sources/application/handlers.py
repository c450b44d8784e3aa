"""Source command handlers."""

from loguru import logger

from src.core.domain.clock import Clock, utc_now
from src.core.infrastructure.logging import BusinessEvents
from src.modules.logs.application.service import ActivityLogService
from src.modules.sources.application.commands import (
    CreateSourceCommand,
    DeleteSourceCommand,
    RefreshAllCommand,
    RefreshSourceCommand,
    UpdateIntervalCommand,
)
from src.modules.sources.domain.entities import SourceRecord
from src.modules.sources.domain.exceptions import (
    InvalidIntervalError,
    InvalidSourceError,
    SourceNotFoundError,
)
from src.modules.sources.domain.ports import RefreshQueue
from src.modules.sources.domain.repository import (
    RefreshScheduleRepository,
    SourceCatalogRepository,
)


def _normalize_extension(extension: str) -> str:
    return extension.strip().lstrip(".").lower()


def validate_create_command(command: CreateSourceCommand) -> tuple[str, str, str]:
    """校验并规整新增源的输入，返回 (directory_name, source_url, extension)。

    Raises:
        InvalidSourceError: 任一字段缺失或为空，或目录名包含 '/'
    """
    directory_name = (command.directory_name or "").strip()
    source_url = (command.source_url or "").strip()
    extension = _normalize_extension(command.extension or "")

    if not directory_name or not source_url or not extension:
        raise InvalidSourceError(
            "directoryName, sourceUrl and extension are all required"
        )
    if "/" in directory_name:
        raise InvalidSourceError("directoryName must not contain '/'")
    if "/" in extension:
        raise InvalidSourceError("extension must not contain '/'")
    return directory_name, source_url, extension


class CreateSourceHandler:
    """Handle source creation."""

    def __init__(
        self,
        catalog: SourceCatalogRepository,
        activity_log: ActivityLogService,
        clock: Clock = utc_now,
    ):
        self.catalog = catalog
        self.activity_log = activity_log
        self.clock = clock
        self.logger = logger

    async def handle(self, command: CreateSourceCommand) -> SourceRecord:
        """Create a new source."""
        directory_name, source_url, extension = validate_create_command(command)

        record = SourceRecord(
            directory_name=directory_name,
            source_url=source_url,
            extension=extension,
            created=self.clock(),
            last_updated=None,
        )
        # 重名检查在存储层的读改写内完成
        await self.catalog.add(record)

        self.logger.info(f"Created source: {directory_name} ({source_url})")
        BusinessEvents.source_created(directory_name=directory_name, source_url=source_url)
        await self.activity_log.info(f"添加新配置: {directory_name}")
        return record


class DeleteSourceHandler:
    """Handle source deletion (catalog entry and cached content)."""

    def __init__(self, catalog: SourceCatalogRepository, activity_log: ActivityLogService):
        self.catalog = catalog
        self.activity_log = activity_log
        self.logger = logger

    async def handle(self, command: DeleteSourceCommand) -> None:
        """Delete a source."""
        removed = await self.catalog.remove(command.directory_name)
        if not removed:
            raise SourceNotFoundError(command.directory_name)

        self.logger.info(f"Deleted source: {command.directory_name}")
        BusinessEvents.source_deleted(directory_name=command.directory_name)
        await self.activity_log.info(f"删除配置: {command.directory_name}")


class RefreshSourceHandler:
    """Enqueue a fire-and-forget refresh for one source."""

    def __init__(self, catalog: SourceCatalogRepository, refresh_queue: RefreshQueue):
        self.catalog = catalog
        self.refresh_queue = refresh_queue
        self.logger = logger

    async def handle(self, command: RefreshSourceCommand) -> SourceRecord:
        record = await self.catalog.get(command.directory_name)
        if record is None:
            raise SourceNotFoundError(command.directory_name)

        await self.refresh_queue.enqueue_refresh(record.directory_name)
        self.logger.info(f"Enqueued refresh for source: {record.directory_name}")
        return record


class RefreshAllHandler:
    """Enqueue a fire-and-forget scheduled batch run."""

    def __init__(self, refresh_queue: RefreshQueue):
        self.refresh_queue = refresh_queue
        self.logger = logger

    async def handle(self, _command: RefreshAllCommand) -> None:
        await self.refresh_queue.enqueue_batch()
        self.logger.info("Enqueued scheduled refresh batch")


class UpdateIntervalHandler:
    """Handle refresh interval updates."""

    def __init__(
        self,
        schedule: RefreshScheduleRepository,
        activity_log: ActivityLogService,
    ):
        self.schedule = schedule
        self.activity_log = activity_log
        self.logger = logger

    async def handle(self, command: UpdateIntervalCommand) -> int:
        if command.hours < 1:
            raise InvalidIntervalError(command.hours)

        await self.schedule.set_interval_hours(command.hours)
        self.logger.info(f"Refresh interval set to {command.hours}h")
        await self.activity_log.info(f"更新刷新间隔: {command.hours} 小时")
        return command.hours
