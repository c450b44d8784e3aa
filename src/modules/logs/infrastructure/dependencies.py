"""Activity log module dependencies."""

from fastapi import Depends

from src.core.application.dependencies import get_kv_client
from src.core.config import Settings, get_settings
from src.core.domain.ports.kv import KVClient
from src.modules.logs.infrastructure.mappers import LogEntryMapper
from src.modules.logs.infrastructure.repositories import KVEventLogRepository


def get_log_entry_mapper() -> LogEntryMapper:
    return LogEntryMapper()


async def get_event_log_repository(
    kv: KVClient = Depends(get_kv_client),
    mapper: LogEntryMapper = Depends(get_log_entry_mapper),
    settings: Settings = Depends(get_settings),
) -> KVEventLogRepository:
    return KVEventLogRepository(kv, mapper, max_entries=settings.LOG_MAX_ENTRIES)
