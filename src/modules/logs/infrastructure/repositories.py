"""Activity log repository implementation (KV-backed)."""

from loguru import logger

from src.core.domain.ports.kv import KVClient
from src.core.infrastructure.redis.keys import RedisKeys
from src.modules.logs.domain.entities import LogEntry
from src.modules.logs.domain.repository import EventLogRepository
from src.modules.logs.infrastructure.mappers import LogEntryMapper


class KVEventLogRepository(EventLogRepository):
    """活动日志存储为单个 JSON 列表文档，整读整写，后写覆盖先写。"""

    def __init__(self, kv: KVClient, mapper: LogEntryMapper, max_entries: int = 100):
        self.kv = kv
        self.mapper = mapper
        self.max_entries = max_entries

    async def _load_documents(self) -> list[dict]:
        documents = await self.kv.get_json(RedisKeys.ACTIVITY_LOG)
        if not isinstance(documents, list):
            return []
        return documents

    async def append(self, entry: LogEntry) -> None:
        documents = await self._load_documents()
        documents.insert(0, self.mapper.to_document(entry))
        await self.kv.set_json(RedisKeys.ACTIVITY_LOG, documents[: self.max_entries])

    async def list_recent(self) -> list[LogEntry]:
        entries: list[LogEntry] = []
        for document in await self._load_documents():
            try:
                entries.append(self.mapper.to_domain(document))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed activity log entry: {e}")
        return entries[: self.max_entries]
