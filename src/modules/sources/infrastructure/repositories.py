"""Source repository implementations (KV-backed)."""

from datetime import datetime

from loguru import logger

from src.core.domain.clock import parse_iso, to_iso
from src.core.domain.ports.kv import KVClient
from src.core.infrastructure.mapper import Document
from src.core.infrastructure.redis.keys import RedisKeys
from src.modules.sources.domain.entities import SourceRecord
from src.modules.sources.domain.exceptions import SourceAlreadyExistsError
from src.modules.sources.domain.repository import (
    ContentCacheRepository,
    RefreshScheduleRepository,
    SourceCatalogRepository,
)
from src.modules.sources.infrastructure.mappers import SourceRecordMapper


def _is_entry_for(document: object, directory_name: str) -> bool:
    return (
        isinstance(document, dict)
        and document.get("directoryName") == directory_name
    )


class KVSourceCatalogRepository(SourceCatalogRepository):
    """源目录存储为 iptv_configs 下的单个 JSON 列表。

    写操作直接在原始文档上修改后整体写回，无法解析的条目原样保留。
    """

    def __init__(
        self,
        kv: KVClient,
        mapper: SourceRecordMapper,
        content_cache: ContentCacheRepository,
    ):
        self.kv = kv
        self.mapper = mapper
        self.content_cache = content_cache

    async def _load_documents(self) -> list[Document]:
        documents = await self.kv.get_json(RedisKeys.SOURCE_CATALOG)
        if not isinstance(documents, list):
            return []
        return documents

    async def _save_documents(self, documents: list[Document]) -> None:
        await self.kv.set_json(RedisKeys.SOURCE_CATALOG, documents)

    async def list_all(self) -> list[SourceRecord]:
        records: list[SourceRecord] = []
        for document in await self._load_documents():
            try:
                records.append(self.mapper.to_domain(document))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed catalog entry {document!r}: {e}")
        return records

    async def get(self, directory_name: str) -> SourceRecord | None:
        for record in await self.list_all():
            if record.directory_name == directory_name:
                return record
        return None

    async def add(self, record: SourceRecord) -> None:
        documents = await self._load_documents()
        if any(_is_entry_for(doc, record.directory_name) for doc in documents):
            raise SourceAlreadyExistsError(record.directory_name)
        documents.append(self.mapper.to_document(record))
        await self._save_documents(documents)

    async def remove(self, directory_name: str) -> bool:
        documents = await self._load_documents()
        remaining = [
            doc for doc in documents if not _is_entry_for(doc, directory_name)
        ]
        if len(remaining) == len(documents):
            return False
        await self._save_documents(remaining)
        await self.content_cache.delete(directory_name)
        return True

    async def touch_last_updated(self, directory_name: str, timestamp: datetime) -> bool:
        documents = await self._load_documents()
        for document in documents:
            if _is_entry_for(document, directory_name):
                document["lastUpdated"] = to_iso(timestamp)
                await self._save_documents(documents)
                return True
        logger.warning(
            f"Source {directory_name} vanished from catalog before lastUpdated could be set"
        )
        return False


class KVContentCacheRepository(ContentCacheRepository):
    """缓存内容存储为 file_{directory_name}。"""

    def __init__(self, kv: KVClient):
        self.kv = kv

    async def get(self, directory_name: str) -> str | None:
        return await self.kv.get(RedisKeys.content(directory_name))

    async def put(self, directory_name: str, content: str) -> None:
        await self.kv.set(RedisKeys.content(directory_name), content)

    async def delete(self, directory_name: str) -> None:
        await self.kv.delete(RedisKeys.content(directory_name))


class KVRefreshScheduleRepository(RefreshScheduleRepository):
    """刷新间隔（download_interval）与 last_scheduled_check。"""

    def __init__(self, kv: KVClient, default_interval_hours: int = 24):
        self.kv = kv
        self.default_interval_hours = default_interval_hours

    async def get_interval_hours(self) -> int:
        value = await self.kv.get(RedisKeys.REFRESH_INTERVAL)
        if value is None:
            return self.default_interval_hours
        try:
            hours = int(value)
        except ValueError:
            logger.warning(f"Unparsable refresh interval {value!r}, using default")
            return self.default_interval_hours
        if hours < 1:
            logger.warning(f"Out-of-range refresh interval {hours}, using default")
            return self.default_interval_hours
        return hours

    async def set_interval_hours(self, hours: int) -> None:
        await self.kv.set(RedisKeys.REFRESH_INTERVAL, str(hours))

    async def get_last_scheduled_check(self) -> datetime | None:
        value = await self.kv.get(RedisKeys.LAST_SCHEDULED_CHECK)
        if not value:
            return None
        try:
            return parse_iso(value)
        except ValueError:
            logger.warning(f"Unparsable last_scheduled_check {value!r}")
            return None

    async def set_last_scheduled_check(self, timestamp: datetime) -> None:
        await self.kv.set(RedisKeys.LAST_SCHEDULED_CHECK, to_iso(timestamp))
