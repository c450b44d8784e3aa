"""Activity log entity-document mappers."""

from src.core.domain.clock import parse_iso, to_iso
from src.core.infrastructure.mapper import BaseMapper, Document
from src.modules.logs.domain.entities import LogEntry, LogType


class LogEntryMapper(BaseMapper[LogEntry]):
    """LogEntry <-> {"time", "type", "message"}."""

    def to_domain(self, document: Document) -> LogEntry:
        return LogEntry(
            time=parse_iso(document["time"]),
            type=LogType(document["type"]),
            message=document["message"],
        )

    def to_document(self, entity: LogEntry) -> Document:
        return {
            "time": to_iso(entity.time),
            "type": entity.type.value,
            "message": entity.message,
        }
