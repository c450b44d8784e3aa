"""Source entity-document mappers."""

from src.core.domain.clock import parse_iso, to_iso
from src.core.infrastructure.mapper import BaseMapper, Document
from src.modules.sources.domain.entities import SourceRecord


class SourceRecordMapper(BaseMapper[SourceRecord]):
    """SourceRecord <-> {"directoryName", "sourceUrl", "extension", "created", "lastUpdated"}."""

    def to_domain(self, document: Document) -> SourceRecord:
        last_updated = document.get("lastUpdated")
        return SourceRecord(
            directory_name=document["directoryName"],
            source_url=document["sourceUrl"],
            extension=document["extension"],
            created=parse_iso(document["created"]),
            last_updated=parse_iso(last_updated) if last_updated else None,
        )

    def to_document(self, entity: SourceRecord) -> Document:
        return {
            "directoryName": entity.directory_name,
            "sourceUrl": entity.source_url,
            "extension": entity.extension,
            "created": to_iso(entity.created),
            "lastUpdated": to_iso(entity.last_updated) if entity.last_updated else None,
        }
