"""Admin session entity-document mappers."""

from datetime import UTC, datetime

from src.core.infrastructure.mapper import BaseMapper, Document
from src.modules.auth.domain.entities import AdminSession


class AdminSessionMapper(BaseMapper[AdminSession]):
    """AdminSession <-> {"username", "loginTime" (epoch ms), "userAgent"}."""

    def to_domain(self, document: Document) -> AdminSession:
        return AdminSession(
            username=document["username"],
            login_time=datetime.fromtimestamp(int(document["loginTime"]) / 1000, UTC),
            user_agent=document.get("userAgent"),
        )

    def to_document(self, entity: AdminSession) -> Document:
        return {
            "username": entity.username,
            "loginTime": int(entity.login_time.timestamp() * 1000),
            "userAgent": entity.user_agent,
        }
