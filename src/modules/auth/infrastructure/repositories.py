"""Admin session repository implementation (KV-backed)."""

from loguru import logger

from src.core.domain.ports.kv import KVClient
from src.core.infrastructure.redis.keys import RedisKeys
from src.modules.auth.domain.entities import AdminSession
from src.modules.auth.domain.repository import AdminSessionRepository
from src.modules.auth.infrastructure.mappers import AdminSessionMapper


class KVAdminSessionRepository(AdminSessionRepository):
    """每个会话一个 key：admin_session_{session_id}，过期由存储层 TTL 兜底。"""

    def __init__(self, kv: KVClient, mapper: AdminSessionMapper):
        self.kv = kv
        self.mapper = mapper

    async def get(self, session_id: str) -> AdminSession | None:
        key = RedisKeys.session(session_id)
        try:
            document = await self.kv.get_json(key)
        except ValueError as e:
            logger.warning(f"Discarding undecodable admin session record: {e}")
            await self.kv.delete(key)
            return None
        if document is None:
            return None
        try:
            return self.mapper.to_domain(document)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Discarding malformed admin session record: {e}")
            await self.kv.delete(key)
            return None

    async def save(
        self, session_id: str, session: AdminSession, ttl_seconds: int
    ) -> None:
        await self.kv.set_json(
            RedisKeys.session(session_id),
            self.mapper.to_document(session),
            ex=ttl_seconds,
        )

    async def delete(self, session_id: str) -> None:
        await self.kv.delete(RedisKeys.session(session_id))
