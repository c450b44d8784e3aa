"""Admin session repository interface."""

from abc import ABC, abstractmethod

from src.modules.auth.domain.entities import AdminSession


class AdminSessionRepository(ABC):
    """会话存储，记录带有存储层 TTL。"""

    @abstractmethod
    async def get(self, session_id: str) -> AdminSession | None:
        """Get a session by id; undecodable records are treated as absent."""
        pass

    @abstractmethod
    async def save(
        self, session_id: str, session: AdminSession, ttl_seconds: int
    ) -> None:
        """Create or overwrite a session, resetting its TTL."""
        pass

    @abstractmethod
    async def delete(self, session_id: str) -> None:
        """Delete a session. Idempotent."""
        pass
