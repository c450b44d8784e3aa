"""Auth module dependencies."""

from fastapi import Depends

from src.core.application.dependencies import get_kv_client
from src.core.domain.ports.kv import KVClient
from src.modules.auth.infrastructure.mappers import AdminSessionMapper
from src.modules.auth.infrastructure.repositories import KVAdminSessionRepository


def get_admin_session_mapper() -> AdminSessionMapper:
    return AdminSessionMapper()


async def get_admin_session_repository(
    kv: KVClient = Depends(get_kv_client),
    mapper: AdminSessionMapper = Depends(get_admin_session_mapper),
) -> KVAdminSessionRepository:
    return KVAdminSessionRepository(kv, mapper)
