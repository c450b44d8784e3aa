"""Auth module application dependencies.

Defines dependency providers for interfaces layer without importing infrastructure.
"""

from datetime import timedelta
from typing import NoReturn

from fastapi import Depends

from src.core.application.dependencies import get_clock
from src.core.config import Settings, get_settings
from src.core.domain.clock import Clock
from src.modules.auth.application.handlers import LoginHandler, LogoutHandler
from src.modules.auth.application.session_service import SessionManager
from src.modules.auth.domain.repository import AdminSessionRepository


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_admin_session_repository() -> AdminSessionRepository:
    _missing_dependency("AdminSessionRepository")


async def get_session_manager(
    repository: AdminSessionRepository = Depends(get_admin_session_repository),
    settings: Settings = Depends(get_settings),
    clock: Clock = Depends(get_clock),
) -> SessionManager:
    return SessionManager(
        repository,
        admin_username=settings.ADMIN_USERNAME,
        admin_password=settings.ADMIN_PASSWORD,
        ttl=timedelta(days=settings.SESSION_TTL_DAYS),
        clock=clock,
        id_bytes=settings.SESSION_ID_BYTES,
    )


async def get_login_handler(
    session_manager: SessionManager = Depends(get_session_manager),
) -> LoginHandler:
    return LoginHandler(session_manager)


async def get_logout_handler(
    session_manager: SessionManager = Depends(get_session_manager),
) -> LogoutHandler:
    return LogoutHandler(session_manager)
