"""Auth command handlers."""

from loguru import logger

from src.modules.auth.application.commands import LoginCommand, LogoutCommand
from src.modules.auth.application.session_service import SessionManager


class LoginHandler:
    """Handler for admin login."""

    def __init__(self, session_manager: SessionManager):
        self.session_manager = session_manager
        self.logger = logger

    async def handle(self, command: LoginCommand) -> str:
        session_id = await self.session_manager.login(
            command.username, command.password, command.user_agent
        )
        self.logger.info(f"Admin logged in: {command.username}")
        return session_id


class LogoutHandler:
    """Handler for admin logout."""

    def __init__(self, session_manager: SessionManager):
        self.session_manager = session_manager
        self.logger = logger

    async def handle(self, command: LogoutCommand) -> None:
        await self.session_manager.logout(command.session_id)
