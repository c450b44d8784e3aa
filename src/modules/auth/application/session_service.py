"""Admin session management.

单一管理员账号 + 服务端会话：
- login: 常量时间比较凭据，签发随机 session id
- validate: 校验并滑动续期
- logout: 删除会话（幂等）
"""

from __future__ import annotations

import hmac
import re
import secrets
from datetime import timedelta

from loguru import logger

from src.core.domain.clock import Clock, utc_now
from src.core.infrastructure.logging import BusinessEvents
from src.modules.auth.domain.entities import AdminSession
from src.modules.auth.domain.exceptions import (
    InvalidCredentialsError,
    SessionInvalidError,
)
from src.modules.auth.domain.repository import AdminSessionRepository

# token_urlsafe 的字母表；长度上限防止超长 key 写入存储
SESSION_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{16,128}")


def generate_session_id(nbytes: int = 32) -> str:
    """Generate a URL-safe random session id."""
    return secrets.token_urlsafe(nbytes)


def is_well_formed_session_id(session_id: str | None) -> bool:
    return bool(session_id) and SESSION_ID_PATTERN.fullmatch(session_id) is not None


def _secure_equals(left: str, right: str) -> bool:
    return hmac.compare_digest(left.encode("utf-8"), right.encode("utf-8"))


class SessionManager:
    """管理员会话的签发、校验与注销。"""

    def __init__(
        self,
        repository: AdminSessionRepository,
        *,
        admin_username: str,
        admin_password: str,
        ttl: timedelta = timedelta(days=7),
        clock: Clock = utc_now,
        id_bytes: int = 32,
    ):
        self.repository = repository
        self.admin_username = admin_username
        self.admin_password = admin_password
        self.ttl = ttl
        self.clock = clock
        self.id_bytes = id_bytes
        self.logger = logger

    @property
    def ttl_seconds(self) -> int:
        return int(self.ttl.total_seconds())

    async def login(
        self, username: str, password: str, user_agent: str | None = None
    ) -> str:
        """校验凭据并创建会话，返回 session id。

        Raises:
            InvalidCredentialsError: 用户名或密码不匹配
        """
        # 两项都要比较，避免通过耗时区分是哪一项错误
        username_ok = _secure_equals(username, self.admin_username)
        password_ok = _secure_equals(password, self.admin_password)
        if not (username_ok and password_ok):
            BusinessEvents.admin_login_failed(user_agent=user_agent)
            raise InvalidCredentialsError()

        session_id = generate_session_id(self.id_bytes)
        session = AdminSession(
            username=username,
            login_time=self.clock(),
            user_agent=user_agent,
        )
        await self.repository.save(session_id, session, self.ttl_seconds)

        BusinessEvents.admin_login_succeeded(username=username, user_agent=user_agent)
        return session_id

    async def validate(self, session_id: str | None) -> str:
        """校验会话并滑动续期，返回用户名。

        Raises:
            SessionInvalidError: 会话缺失、格式错误、不存在或已过期
        """
        if not is_well_formed_session_id(session_id):
            raise SessionInvalidError()

        session = await self.repository.get(session_id)
        if session is None:
            raise SessionInvalidError()

        now = self.clock()
        if session.is_expired(now, self.ttl):
            await self.repository.delete(session_id)
            BusinessEvents.admin_session_expired(username=session.username)
            raise SessionInvalidError()

        await self.repository.save(session_id, session.touched(now), self.ttl_seconds)
        return session.username

    async def logout(self, session_id: str | None) -> None:
        """删除会话；会话不存在或格式错误时静默返回。"""
        if not is_well_formed_session_id(session_id):
            return
        await self.repository.delete(session_id)
        BusinessEvents.admin_logged_out()
