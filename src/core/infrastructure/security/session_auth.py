"""Cookie session authentication dependency.

从请求 Cookie 中解析会话 id，交给 SessionManager 校验（并滑动续期）。
"""

from __future__ import annotations

from fastapi import Depends, Request

from src.core.application.security import AdminContext
from src.core.config import Settings, get_settings
from src.modules.auth.application.dependencies import get_session_manager
from src.modules.auth.application.session_service import SessionManager


async def get_current_admin(
    request: Request,
    session_manager: SessionManager = Depends(get_session_manager),
    settings: Settings = Depends(get_settings),
) -> AdminContext:
    """Resolve the admin context from the session cookie.

    Raises:
        SessionInvalidError (401) when the cookie is missing or the session is
        unknown, malformed or expired.
    """
    # request.cookies 按 ';' 分隔结构化解析，只取精确匹配的 cookie 名
    session_id = request.cookies.get(settings.SESSION_COOKIE_NAME)
    username = await session_manager.validate(session_id)
    return AdminContext(username=username, session_id=session_id)
