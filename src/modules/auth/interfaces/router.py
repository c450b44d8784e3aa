"""Admin auth API routes."""

from fastapi import APIRouter, Depends, Request, Response, status

from src.core.application.security import AdminContext, get_current_admin
from src.core.config import Settings, get_settings
from src.core.interfaces.http.response import ApiResponse
from src.modules.auth.application.commands import LoginCommand, LogoutCommand
from src.modules.auth.application.dependencies import (
    get_login_handler,
    get_logout_handler,
)
from src.modules.auth.application.handlers import LoginHandler, LogoutHandler
from src.modules.auth.interfaces.schemas import (
    AdminResponse,
    LoginRequest,
    LogoutResponse,
)

router = APIRouter(tags=["auth"])


def _get_user_agent(request: Request) -> str | None:
    return request.headers.get("user-agent")


def _set_session_cookie(response: Response, session_id: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session_id,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="strict",
        path=settings.SESSION_COOKIE_PATH,
        max_age=settings.session_ttl_seconds,
    )


def _clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path=settings.SESSION_COOKIE_PATH,
        samesite="strict",
        secure=settings.SESSION_COOKIE_SECURE,
        httponly=True,
    )


@router.post(
    "/login",
    response_model=ApiResponse[AdminResponse],
    status_code=status.HTTP_200_OK,
    summary="管理员登录",
    description="校验用户名密码，成功后通过 Cookie 下发会话",
)
async def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    handler: LoginHandler = Depends(get_login_handler),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[AdminResponse]:
    """Admin login."""
    command = LoginCommand(
        username=body.username,
        password=body.password,
        user_agent=_get_user_agent(request),
    )
    session_id = await handler.handle(command)
    _set_session_cookie(response, session_id, settings)
    return ApiResponse.success(
        data=AdminResponse(username=body.username), message="Login successful"
    )


@router.api_route(
    "/logout",
    methods=["GET", "POST"],
    response_model=ApiResponse[LogoutResponse],
    summary="退出登录",
    description="删除服务端会话并清除 Cookie",
)
async def logout(
    request: Request,
    response: Response,
    handler: LogoutHandler = Depends(get_logout_handler),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[LogoutResponse]:
    """Admin logout."""
    session_id = request.cookies.get(settings.SESSION_COOKIE_NAME)
    await handler.handle(LogoutCommand(session_id=session_id))
    _clear_session_cookie(response, settings)
    return ApiResponse.success(data=LogoutResponse(), message="Logged out")


@router.get(
    "/me",
    response_model=ApiResponse[AdminResponse],
    summary="当前管理员",
)
async def get_me(
    admin: AdminContext = Depends(get_current_admin),
) -> ApiResponse[AdminResponse]:
    """Return the admin bound to the current session."""
    return ApiResponse.success(data=AdminResponse(username=admin.username))
