"""Auth API schemas."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Admin login request."""

    username: str = Field(..., description="用户名")
    password: str = Field(..., description="密码")


class AdminResponse(BaseModel):
    """Current admin response."""

    username: str = Field(..., description="用户名")


class LogoutResponse(BaseModel):
    """Logout response."""

    ok: bool = True
