"""Auth commands."""

from pydantic import BaseModel, Field


class LoginCommand(BaseModel):
    """Admin login command."""

    username: str
    password: str
    user_agent: str | None = Field(default=None, max_length=512)


class LogoutCommand(BaseModel):
    """Admin logout command."""

    session_id: str | None = None
