"""Admin session domain entities."""

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field


class AdminSession(BaseModel):
    """管理员会话。

    会话采用滑动过期：每次校验成功都会把 login_time 重置为当前时间。
    """

    model_config = ConfigDict(frozen=True)

    username: str = Field(..., description="管理员用户名")
    login_time: datetime = Field(..., description="最近一次登录或校验时间（UTC）")
    user_agent: str | None = Field(default=None, description="登录时的 User-Agent")

    def is_expired(self, now: datetime, ttl: timedelta) -> bool:
        """距最近一次活动超过 ttl 即视为过期（恰好等于 ttl 时仍有效）。"""
        return now - self.login_time > ttl

    def touched(self, now: datetime) -> "AdminSession":
        """返回 login_time 更新为 now 的新会话。"""
        return self.model_copy(update={"login_time": now})
