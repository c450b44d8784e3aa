"""Activity log API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.modules.logs.domain.entities import LogType


class LogEntryResponse(BaseModel):
    """活动日志条目响应。"""

    time: datetime = Field(..., description="记录时间")
    type: LogType = Field(..., description="日志类型")
    message: str = Field(..., description="日志内容")
