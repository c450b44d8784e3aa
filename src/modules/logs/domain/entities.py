"""Activity log domain entities."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class LogType(StrEnum):
    """活动日志类型。"""

    INFO = "info"
    ERROR = "error"


class LogEntry(BaseModel):
    """活动日志条目（管理后台可见）。"""

    model_config = ConfigDict(frozen=True)

    time: datetime = Field(..., description="记录时间（UTC）")
    type: LogType = Field(..., description="日志类型")
    message: str = Field(..., description="日志内容")
