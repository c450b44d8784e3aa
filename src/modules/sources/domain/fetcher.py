"""Fetcher domain interfaces and models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol


class FetchStatus(str, Enum):
    """抓取状态枚举。"""

    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class FetchResult:
    """抓取结果封装。"""

    status: FetchStatus
    content: str | None = None
    status_code: int | None = None
    error_message: str | None = None
    duration_ms: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.status == FetchStatus.SUCCESS

    @classmethod
    def success(
        cls,
        content: str,
        status_code: int = 200,
        duration_ms: int = 0,
        metadata: dict[str, Any] | None = None,
    ) -> "FetchResult":
        return cls(
            status=FetchStatus.SUCCESS,
            content=content,
            status_code=status_code,
            duration_ms=duration_ms,
            metadata=metadata or {},
        )

    @classmethod
    def failed(
        cls,
        error_message: str,
        status_code: int | None = None,
        duration_ms: int = 0,
        metadata: dict[str, Any] | None = None,
    ) -> "FetchResult":
        return cls(
            status=FetchStatus.FAILED,
            status_code=status_code,
            error_message=error_message,
            duration_ms=duration_ms,
            metadata=metadata or {},
        )


class ContentFetcher(Protocol):
    """按 URL 获取原始文本内容；失败以 FetchResult.failed 返回，不抛异常。"""

    async def fetch(self, url: str) -> FetchResult: ...
