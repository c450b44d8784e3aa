"""Clock abstraction.

所有需要“当前时间”的组件都通过构造参数注入 Clock，便于测试中固定时间。
"""

from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """返回带时区的当前 UTC 时间。"""
    return datetime.now(UTC)


def to_iso(value: datetime) -> str:
    """序列化为 ISO-8601 字符串（UTC，毫秒精度，Z 结尾）。"""
    return (
        value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    )


def parse_iso(value: str) -> datetime:
    """解析 ISO-8601 字符串，无时区时视为 UTC。"""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
