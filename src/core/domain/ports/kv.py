"""Key-value store port.

所有持久化都经过这一接口：字符串值、可选 TTL、JSON 便捷方法。
"""

from datetime import timedelta
from typing import Any, Protocol


class KVClient(Protocol):
    async def ping(self, timeout: float | None = None) -> None:
        """Raise when the store is unreachable."""

    async def get(self, key: str) -> str | None: ...

    async def set(
        self,
        key: str,
        value: str,
        ex: int | timedelta | None = None,
    ) -> bool: ...

    async def delete(self, *keys: str) -> int: ...

    async def get_json(self, key: str) -> Any | None: ...

    async def set_json(
        self,
        key: str,
        value: Any,
        ex: int | timedelta | None = None,
    ) -> bool: ...
