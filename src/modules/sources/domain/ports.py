"""Source domain ports."""

from typing import Protocol


class RefreshQueue(Protocol):
    """Fire-and-forget refresh dispatch; callers get no handle back."""

    async def enqueue_refresh(self, directory_name: str) -> None: ...

    async def enqueue_batch(self) -> None: ...
