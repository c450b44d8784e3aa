"""Refresh queue adapter."""

from src.modules.sources.domain.ports import RefreshQueue
from src.modules.sources.tasks import refresh_source, run_scheduled_refresh


class CeleryRefreshQueue(RefreshQueue):
    """Celery-backed refresh queue."""

    async def enqueue_refresh(self, directory_name: str) -> None:
        refresh_source.delay(directory_name=directory_name)

    async def enqueue_batch(self) -> None:
        run_scheduled_refresh.delay()
