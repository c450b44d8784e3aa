"""Activity log module application dependencies."""

from typing import NoReturn

from fastapi import Depends

from src.core.application.dependencies import get_clock
from src.core.domain.clock import Clock
from src.modules.logs.application.service import ActivityLogService
from src.modules.logs.domain.repository import EventLogRepository


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_event_log_repository() -> EventLogRepository:
    _missing_dependency("EventLogRepository")


async def get_activity_log_service(
    repository: EventLogRepository = Depends(get_event_log_repository),
    clock: Clock = Depends(get_clock),
) -> ActivityLogService:
    return ActivityLogService(repository, clock)
