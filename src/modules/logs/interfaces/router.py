"""Activity log API routes."""

from fastapi import APIRouter, Depends

from src.core.application.security import AdminContext, get_current_admin
from src.core.interfaces.http.response import ApiResponse
from src.modules.logs.application.dependencies import get_activity_log_service
from src.modules.logs.application.service import ActivityLogService
from src.modules.logs.interfaces.schemas import LogEntryResponse

router = APIRouter(prefix="/api/logs", tags=["logs"])


@router.get("", response_model=ApiResponse[list[LogEntryResponse]])
async def list_logs(
    _admin: AdminContext = Depends(get_current_admin),
    service: ActivityLogService = Depends(get_activity_log_service),
) -> ApiResponse[list[LogEntryResponse]]:
    """获取最近的活动日志（最新在前，最多 100 条）。"""
    entries = await service.list_recent()
    return ApiResponse.success(
        data=[LogEntryResponse.model_validate(entry.model_dump()) for entry in entries]
    )
