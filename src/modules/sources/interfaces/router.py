"""Source admin API routes."""

from fastapi import APIRouter, Depends, status

from src.core.application.security import AdminContext, get_current_admin
from src.core.interfaces.http.response import ApiResponse
from src.modules.sources.application.commands import (
    CreateSourceCommand,
    DeleteSourceCommand,
    RefreshAllCommand,
    RefreshSourceCommand,
    UpdateIntervalCommand,
)
from src.modules.sources.application.dependencies import (
    get_create_source_handler,
    get_delete_source_handler,
    get_refresh_all_handler,
    get_refresh_source_handler,
    get_source_query_service,
    get_update_interval_handler,
)
from src.modules.sources.application.handlers import (
    CreateSourceHandler,
    DeleteSourceHandler,
    RefreshAllHandler,
    RefreshSourceHandler,
    UpdateIntervalHandler,
)
from src.modules.sources.application.models import SourceData
from src.modules.sources.application.services import SourceQueryService
from src.modules.sources.interfaces.schemas import (
    CatalogStatusResponse,
    CreateSourceRequest,
    IntervalRequest,
    IntervalResponse,
    RefreshAcceptedResponse,
    SourceResponse,
)

# 所有接口都需要管理员会话
router = APIRouter(
    prefix="/api",
    tags=["sources"],
    dependencies=[Depends(get_current_admin)],
)


def _to_source_response(source: SourceData) -> SourceResponse:
    return SourceResponse.model_validate(source.model_dump())


@router.get(
    "/configs",
    response_model=ApiResponse[list[SourceResponse]],
    summary="获取源列表",
)
async def list_sources(
    service: SourceQueryService = Depends(get_source_query_service),
) -> ApiResponse[list[SourceResponse]]:
    """List all sources in catalog order."""
    sources = await service.list_sources()
    return ApiResponse.success(data=[_to_source_response(s) for s in sources])


@router.post(
    "/configs",
    response_model=ApiResponse[SourceResponse],
    status_code=status.HTTP_201_CREATED,
    summary="新增源",
    description="目录名必须唯一；新源的 lastUpdated 为空，需等待刷新",
)
async def create_source(
    request: CreateSourceRequest,
    handler: CreateSourceHandler = Depends(get_create_source_handler),
) -> ApiResponse[SourceResponse]:
    """Create a new source."""
    command = CreateSourceCommand(
        directory_name=request.directory_name,
        source_url=request.source_url,
        extension=request.extension,
    )
    record = await handler.handle(command)
    return ApiResponse.success(
        data=_to_source_response(SourceQueryService.build_source_data(record)),
        message="Source created",
        code=201,
    )


@router.delete(
    "/configs/{directory_name}",
    response_model=ApiResponse[None],
    summary="删除源",
    description="同时删除该源的缓存内容",
)
async def delete_source(
    directory_name: str,
    handler: DeleteSourceHandler = Depends(get_delete_source_handler),
) -> ApiResponse[None]:
    """Delete a source."""
    await handler.handle(DeleteSourceCommand(directory_name=directory_name))
    return ApiResponse.success(message="Source deleted")


@router.post(
    "/update/{directory_name}",
    response_model=ApiResponse[RefreshAcceptedResponse],
    status_code=status.HTTP_202_ACCEPTED,
    summary="立即刷新单个源",
    description="后台执行，接口立即返回；结果见活动日志",
)
async def refresh_source(
    directory_name: str,
    handler: RefreshSourceHandler = Depends(get_refresh_source_handler),
) -> ApiResponse[RefreshAcceptedResponse]:
    """Enqueue a refresh of one source."""
    record = await handler.handle(RefreshSourceCommand(directory_name=directory_name))
    return ApiResponse.success(
        data=RefreshAcceptedResponse(directory_name=record.directory_name),
        message="Refresh started",
        code=202,
    )


@router.post(
    "/refresh-all",
    response_model=ApiResponse[RefreshAcceptedResponse],
    status_code=status.HTTP_202_ACCEPTED,
    summary="立即执行批量刷新",
)
async def refresh_all(
    handler: RefreshAllHandler = Depends(get_refresh_all_handler),
) -> ApiResponse[RefreshAcceptedResponse]:
    """Enqueue a scheduled batch run."""
    await handler.handle(RefreshAllCommand())
    return ApiResponse.success(
        data=RefreshAcceptedResponse(), message="Batch refresh started", code=202
    )


@router.get(
    "/interval",
    response_model=ApiResponse[IntervalResponse],
    summary="获取刷新间隔",
)
async def get_interval(
    service: SourceQueryService = Depends(get_source_query_service),
) -> ApiResponse[IntervalResponse]:
    return ApiResponse.success(data=IntervalResponse(hours=await service.get_interval()))


@router.put(
    "/interval",
    response_model=ApiResponse[IntervalResponse],
    summary="更新刷新间隔",
)
async def update_interval(
    request: IntervalRequest,
    handler: UpdateIntervalHandler = Depends(get_update_interval_handler),
) -> ApiResponse[IntervalResponse]:
    hours = await handler.handle(UpdateIntervalCommand(hours=request.hours))
    return ApiResponse.success(data=IntervalResponse(hours=hours))


@router.get(
    "/status",
    response_model=ApiResponse[CatalogStatusResponse],
    summary="管理后台概览",
)
async def get_status(
    admin: AdminContext = Depends(get_current_admin),
    service: SourceQueryService = Depends(get_source_query_service),
) -> ApiResponse[CatalogStatusResponse]:
    """Catalog overview for the dashboard."""
    data = await service.get_status()
    return ApiResponse.success(
        data=CatalogStatusResponse.model_validate(data.model_dump()),
        meta={"admin": admin.username},
    )
