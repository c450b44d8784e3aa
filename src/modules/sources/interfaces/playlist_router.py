"""Public playlist routes.

- GET /                              服务状态与可用播放列表
- GET /{directory_name}/iptv.{ext}   下载缓存的播放列表
"""

from fastapi import APIRouter, Depends, Response

from src.core.config import Settings, get_settings
from src.core.interfaces.http.response import ApiResponse
from src.modules.sources.application.dependencies import get_source_query_service
from src.modules.sources.application.services import SourceQueryService
from src.modules.sources.interfaces.schemas import CamelModel

router = APIRouter(tags=["playlists"])

PLAYLIST_MEDIA_TYPES: dict[str, str] = {
    "m3u": "audio/x-mpegurl",
    "m3u8": "application/vnd.apple.mpegurl",
    "txt": "text/plain",
    "json": "application/json",
    "xml": "application/xml",
}
DEFAULT_MEDIA_TYPE = "application/octet-stream"


def media_type_for(extension: str) -> str:
    return PLAYLIST_MEDIA_TYPES.get(extension.lower(), DEFAULT_MEDIA_TYPE)


class PublicPlaylist(CamelModel):
    directory_name: str
    download_path: str
    last_updated: str | None = None


class PublicStatusResponse(CamelModel):
    source_count: int
    last_updated: str | None = None
    interval_hours: int
    playlists: list[PublicPlaylist]


@router.get(
    "/",
    response_model=ApiResponse[PublicStatusResponse],
    summary="服务状态",
)
async def public_status(
    service: SourceQueryService = Depends(get_source_query_service),
) -> ApiResponse[PublicStatusResponse]:
    """Public overview: source count, latest refresh and interval."""
    data = await service.get_status()
    return ApiResponse.success(
        data=PublicStatusResponse(
            source_count=data.source_count,
            last_updated=data.last_updated.isoformat() if data.last_updated else None,
            interval_hours=data.interval_hours,
            playlists=[
                PublicPlaylist(
                    directory_name=s.directory_name,
                    download_path=s.download_path,
                    last_updated=s.last_updated.isoformat() if s.last_updated else None,
                )
                for s in data.sources
            ],
        )
    )


@router.get(
    "/{directory_name}/iptv.{extension}",
    response_class=Response,
    summary="下载播放列表",
    responses={404: {"description": "源不存在或尚未生成"}},
)
async def download_playlist(
    directory_name: str,
    extension: str,
    service: SourceQueryService = Depends(get_source_query_service),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Serve the cached playlist with an extension-specific media type."""
    playlist = await service.get_playlist(directory_name, extension)
    media_type = media_type_for(playlist.extension)
    return Response(
        content=playlist.content,
        media_type=media_type,
        headers={
            "Cache-Control": f"public, max-age={settings.PLAYLIST_CACHE_MAX_AGE_SEC}"
        },
    )
