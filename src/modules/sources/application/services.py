"""Source application services."""

from src.modules.sources.application.models import (
    CatalogStatusData,
    PlaylistData,
    SourceData,
)
from src.modules.sources.domain.entities import SourceRecord
from src.modules.sources.domain.exceptions import (
    PlaylistNotReadyError,
    SourceNotFoundError,
)
from src.modules.sources.domain.repository import (
    ContentCacheRepository,
    RefreshScheduleRepository,
    SourceCatalogRepository,
)


class SourceQueryService:
    """Source query service for list/status/download views."""

    def __init__(
        self,
        catalog: SourceCatalogRepository,
        content_cache: ContentCacheRepository,
        schedule: RefreshScheduleRepository,
    ) -> None:
        self.catalog = catalog
        self.content_cache = content_cache
        self.schedule = schedule

    @staticmethod
    def build_source_data(record: SourceRecord) -> SourceData:
        """Convert source record to source data."""
        return SourceData(
            directory_name=record.directory_name,
            source_url=record.source_url,
            extension=record.extension,
            created=record.created,
            last_updated=record.last_updated,
            download_path=record.download_path,
        )

    async def list_sources(self) -> list[SourceData]:
        records = await self.catalog.list_all()
        return [self.build_source_data(record) for record in records]

    async def get_playlist(self, directory_name: str, extension: str) -> PlaylistData:
        """获取缓存的播放列表内容。

        目录名与扩展名必须同时匹配一个已登记的源。

        Raises:
            SourceNotFoundError: 没有匹配的源
            PlaylistNotReadyError: 源存在但尚未成功刷新过
        """
        record = await self.catalog.get(directory_name)
        if record is None or record.extension != extension:
            raise SourceNotFoundError(f"{directory_name}/iptv.{extension}")

        content = await self.content_cache.get(directory_name)
        if not content:
            raise PlaylistNotReadyError(directory_name)

        return PlaylistData(
            directory_name=directory_name, extension=extension, content=content
        )

    async def get_interval(self) -> int:
        return await self.schedule.get_interval_hours()

    async def get_status(self) -> CatalogStatusData:
        records = await self.catalog.list_all()
        refreshed = [r.last_updated for r in records if r.last_updated is not None]
        return CatalogStatusData(
            sources=[self.build_source_data(record) for record in records],
            source_count=len(records),
            last_updated=max(refreshed) if refreshed else None,
            interval_hours=await self.schedule.get_interval_hours(),
            last_scheduled_check=await self.schedule.get_last_scheduled_check(),
        )
