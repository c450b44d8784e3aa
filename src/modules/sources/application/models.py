"""Source application data models."""

from datetime import datetime

from pydantic import BaseModel


class SourceData(BaseModel):
    """Source data for queries."""

    directory_name: str
    source_url: str
    extension: str
    created: datetime
    last_updated: datetime | None = None
    download_path: str


class PlaylistData(BaseModel):
    """Cached playlist content for download."""

    directory_name: str
    extension: str
    content: str


class CatalogStatusData(BaseModel):
    """Catalog overview for status pages."""

    sources: list[SourceData]
    source_count: int
    last_updated: datetime | None = None
    interval_hours: int
    last_scheduled_check: datetime | None = None
