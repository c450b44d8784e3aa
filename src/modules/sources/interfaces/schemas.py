"""Source API schemas.

对外 JSON 字段使用 camelCase（directoryName / sourceUrl / lastUpdated），
与既有管理后台保持一致。
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateSourceRequest(CamelModel):
    """Create source request."""

    directory_name: str | None = Field(None, description="目录名（唯一）")
    source_url: str | None = Field(None, description="上游播放列表 URL")
    extension: str | None = Field(None, description="扩展名，如 m3u")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "directoryName": "news",
                "sourceUrl": "https://example.com/news.m3u",
                "extension": "m3u",
            }
        },
    )


class SourceResponse(CamelModel):
    """Source response."""

    directory_name: str
    source_url: str
    extension: str
    created: datetime
    last_updated: datetime | None = None
    download_path: str


class RefreshAcceptedResponse(CamelModel):
    """Refresh accepted (runs in background)."""

    directory_name: str | None = None
    queued: bool = True


class IntervalRequest(BaseModel):
    """Update refresh interval request."""

    hours: int = Field(..., description="刷新间隔（小时，>= 1）")


class IntervalResponse(BaseModel):
    """Refresh interval response."""

    hours: int


class CatalogStatusResponse(CamelModel):
    """Catalog status response."""

    sources: list[SourceResponse]
    source_count: int
    last_updated: datetime | None = None
    interval_hours: int
    last_scheduled_check: datetime | None = None
