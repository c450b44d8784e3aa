"""Source domain entities."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SourceRecord(BaseModel):
    """播放列表源记录。

    directory_name 是唯一标识，创建后不可修改；
    last_updated 只在刷新成功后由 RefreshService 更新。
    """

    model_config = ConfigDict(validate_assignment=True)

    directory_name: str = Field(..., description="目录名（唯一，也是下载路径段）")
    source_url: str = Field(..., description="上游播放列表 URL")
    extension: str = Field(..., description="文件扩展名，如 m3u / m3u8 / txt")
    created: datetime = Field(..., description="创建时间")
    last_updated: datetime | None = Field(default=None, description="最近一次成功刷新时间")

    @property
    def filename(self) -> str:
        return f"iptv.{self.extension}"

    @property
    def download_path(self) -> str:
        return f"/{self.directory_name}/{self.filename}"
