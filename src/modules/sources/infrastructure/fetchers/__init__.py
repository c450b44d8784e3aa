"""播放列表抓取器模块。"""

from src.modules.sources.infrastructure.fetchers.http import HttpContentFetcher

__all__ = ["HttpContentFetcher"]
