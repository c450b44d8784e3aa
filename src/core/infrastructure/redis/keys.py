"""Redis Key 命名规范。

Key 与既有部署的数据保持兼容，因此沿用原有的字面量命名，不加命名空间前缀：
- iptv_configs: 源目录（JSON 列表）
- file_{directory_name}: 缓存的播放列表内容
- download_interval: 刷新间隔（小时，文本）
- admin_session_{session_id}: 管理员会话（JSON，带 TTL）
- logs: 活动日志（JSON 列表，最新在前）
- last_scheduled_check: 最近一次批量刷新开始时间
"""


class RedisKeys:
    """Redis Key 命名空间管理。"""

    SOURCE_CATALOG = "iptv_configs"
    CONTENT_PREFIX = "file_"
    REFRESH_INTERVAL = "download_interval"
    SESSION_PREFIX = "admin_session_"
    ACTIVITY_LOG = "logs"
    LAST_SCHEDULED_CHECK = "last_scheduled_check"

    @classmethod
    def content(cls, directory_name: str) -> str:
        """生成缓存内容 key。"""
        return f"{cls.CONTENT_PREFIX}{directory_name}"

    @classmethod
    def session(cls, session_id: str) -> str:
        """生成会话 key。"""
        return f"{cls.SESSION_PREFIX}{session_id}"
