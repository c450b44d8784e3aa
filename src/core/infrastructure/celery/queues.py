"""Celery 队列定义。

- q_refresh: 播放列表刷新（单源刷新、批量刷新）
- q_schedule: 调度检查（Beat 触发，轻量）
"""

from enum import StrEnum


class Queues(StrEnum):
    """Celery 队列枚举。"""

    REFRESH = "q_refresh"
    SCHEDULE = "q_schedule"


# 队列路由配置
# 任务名称模式 -> 队列
TASK_ROUTES = {
    "src.modules.sources.tasks.dispatch_*": {"queue": Queues.SCHEDULE},
    "src.modules.sources.tasks.run_*": {"queue": Queues.REFRESH},
    "src.modules.sources.tasks.refresh_*": {"queue": Queues.REFRESH},
}
