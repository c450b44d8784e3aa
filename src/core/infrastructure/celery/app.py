"""Celery 应用配置。

- 使用 JSON 序列化
- 按功能拆分队列
- 支持任务重试与退避
- 配置定时任务（Beat）
"""

from celery import Celery
from kombu import Exchange, Queue

from src.core.config import settings
from src.core.infrastructure.celery.queues import TASK_ROUTES, Queues

celery_app = Celery("iptvrelay")

celery_app.conf.update(
    # Broker & Backend
    broker_url=settings.celery_broker_url,
    result_backend=settings.celery_result_backend,
    # 序列化配置
    task_serializer=settings.CELERY_TASK_SERIALIZER,
    result_serializer=settings.CELERY_RESULT_SERIALIZER,
    accept_content=settings.CELERY_ACCEPT_CONTENT,
    # 时区配置
    timezone=settings.TIMEZONE,
    enable_utc=True,
    # 任务配置
    task_track_started=True,
    task_time_limit=3600,  # 批量刷新串行执行，硬超时 1 小时
    task_soft_time_limit=3300,
    # 重试配置
    task_default_retry_delay=settings.CELERY_TASK_DEFAULT_RETRY_DELAY,
    task_max_retries=settings.CELERY_TASK_MAX_RETRIES,
    task_acks_late=True,  # 任务完成后才确认
    task_reject_on_worker_lost=True,
    # 结果配置
    result_expires=3600,
    # Worker 配置
    worker_prefetch_multiplier=1,
    worker_concurrency=settings.WORKER_REFRESH_CONCURRENCY,
)

# 队列配置
default_exchange = Exchange("default", type="direct")
celery_app.conf.task_queues = (
    Queue(Queues.REFRESH, default_exchange, routing_key=Queues.REFRESH),
    Queue(Queues.SCHEDULE, default_exchange, routing_key=Queues.SCHEDULE),
)

celery_app.conf.task_routes = TASK_ROUTES
celery_app.conf.task_default_queue = Queues.REFRESH

# 定时任务配置（Celery Beat）
# Beat 只负责周期性“检查是否到期”，真正的间隔由 download_interval 决定
celery_app.conf.beat_schedule = {
    "dispatch-scheduled-refresh": {
        "task": "src.modules.sources.tasks.dispatch_scheduled_refresh",
        "schedule": float(settings.SCHEDULER_TICK_SEC),
        "options": {"queue": Queues.SCHEDULE},
    },
}

celery_app.autodiscover_tasks(["src.modules.sources"], related_name="tasks")
