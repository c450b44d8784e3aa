"""Logging configuration with structlog integration.

两条日志通道：
1. loguru: 运行与调试日志
2. structlog: 关键业务事件的结构化日志

注意：管理后台可见的“活动日志”是业务数据，存储在 KV 中（见 src.modules.logs），
与这里的进程日志互不替代。
"""

import sys
from typing import Any

import structlog
from loguru import logger

from src.core.config import settings


def setup_logging() -> None:
    """Configure application logging with structlog and loguru."""
    _configure_structlog()
    _configure_loguru()

    logger.info(f"Logging configured with level: {settings.LOG_LEVEL}")


def _configure_structlog() -> None:
    """配置 structlog 处理器链。"""
    if settings.ENVIRONMENT == "local":
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _get_log_level_number(settings.LOG_LEVEL)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def _configure_loguru() -> None:
    """配置 loguru。"""
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    # Add file handler for production
    if settings.ENVIRONMENT != "local":
        logger.add(
            "logs/iptvrelay_{time:YYYY-MM-DD}.log",
            rotation="00:00",
            retention="30 days",
            level="INFO",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        )


def _get_log_level_number(level: str) -> int:
    """将日志级别字符串转换为数字。"""
    levels = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
        "CRITICAL": 50,
    }
    return levels.get(level.upper(), 20)


# ============================================================================
# 业务事件日志记录器
# ============================================================================


class BusinessEvents:
    """业务事件日志助手类。

    提供统一的业务事件日志记录接口，确保事件格式一致。

    Usage:
        from src.core.infrastructure.logging import BusinessEvents

        BusinessEvents.source_refreshed(directory_name="news", bytes_cached=1024)
    """

    _log = structlog.get_logger("business.events")

    # ---- 源目录 ----

    @classmethod
    def source_created(cls, directory_name: str, source_url: str, **extra: Any) -> None:
        """记录新增源事件。"""
        cls._log.info(
            "source_created",
            event_type="catalog",
            directory_name=directory_name,
            source_url=source_url,
            **extra,
        )

    @classmethod
    def source_deleted(cls, directory_name: str, **extra: Any) -> None:
        """记录删除源事件。"""
        cls._log.info(
            "source_deleted",
            event_type="catalog",
            directory_name=directory_name,
            **extra,
        )

    # ---- 刷新 ----

    @classmethod
    def source_refreshed(
        cls,
        directory_name: str,
        bytes_cached: int,
        duration_ms: int | None = None,
        **extra: Any,
    ) -> None:
        """记录源刷新成功事件。"""
        cls._log.info(
            "source_refreshed",
            event_type="refresh",
            directory_name=directory_name,
            bytes_cached=bytes_cached,
            duration_ms=duration_ms,
            **extra,
        )

    @classmethod
    def source_refresh_failed(
        cls,
        directory_name: str,
        error: str,
        status_code: int | None = None,
        **extra: Any,
    ) -> None:
        """记录源刷新失败事件。"""
        cls._log.warning(
            "source_refresh_failed",
            event_type="refresh_error",
            directory_name=directory_name,
            error=error,
            status_code=status_code,
            **extra,
        )

    @classmethod
    def scheduled_refresh_started(
        cls, total: int, interval_hours: int, **extra: Any
    ) -> None:
        """记录批量刷新开始事件。"""
        cls._log.info(
            "scheduled_refresh_started",
            event_type="schedule",
            total=total,
            interval_hours=interval_hours,
            **extra,
        )

    @classmethod
    def scheduled_refresh_completed(
        cls,
        total: int,
        succeeded: int,
        failed: int,
        **extra: Any,
    ) -> None:
        """记录批量刷新完成事件。"""
        cls._log.info(
            "scheduled_refresh_completed",
            event_type="schedule",
            total=total,
            succeeded=succeeded,
            failed=failed,
            **extra,
        )

    # ---- 管理员会话 ----

    @classmethod
    def admin_login_succeeded(
        cls, username: str, user_agent: str | None = None, **extra: Any
    ) -> None:
        """记录管理员登录成功事件。"""
        cls._log.info(
            "admin_login_succeeded",
            event_type="auth",
            username=username,
            user_agent=user_agent,
            **extra,
        )

    @classmethod
    def admin_login_failed(cls, user_agent: str | None = None, **extra: Any) -> None:
        """记录管理员登录失败事件（不记录尝试的用户名与密码）。"""
        cls._log.warning(
            "admin_login_failed",
            event_type="auth",
            user_agent=user_agent,
            **extra,
        )

    @classmethod
    def admin_session_expired(cls, username: str, **extra: Any) -> None:
        """记录会话过期事件。"""
        cls._log.info(
            "admin_session_expired",
            event_type="auth",
            username=username,
            **extra,
        )

    @classmethod
    def admin_logged_out(cls, **extra: Any) -> None:
        """记录管理员登出事件。"""
        cls._log.info("admin_logged_out", event_type="auth", **extra)
