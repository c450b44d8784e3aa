"""iptvRelay - IPTV 播放列表中转与缓存服务入口。"""

import sentry_sdk
from fastapi import FastAPI
from fastapi.concurrency import asynccontextmanager
from fastapi.routing import APIRoute
from loguru import logger

from src.core.application import dependencies as core_app_deps
from src.core.application import security as app_security
from src.core.config import settings
from src.core.domain.exceptions import DomainException
from src.core.infrastructure.logging import setup_logging
from src.core.infrastructure.redis import get_redis_client, redis_client
from src.core.infrastructure.security.session_auth import get_current_admin
from src.core.interfaces.http.exceptions import (
    domain_exception_handler,
    global_exception_handler,
)
from src.core.interfaces.http.routers import admin_router, public_router
from src.modules.auth.application import dependencies as auth_app_deps
from src.modules.auth.infrastructure import dependencies as auth_infra_deps
from src.modules.logs.application import dependencies as logs_app_deps
from src.modules.logs.infrastructure import dependencies as logs_infra_deps
from src.modules.sources.application import dependencies as sources_app_deps
from src.modules.sources.infrastructure import dependencies as sources_infra_deps


def custom_generate_unique_id(route: APIRoute) -> str:
    """Generate unique operation IDs for OpenAPI."""
    if route.tags:
        return f"{route.tags[0]}-{route.name}"
    return route.name


# Initialize Sentry if configured
if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
    sentry_sdk.init(
        dsn=str(settings.SENTRY_DSN),
        enable_tracing=True,
        environment=settings.ENVIRONMENT,
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Application lifespan manager."""
    setup_logging()
    logger.info("Starting iptvRelay...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    yield

    await redis_client.close()
    logger.info("Shutting down iptvRelay...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description=(
        "IPTV 播放列表中转服务 - 定时抓取上游播放列表并缓存分发\n\n"
        "## 认证方式\n\n"
        "管理接口（/admin/api/*）需要先调用 `POST /admin/login`，"
        "登录成功后通过 `admin_session` Cookie 维持会话（7 天滑动过期）。"
    ),
    version="0.1.0",
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)

# Dependency overrides (application -> infrastructure)
app.dependency_overrides[app_security.get_current_admin] = get_current_admin
app.dependency_overrides[core_app_deps.get_kv_client] = get_redis_client

# Auth module
app.dependency_overrides[auth_app_deps.get_admin_session_repository] = (
    auth_infra_deps.get_admin_session_repository
)

# Logs module
app.dependency_overrides[logs_app_deps.get_event_log_repository] = (
    logs_infra_deps.get_event_log_repository
)

# Sources module
app.dependency_overrides[sources_app_deps.get_source_catalog_repository] = (
    sources_infra_deps.get_source_catalog_repository
)
app.dependency_overrides[sources_app_deps.get_content_cache_repository] = (
    sources_infra_deps.get_content_cache_repository
)
app.dependency_overrides[sources_app_deps.get_refresh_schedule_repository] = (
    sources_infra_deps.get_refresh_schedule_repository
)
app.dependency_overrides[sources_app_deps.get_refresh_queue] = (
    sources_infra_deps.get_refresh_queue
)

# Exception handlers
app.add_exception_handler(DomainException, domain_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint.

    唯一的外部依赖是 Redis（KV 存储与 Celery Broker）。
    """
    redis_health_result = await redis_client.health_check()
    overall_status = "healthy" if redis_health_result.is_healthy else "unhealthy"

    return {
        "status": overall_status,
        "environment": settings.ENVIRONMENT,
        "version": "0.1.0",
        "components": {
            "redis": redis_health_result.to_dict(),
        },
    }


app.include_router(admin_router)
# 播放列表下载是 /{dir}/iptv.{ext} 通配路径，最后注册
app.include_router(public_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.SERVER_PORT,
        reload=settings.ENVIRONMENT == "local",
    )
