#!/usr/bin/env python
"""手动执行播放列表刷新（不经过 Celery）。

默认执行一次完整的批量刷新；指定 --source 时只刷新单个源。

用法:
    uv run python scripts/run_refresh.py [--source <directory_name>] [--json]
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path


def _ensure_project_root_on_path() -> None:
    """确保项目根目录在 Python 路径中，便于直接运行脚本。"""
    project_root = Path(__file__).parent.parent
    project_root_str = str(project_root)
    if project_root_str not in sys.path:
        sys.path.insert(0, project_root_str)


_ensure_project_root_on_path()


async def run_batch() -> dict[str, object]:
    """执行一次批量刷新，返回统计。"""
    from src.core.config import settings
    from src.core.infrastructure.redis import get_async_redis_client
    from src.modules.sources.infrastructure.dependencies import (
        build_scheduled_refresh_job,
    )

    async with get_async_redis_client(
        timeout=settings.REDIS_CLIENT_TIMEOUT_SEC
    ) as redis_client:
        job = build_scheduled_refresh_job(redis_client, settings)
        summary = await job.run_once()
    return summary.to_dict()


async def run_single(directory_name: str) -> dict[str, object]:
    """刷新单个源。"""
    from src.core.config import settings
    from src.core.infrastructure.redis import get_async_redis_client
    from src.modules.sources.infrastructure.dependencies import build_refresh_service

    async with get_async_redis_client(
        timeout=settings.REDIS_CLIENT_TIMEOUT_SEC
    ) as redis_client:
        service = build_refresh_service(redis_client, settings)
        result = await service.refresh_by_name(directory_name)
    return {
        "directory_name": directory_name,
        "success": result.success,
        "error_message": result.error_message,
        "skipped": result.skipped,
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="刷新 IPTV 播放列表缓存")
    parser.add_argument(
        "--source",
        type=str,
        default=None,
        help="只刷新指定目录名的源",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="以 JSON 输出结果",
    )
    args = parser.parse_args()

    from src.core.infrastructure.logging import setup_logging
    from src.core.infrastructure.redis import RedisUnavailableError
    from src.modules.sources.domain.exceptions import SourceNotFoundError

    setup_logging()

    try:
        if args.source:
            result = asyncio.run(run_single(args.source))
        else:
            result = asyncio.run(run_batch())
    except RedisUnavailableError as e:
        print(f"Redis unavailable: {e}", file=sys.stderr)
        return 2
    except SourceNotFoundError as e:
        print(e.message, file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result, ensure_ascii=False, indent=2))
    else:
        for key, value in result.items():
            print(f"{key}: {value}")

    if args.source:
        return 0 if result["success"] else 1
    return 0 if result["failed"] == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
