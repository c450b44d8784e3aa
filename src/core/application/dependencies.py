"""Core application dependencies.

These functions define application-level dependency boundaries and are overridden
by infrastructure in `main.py`.
"""

from __future__ import annotations

from typing import NoReturn

from src.core.domain.clock import Clock, utc_now
from src.core.domain.ports.kv import KVClient


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_kv_client() -> KVClient:
    _missing_dependency("KVClient")


def get_clock() -> Clock:
    return utc_now
