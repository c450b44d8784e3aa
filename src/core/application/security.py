"""Application-level security dependencies.

Defines auth dependencies without importing infrastructure.
The actual implementations are injected via FastAPI dependency_overrides in main.py.
"""

from dataclasses import dataclass
from typing import NoReturn


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


@dataclass(frozen=True)
class AdminContext:
    """Authentication context for the current admin request."""

    username: str
    session_id: str


async def get_current_admin() -> AdminContext:
    """Get the current admin context.

    This stub is overridden in main.py with the cookie-session implementation.
    """
    _missing_dependency("get_current_admin")
