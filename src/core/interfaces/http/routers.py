"""API router configuration."""

from fastapi import APIRouter

from src.modules.auth.interfaces.router import router as auth_router
from src.modules.logs.interfaces.router import router as logs_router
from src.modules.sources.interfaces.playlist_router import router as playlist_router
from src.modules.sources.interfaces.router import router as sources_router

admin_router = APIRouter(prefix="/admin")

# Login / logout / me
admin_router.include_router(auth_router)

# Catalog management, refresh, interval, status
admin_router.include_router(sources_router)

# Activity log
admin_router.include_router(logs_router)

# Public status + playlist downloads (must be registered last: catch-all path)
public_router = APIRouter()
public_router.include_router(playlist_router)
