"""Celery app and queues for playlist refresh workers."""

from src.core.infrastructure.celery.app import celery_app
from src.core.infrastructure.celery.queues import Queues

__all__ = ["Queues", "celery_app"]
