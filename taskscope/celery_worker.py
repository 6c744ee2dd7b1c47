from taskscope.celery_app import celery_app
from taskscope.tasks import event_insert

__all__ = [
    "celery_app",
    "event_insert",
]
