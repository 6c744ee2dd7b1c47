from celery import Celery, signals

from taskscope.config import settings


@signals.worker_process_init.connect
def init_worker_process(**kwargs):
    """
    Reset the async engine after fork.

    Engines and event loops created in the parent process are unusable in
    a prefork child, so each worker builds its own on first use.
    """
    import logging

    logger = logging.getLogger(__name__)

    import taskscope.db.session as session_module

    session_module._engine = None
    session_module._AsyncSessionLocal = None

    logger.info("Worker process initialized - event store engine reset")


celery_app = Celery(
    "taskscope",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend or settings.celery_broker_url,
)

celery_app.conf.update(
    task_serializer=settings.celery_task_serializer,
    result_serializer=settings.celery_result_serializer,
    accept_content=["json"],
    timezone="UTC",
    enable_utc=True,
    task_ignore_result=True,
)

celery_app.autodiscover_tasks(["taskscope.tasks"])


def get_celery_app() -> Celery:
    return celery_app
