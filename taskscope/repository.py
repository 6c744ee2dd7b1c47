"""
Event repository: the two write paths into the task event store.

``insert_many_immediate`` commits in the caller's request; ``insert_many``
hands chunks to the Celery batch writer. Neither retries; failures
propagate to the caller.
"""

import logging
import uuid
from collections.abc import Callable, Sequence

from celery import Celery
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskscope.config import settings
from taskscope.db.session import get_session_local
from taskscope.models.events import TaskEventModel
from taskscope.models.pydantic_models.events import CreatableEvent

logger = logging.getLogger(__name__)

INSERT_MANY_TASK = "task_events.insert_many"


async def write_events(
    events: Sequence[CreatableEvent],
    session_local: async_sessionmaker[AsyncSession],
) -> int:
    """Insert *events* in one transaction and return the row count."""
    if not events:
        return 0

    async with session_local() as session:
        session.add_all([TaskEventModel.from_creatable_event(e) for e in events])
        await session.commit()
    return len(events)


def _chunks(items: list, size: int):
    for start in range(0, len(items), size):
        yield items[start : start + size]


class EventRepository:
    def __init__(
        self,
        session_factory: Callable[
            [], async_sessionmaker[AsyncSession]
        ] = get_session_local,
        celery_app_factory: Callable[[], Celery] | None = None,
        batch_size: int | None = None,
    ):
        self._session_factory = session_factory
        self._celery_app_factory = celery_app_factory
        self._batch_size = batch_size or settings.event_insert_batch_size

    def generate_span_id(self) -> str:
        return uuid.uuid4().hex[:16]

    async def insert_many_immediate(self, events: Sequence[CreatableEvent]) -> None:
        count = await write_events(events, self._session_factory())
        logger.debug(f"Inserted {count} events immediately")

    async def insert_many(self, events: Sequence[CreatableEvent]) -> None:
        if not events:
            return

        celery_app = self._get_celery_app()
        payloads = [event.model_dump(mode="json") for event in events]
        for chunk in _chunks(payloads, self._batch_size):
            celery_app.send_task(INSERT_MANY_TASK, args=[chunk])
        logger.debug(
            f"Queued {len(payloads)} events for batched insert "
            f"(batch_size={self._batch_size})"
        )

    def _get_celery_app(self) -> Celery:
        if self._celery_app_factory is not None:
            return self._celery_app_factory()

        from taskscope.celery_app import get_celery_app

        return get_celery_app()
