"""
Batched event insert - the asynchronous write path of the event store.

The OTLP exporter queues chunks of serialized CreatableEvents here when
the caller did not ask for an immediate insert.
"""

import asyncio
import logging

from celery import shared_task

from taskscope.db.session import dispose_engine, get_session_local
from taskscope.models.pydantic_models.events import CreatableEvent
from taskscope.repository import INSERT_MANY_TASK, write_events

logger = logging.getLogger(__name__)


async def _insert_events(payloads: list[dict]) -> dict:
    events = [CreatableEvent.model_validate(payload) for payload in payloads]

    try:
        count = await write_events(events, get_session_local())
        logger.info(f"Event insert: wrote {count} events")
        return {"inserted": count}
    except Exception as exc:
        logger.error(
            f"Event insert failed for {len(events)} events: {exc}", exc_info=True
        )
        raise
    finally:
        await dispose_engine()


@shared_task(name=INSERT_MANY_TASK)
def insert_many(events: list[dict]) -> dict:
    """
    Celery task writing one chunk of serialized events.

    Args:
        events: CreatableEvent payloads as produced by ``model_dump(mode="json")``.

    Returns:
        Dict with the inserted row count.
    """
    return asyncio.run(_insert_events(events))
