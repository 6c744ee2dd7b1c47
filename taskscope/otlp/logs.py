"""
Log mapper: each log record becomes a synthetic INTERNAL event.

The record is not a span itself, so it gets a freshly generated span id
and is attached as a child of the span that emitted it.
"""

import logging
from collections.abc import Callable, Sequence

from opentelemetry.proto.common.v1.common_pb2 import KeyValue
from opentelemetry.proto.logs.v1.logs_pb2 import LogRecord, ResourceLogs

from taskscope.models.enums import EventKind, EventLevel
from taskscope.models.pydantic_models.events import CreatableEvent
from taskscope.otlp.attributes import Defaults, SemanticInternalAttributes as Attrs
from taskscope.otlp.projection import project_group
from taskscope.otlp.records import record_properties, resource_fields
from taskscope.otlp.resource import ResourceProperties, extract_resource_properties
from taskscope.otlp.tables import severity_to_event_level, severity_to_event_status
from taskscope.otlp.values import binary_to_hex, string_value

logger = logging.getLogger(__name__)


def log_message(log: LogRecord) -> str:
    body = string_value(log.body) if log.HasField("body") else None
    if body is not None:
        return body[: Defaults.MAX_LOG_MESSAGE_LENGTH]
    return f"{log.severity_text} log"


def convert_log(
    log: LogRecord,
    resource_attributes: Sequence[KeyValue],
    resource_properties: ResourceProperties,
    generate_span_id: Callable[[], str],
) -> CreatableEvent | None:
    """Map a single log record; returns None when it has no trace or span id
    or its timestamp does not fit the store's signed 64-bit column."""
    if not log.trace_id or not log.span_id:
        return None

    # time_unix_nano is optional on the wire; fall back to observation time
    start_time = log.time_unix_nano or log.observed_time_unix_nano
    if start_time > Defaults.MAX_TIMESTAMP_NANO:
        return None

    level = severity_to_event_level(log.severity_number)

    return CreatableEvent(
        **resource_fields(resource_properties, log.attributes),
        trace_id=binary_to_hex(log.trace_id),
        span_id=generate_span_id(),
        parent_id=binary_to_hex(log.span_id),
        message=log_message(log),
        is_partial=False,
        kind=EventKind.INTERNAL,
        level=level,
        is_error=level == EventLevel.ERROR,
        status=severity_to_event_status(log.severity_number),
        start_time=start_time,
        properties=record_properties(log.attributes, resource_attributes),
        # No payload_type default on logs
        payload=project_group(log.attributes, Attrs.PAYLOAD),
    )


def convert_logs_to_creatable_events(
    resource_logs: ResourceLogs,
    generate_span_id: Callable[[], str],
) -> list[CreatableEvent]:
    resource_attributes = resource_logs.resource.attributes
    resource_properties = extract_resource_properties(resource_attributes)

    events: list[CreatableEvent] = []
    for scope_logs in resource_logs.scope_logs:
        for log in scope_logs.log_records:
            event = convert_log(
                log, resource_attributes, resource_properties, generate_span_id
            )
            if event is None:
                logger.debug("Dropping malformed log record")
                continue
            events.append(event)
    return events
