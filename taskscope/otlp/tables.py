"""
Translation tables from OTLP enums to event enums.

Every lookup is total: values missing from a table map to the documented
default instead of raising.
"""

from opentelemetry.proto.logs.v1 import logs_pb2
from opentelemetry.proto.trace.v1 import trace_pb2

from taskscope.models.enums import EventKind, EventLevel, EventStatus

SPAN_STATUS_TO_EVENT_STATUS: dict[int, EventStatus] = {
    trace_pb2.Status.STATUS_CODE_OK: EventStatus.OK,
    trace_pb2.Status.STATUS_CODE_ERROR: EventStatus.ERROR,
    trace_pb2.Status.STATUS_CODE_UNSET: EventStatus.UNSET,
}

SPAN_KIND_TO_EVENT_KIND: dict[int, EventKind] = {
    trace_pb2.Span.SPAN_KIND_CLIENT: EventKind.CLIENT,
    trace_pb2.Span.SPAN_KIND_SERVER: EventKind.SERVER,
    trace_pb2.Span.SPAN_KIND_CONSUMER: EventKind.CONSUMER,
    trace_pb2.Span.SPAN_KIND_PRODUCER: EventKind.PRODUCER,
    trace_pb2.Span.SPAN_KIND_INTERNAL: EventKind.INTERNAL,
}

_SEVERITY_BUCKETS: list[tuple[tuple[int, ...], EventLevel, EventStatus]] = [
    (
        (
            logs_pb2.SEVERITY_NUMBER_TRACE,
            logs_pb2.SEVERITY_NUMBER_TRACE2,
            logs_pb2.SEVERITY_NUMBER_TRACE3,
            logs_pb2.SEVERITY_NUMBER_TRACE4,
        ),
        EventLevel.TRACE,
        EventStatus.OK,
    ),
    (
        (
            logs_pb2.SEVERITY_NUMBER_DEBUG,
            logs_pb2.SEVERITY_NUMBER_DEBUG2,
            logs_pb2.SEVERITY_NUMBER_DEBUG3,
            logs_pb2.SEVERITY_NUMBER_DEBUG4,
        ),
        EventLevel.DEBUG,
        EventStatus.OK,
    ),
    (
        (
            logs_pb2.SEVERITY_NUMBER_INFO,
            logs_pb2.SEVERITY_NUMBER_INFO2,
            logs_pb2.SEVERITY_NUMBER_INFO3,
            logs_pb2.SEVERITY_NUMBER_INFO4,
        ),
        EventLevel.INFO,
        EventStatus.OK,
    ),
    (
        (
            logs_pb2.SEVERITY_NUMBER_WARN,
            logs_pb2.SEVERITY_NUMBER_WARN2,
            logs_pb2.SEVERITY_NUMBER_WARN3,
            logs_pb2.SEVERITY_NUMBER_WARN4,
        ),
        EventLevel.WARN,
        EventStatus.OK,
    ),
    (
        (
            logs_pb2.SEVERITY_NUMBER_ERROR,
            logs_pb2.SEVERITY_NUMBER_ERROR2,
            logs_pb2.SEVERITY_NUMBER_ERROR3,
            logs_pb2.SEVERITY_NUMBER_ERROR4,
        ),
        EventLevel.ERROR,
        EventStatus.ERROR,
    ),
    (
        (
            logs_pb2.SEVERITY_NUMBER_FATAL,
            logs_pb2.SEVERITY_NUMBER_FATAL2,
            logs_pb2.SEVERITY_NUMBER_FATAL3,
            logs_pb2.SEVERITY_NUMBER_FATAL4,
        ),
        EventLevel.ERROR,
        EventStatus.ERROR,
    ),
]

SEVERITY_TO_EVENT_LEVEL: dict[int, EventLevel] = {
    number: level for numbers, level, _ in _SEVERITY_BUCKETS for number in numbers
}
SEVERITY_TO_EVENT_STATUS: dict[int, EventStatus] = {
    number: status for numbers, _, status in _SEVERITY_BUCKETS for number in numbers
}


def span_status_to_event_status(status: trace_pb2.Status | None) -> EventStatus:
    if status is None:
        return EventStatus.UNSET
    return SPAN_STATUS_TO_EVENT_STATUS.get(status.code, EventStatus.UNSET)


def span_kind_to_event_kind(kind: int) -> EventKind:
    return SPAN_KIND_TO_EVENT_KIND.get(kind, EventKind.INTERNAL)


def severity_to_event_level(severity_number: int) -> EventLevel:
    return SEVERITY_TO_EVENT_LEVEL.get(severity_number, EventLevel.INFO)


def severity_to_event_status(severity_number: int) -> EventStatus:
    return SEVERITY_TO_EVENT_STATUS.get(severity_number, EventStatus.OK)
