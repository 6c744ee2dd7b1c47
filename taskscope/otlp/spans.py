"""
Span mapper: one OTLP span plus its resource context becomes one event.

Partial spans (``$span.partial = true``) are in-progress records. They may
announce the id their completed record will use through ``$span.span_id``
so the store can reconcile the two by identity.
"""

import logging
from collections.abc import Sequence

from opentelemetry.proto.common.v1.common_pb2 import KeyValue
from opentelemetry.proto.trace.v1.trace_pb2 import ResourceSpans, Span, Status

from taskscope.models.enums import EventLevel
from taskscope.models.pydantic_models.events import CreatableEvent, EventLink, SpanEvent
from taskscope.otlp.attributes import Defaults, SemanticInternalAttributes as Attrs
from taskscope.otlp.projection import project, project_group
from taskscope.otlp.records import record_properties, resource_fields
from taskscope.otlp.resource import ResourceProperties, extract_resource_properties
from taskscope.otlp.tables import span_kind_to_event_kind, span_status_to_event_status
from taskscope.otlp.values import (
    binary_to_hex,
    extract_bool,
    extract_double,
    extract_number,
    extract_string,
)
from taskscope.utils import from_unix_nano

logger = logging.getLogger(__name__)


def is_partial_span(span: Span) -> bool:
    return extract_bool(span.attributes, Attrs.SPAN_PARTIAL, False) is True


def span_links_to_event_links(links: Sequence[Span.Link]) -> list[EventLink]:
    return [
        EventLink(
            trace_id=binary_to_hex(link.trace_id),
            span_id=binary_to_hex(link.span_id),
            tracestate=link.trace_state,
            properties=project(link.attributes),
        )
        for link in links
    ]


def span_events_to_event_events(events: Sequence[Span.Event]) -> list[SpanEvent]:
    return [
        SpanEvent(
            name=event.name,
            time=from_unix_nano(event.time_unix_nano),
            properties=project(event.attributes),
        )
        for event in events
    ]


def convert_span(
    span: Span,
    resource_attributes: Sequence[KeyValue],
    resource_properties: ResourceProperties,
) -> CreatableEvent | None:
    """Map a single span; returns None when the span is malformed.

    A span is malformed when it lacks a trace or span id, or when its
    start or end time does not fit the store's signed 64-bit columns.
    """
    if not span.trace_id or not span.span_id:
        return None
    if (
        span.start_time_unix_nano > Defaults.MAX_TIMESTAMP_NANO
        or span.end_time_unix_nano > Defaults.MAX_TIMESTAMP_NANO
    ):
        return None

    attributes = span.attributes
    is_partial = is_partial_span(span)
    wire_span_id = binary_to_hex(span.span_id)
    span_id = (
        extract_string(attributes, Attrs.SPAN_ID, wire_span_id)
        if is_partial
        else wire_span_id
    )

    return CreatableEvent(
        **resource_fields(resource_properties, attributes),
        trace_id=binary_to_hex(span.trace_id),
        span_id=span_id,
        parent_id=binary_to_hex(span.parent_span_id),
        message=span.name,
        is_partial=is_partial,
        is_error=span.status.code == Status.STATUS_CODE_ERROR,
        kind=span_kind_to_event_kind(span.kind),
        level=EventLevel.TRACE,
        status=span_status_to_event_status(span.status),
        start_time=span.start_time_unix_nano,
        duration=span.end_time_unix_nano - span.start_time_unix_nano,
        links=span_links_to_event_links(span.links),
        events=span_events_to_event_events(span.events),
        properties=record_properties(attributes, resource_attributes),
        style=project_group(attributes, Attrs.STYLE),
        output=project_group(attributes, Attrs.OUTPUT),
        output_type=extract_string(attributes, Attrs.OUTPUT_TYPE),
        payload=project_group(attributes, Attrs.PAYLOAD),
        payload_type=extract_string(
            attributes, Attrs.PAYLOAD_TYPE, Defaults.PAYLOAD_TYPE
        ),
        usage_duration_ms=extract_number(attributes, Attrs.USAGE_DURATION_MS),
        usage_cost_in_cents=extract_double(attributes, Attrs.USAGE_COST_IN_CENTS),
    )


def convert_spans_to_creatable_events(
    resource_spans: ResourceSpans,
) -> list[CreatableEvent]:
    resource_attributes = resource_spans.resource.attributes
    resource_properties = extract_resource_properties(resource_attributes)

    events: list[CreatableEvent] = []
    for scope_spans in resource_spans.scope_spans:
        for span in scope_spans.spans:
            event = convert_span(span, resource_attributes, resource_properties)
            if event is None:
                logger.debug(f"Dropping malformed span {span.name!r}")
                continue
            events.append(event)
    return events
