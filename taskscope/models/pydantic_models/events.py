"""
CreatableEvent: the normalized, storage-ready record produced by the OTLP
pipeline and consumed by the event repository.
"""

from datetime import datetime

from pydantic import BaseModel

from taskscope.models.enums import EventKind, EventLevel, EventStatus

Scalar = str | int | float | bool
ScalarMap = dict[str, Scalar]


class EventLink(BaseModel):
    trace_id: str | None = None
    span_id: str | None = None
    tracestate: str = ""
    properties: ScalarMap | None = None


class SpanEvent(BaseModel):
    name: str
    time: datetime
    properties: ScalarMap | None = None


class CreatableEvent(BaseModel):
    trace_id: str
    span_id: str
    parent_id: str | None = None
    message: str
    kind: EventKind = EventKind.INTERNAL
    level: EventLevel = EventLevel.TRACE
    status: EventStatus = EventStatus.UNSET
    is_partial: bool = False
    is_error: bool = False
    start_time: int
    # Not clamped: a span whose end precedes its start keeps a negative value
    duration: int = 0

    properties: ScalarMap | None = None
    metadata: ScalarMap | None = None
    style: Scalar | ScalarMap | None = None
    output: Scalar | ScalarMap | None = None
    output_type: str | None = None
    payload: Scalar | ScalarMap | None = None
    payload_type: str | None = None
    links: list[EventLink] = []
    events: list[SpanEvent] = []

    # Resource identity
    service_name: str
    service_namespace: str
    environment_id: str
    environment_type: str
    organization_id: str
    project_id: str
    project_ref: str
    run_id: str
    run_is_test: bool = False
    attempt_id: str | None = None
    attempt_number: int | None = None
    task_slug: str
    task_path: str | None = None
    worker_id: str | None = None
    worker_version: str | None = None
    queue_id: str | None = None
    queue_name: str | None = None
    batch_id: str | None = None
    idempotency_key: str | None = None

    # Machine preset and usage
    machine_preset: str | None = None
    machine_preset_cpu: float | int | None = None
    machine_preset_memory: float | int | None = None
    machine_preset_cents_per_ms: float | None = None
    usage_duration_ms: float | int | None = None
    usage_cost_in_cents: float | None = None
