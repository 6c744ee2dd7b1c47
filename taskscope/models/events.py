"""
Task event DB model.

One row per CreatableEvent. Partial and completed records of the same
span share trace_id + span_id; the row with is_partial=False supersedes.
"""

import uuid

from sqlalchemy.sql import func
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import BIGINT, JSONB, UUID

from taskscope.db.base import Base
from taskscope.models.pydantic_models.events import CreatableEvent


class TaskEventModel(Base):
    __tablename__ = "task_events"

    id = Column(
        UUID(as_uuid=True),
        primary_key=True,
        unique=True,
        nullable=False,
        default=uuid.uuid4,
    )

    trace_id = Column(String(64), nullable=False, index=True)
    span_id = Column(String(64), nullable=False)
    parent_id = Column(String(64), nullable=True)

    message = Column(Text, nullable=False)
    kind = Column(String(16), nullable=False)
    level = Column(String(16), nullable=False)
    status = Column(String(16), nullable=False)
    is_partial = Column(Boolean, nullable=False, default=False)
    is_error = Column(Boolean, nullable=False, default=False)

    # unix nanoseconds; uint64 on the wire, mappers drop values above 2**63 - 1
    start_time = Column(BIGINT, nullable=False)
    duration = Column(BIGINT, nullable=False, default=0)  # nanoseconds, may be < 0

    properties = Column(JSONB, nullable=True)
    # "metadata" is reserved on declarative classes
    resource_metadata = Column("metadata", JSONB, nullable=True)
    style = Column(JSONB, nullable=True)
    output = Column(JSONB, nullable=True)
    output_type = Column(String(255), nullable=True)
    payload = Column(JSONB, nullable=True)
    payload_type = Column(String(255), nullable=True)
    links = Column(JSONB, nullable=False, default=list)
    events = Column(JSONB, nullable=False, default=list)

    service_name = Column(String(255), nullable=False)
    service_namespace = Column(String(255), nullable=False)
    environment_id = Column(String(255), nullable=False, index=True)
    environment_type = Column(String(64), nullable=False)
    organization_id = Column(String(255), nullable=False)
    project_id = Column(String(255), nullable=False)
    project_ref = Column(String(255), nullable=False)
    run_id = Column(String(255), nullable=False, index=True)
    run_is_test = Column(Boolean, nullable=False, default=False)
    attempt_id = Column(String(255), nullable=True)
    attempt_number = Column(Integer, nullable=True)
    task_slug = Column(String(255), nullable=False)
    task_path = Column(String, nullable=True)
    worker_id = Column(String(255), nullable=True)
    worker_version = Column(String(255), nullable=True)
    queue_id = Column(String(255), nullable=True)
    queue_name = Column(String(255), nullable=True)
    batch_id = Column(String(255), nullable=True)
    idempotency_key = Column(String(255), nullable=True)

    machine_preset = Column(String(255), nullable=True)
    machine_preset_cpu = Column(Float, nullable=True)
    machine_preset_memory = Column(Float, nullable=True)
    machine_preset_cents_per_ms = Column(Float, nullable=True)
    usage_duration_ms = Column(Float, nullable=True)
    usage_cost_in_cents = Column(Float, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (Index("ix_task_events_trace_span", "trace_id", "span_id"),)

    @classmethod
    def from_creatable_event(cls, event: CreatableEvent) -> "TaskEventModel":
        data = event.model_dump(mode="json")
        data["resource_metadata"] = data.pop("metadata")
        return cls(**data)
