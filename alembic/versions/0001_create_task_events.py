"""create task_events table

Revision ID: 0001_create_task_events
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "0001_create_task_events"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "task_events",
        sa.Column(
            "id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False
        ),
        sa.Column("trace_id", sa.String(64), nullable=False),
        sa.Column("span_id", sa.String(64), nullable=False),
        sa.Column("parent_id", sa.String(64), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("kind", sa.String(16), nullable=False),
        sa.Column("level", sa.String(16), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("is_partial", sa.Boolean(), nullable=False),
        sa.Column("is_error", sa.Boolean(), nullable=False),
        # Signed: the OTLP mappers reject start times above 2**63 - 1
        sa.Column("start_time", sa.BigInteger(), nullable=False),
        sa.Column("duration", sa.BigInteger(), nullable=False),
        sa.Column("properties", postgresql.JSONB(), nullable=True),
        sa.Column("metadata", postgresql.JSONB(), nullable=True),
        sa.Column("style", postgresql.JSONB(), nullable=True),
        sa.Column("output", postgresql.JSONB(), nullable=True),
        sa.Column("output_type", sa.String(255), nullable=True),
        sa.Column("payload", postgresql.JSONB(), nullable=True),
        sa.Column("payload_type", sa.String(255), nullable=True),
        sa.Column("links", postgresql.JSONB(), nullable=False),
        sa.Column("events", postgresql.JSONB(), nullable=False),
        sa.Column("service_name", sa.String(255), nullable=False),
        sa.Column("service_namespace", sa.String(255), nullable=False),
        sa.Column("environment_id", sa.String(255), nullable=False),
        sa.Column("environment_type", sa.String(64), nullable=False),
        sa.Column("organization_id", sa.String(255), nullable=False),
        sa.Column("project_id", sa.String(255), nullable=False),
        sa.Column("project_ref", sa.String(255), nullable=False),
        sa.Column("run_id", sa.String(255), nullable=False),
        sa.Column("run_is_test", sa.Boolean(), nullable=False),
        sa.Column("attempt_id", sa.String(255), nullable=True),
        sa.Column("attempt_number", sa.Integer(), nullable=True),
        sa.Column("task_slug", sa.String(255), nullable=False),
        sa.Column("task_path", sa.String(), nullable=True),
        sa.Column("worker_id", sa.String(255), nullable=True),
        sa.Column("worker_version", sa.String(255), nullable=True),
        sa.Column("queue_id", sa.String(255), nullable=True),
        sa.Column("queue_name", sa.String(255), nullable=True),
        sa.Column("batch_id", sa.String(255), nullable=True),
        sa.Column("idempotency_key", sa.String(255), nullable=True),
        sa.Column("machine_preset", sa.String(255), nullable=True),
        sa.Column("machine_preset_cpu", sa.Float(), nullable=True),
        sa.Column("machine_preset_memory", sa.Float(), nullable=True),
        sa.Column("machine_preset_cents_per_ms", sa.Float(), nullable=True),
        sa.Column("usage_duration_ms", sa.Float(), nullable=True),
        sa.Column("usage_cost_in_cents", sa.Float(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=True,
        ),
    )
    op.create_index("ix_task_events_trace_id", "task_events", ["trace_id"])
    op.create_index(
        "ix_task_events_environment_id", "task_events", ["environment_id"]
    )
    op.create_index("ix_task_events_run_id", "task_events", ["run_id"])
    op.create_index(
        "ix_task_events_trace_span", "task_events", ["trace_id", "span_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_task_events_trace_span", table_name="task_events")
    op.drop_index("ix_task_events_run_id", table_name="task_events")
    op.drop_index("ix_task_events_environment_id", table_name="task_events")
    op.drop_index("ix_task_events_trace_id", table_name="task_events")
    op.drop_table("task_events")
