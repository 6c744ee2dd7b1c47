"""
Reserved attribute keys and default literals shared by the OTLP pipeline.

The tables are frozen dataclass instances so nothing can rebind a key at
runtime; import the instances, never the private classes.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class _SemanticInternalAttributes:
    # Admission markers
    TRIGGER: str = "$trigger"
    EXECUTION_ENVIRONMENT: str = "exec_env"

    # Span identity
    SPAN_PARTIAL: str = "$span.partial"
    SPAN_ID: str = "$span.span_id"

    # Attribute groups
    METADATA: str = "$metadata"
    STYLE: str = "$style"
    OUTPUT: str = "$output"
    OUTPUT_TYPE: str = "$mime_type_output"
    PAYLOAD: str = "$payload"
    PAYLOAD_TYPE: str = "$mime_type_payload"

    # Usage
    USAGE_DURATION_MS: str = "$usage.durationMs"
    USAGE_COST_IN_CENTS: str = "$usage.costInCents"

    # Run context
    ENVIRONMENT_ID: str = "ctx.environment.id"
    ENVIRONMENT_TYPE: str = "ctx.environment.type"
    ORGANIZATION_ID: str = "ctx.organization.id"
    PROJECT_ID: str = "ctx.project.id"
    PROJECT_REF: str = "ctx.project.ref"
    RUN_ID: str = "ctx.run.id"
    RUN_IS_TEST: str = "ctx.run.isTest"
    ATTEMPT_ID: str = "ctx.attempt.id"
    ATTEMPT_NUMBER: str = "ctx.attempt.number"
    TASK_SLUG: str = "ctx.task.id"
    TASK_PATH: str = "ctx.task.filePath"
    WORKER_ID: str = "worker.id"
    WORKER_VERSION: str = "worker.version"
    QUEUE_ID: str = "ctx.queue.id"
    QUEUE_NAME: str = "ctx.queue.name"
    BATCH_ID: str = "ctx.batch.id"
    IDEMPOTENCY_KEY: str = "ctx.run.idempotencyKey"
    MACHINE_PRESET_NAME: str = "ctx.machine.name"
    MACHINE_PRESET_CPU: str = "ctx.machine.cpu"
    MACHINE_PRESET_MEMORY: str = "ctx.machine.memory"
    MACHINE_PRESET_CENTS_PER_MS: str = "ctx.machine.centsPerMs"


@dataclass(frozen=True)
class _SemanticResourceAttributes:
    SERVICE_NAME: str = "service.name"
    SERVICE_NAMESPACE: str = "service.namespace"


@dataclass(frozen=True)
class _Defaults:
    UNKNOWN: str = "unknown"
    PAYLOAD_TYPE: str = "application/json"
    TRIGGER_EXECUTION_ENVIRONMENT: str = "trigger"
    MAX_LOG_MESSAGE_LENGTH: int = 4096
    # Wire timestamps are uint64, the store column is a signed BIGINT
    MAX_TIMESTAMP_NANO: int = 2**63 - 1


SemanticInternalAttributes = _SemanticInternalAttributes()
SemanticResourceAttributes = _SemanticResourceAttributes()
Defaults = _Defaults()


def metadata_key(key: str) -> str:
    """Dotted ``$metadata.<key>`` form used for per-record overrides."""
    return f"{SemanticInternalAttributes.METADATA}.{key}"
