"""
Resource property extraction.

Pulls the run / task / environment identity off a resource's attribute
list once per resource batch; the result is merged into every event
produced from that batch.
"""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict
from opentelemetry.proto.common.v1.common_pb2 import KeyValue

from taskscope.otlp.attributes import (
    Defaults,
    SemanticInternalAttributes as Attrs,
    SemanticResourceAttributes,
)
from taskscope.models.pydantic_models.events import ScalarMap
from taskscope.otlp.projection import project
from taskscope.otlp.values import (
    extract_bool,
    extract_double,
    extract_int,
    extract_number,
    extract_string,
)


class ResourceProperties(BaseModel):
    model_config = ConfigDict(frozen=True)

    metadata: ScalarMap | None = None
    service_name: str = Defaults.UNKNOWN
    service_namespace: str = Defaults.UNKNOWN
    environment_id: str = Defaults.UNKNOWN
    environment_type: str = Defaults.UNKNOWN
    organization_id: str = Defaults.UNKNOWN
    project_id: str = Defaults.UNKNOWN
    project_ref: str = Defaults.UNKNOWN
    run_id: str = Defaults.UNKNOWN
    run_is_test: bool = False
    attempt_id: str | None = None
    attempt_number: int | None = None
    task_slug: str = Defaults.UNKNOWN
    task_path: str | None = None
    worker_id: str | None = None
    worker_version: str | None = None
    queue_id: str | None = None
    queue_name: str | None = None
    batch_id: str | None = None
    idempotency_key: str | None = None
    machine_preset: str | None = None
    machine_preset_cpu: float | int | None = None
    machine_preset_memory: float | int | None = None
    machine_preset_cents_per_ms: float | None = None


def extract_resource_properties(attributes: Sequence[KeyValue]) -> ResourceProperties:
    unknown = Defaults.UNKNOWN
    return ResourceProperties(
        metadata=project(attributes, [Attrs.TRIGGER]),
        service_name=extract_string(
            attributes, SemanticResourceAttributes.SERVICE_NAME, unknown
        ),
        service_namespace=extract_string(
            attributes, SemanticResourceAttributes.SERVICE_NAMESPACE, unknown
        ),
        environment_id=extract_string(attributes, Attrs.ENVIRONMENT_ID, unknown),
        environment_type=extract_string(attributes, Attrs.ENVIRONMENT_TYPE, unknown),
        organization_id=extract_string(attributes, Attrs.ORGANIZATION_ID, unknown),
        project_id=extract_string(attributes, Attrs.PROJECT_ID, unknown),
        project_ref=extract_string(attributes, Attrs.PROJECT_REF, unknown),
        run_id=extract_string(attributes, Attrs.RUN_ID, unknown),
        run_is_test=extract_bool(attributes, Attrs.RUN_IS_TEST, False),
        attempt_id=extract_string(attributes, Attrs.ATTEMPT_ID),
        attempt_number=extract_int(attributes, Attrs.ATTEMPT_NUMBER),
        task_slug=extract_string(attributes, Attrs.TASK_SLUG, unknown),
        task_path=extract_string(attributes, Attrs.TASK_PATH),
        worker_id=extract_string(attributes, Attrs.WORKER_ID),
        worker_version=extract_string(attributes, Attrs.WORKER_VERSION),
        queue_id=extract_string(attributes, Attrs.QUEUE_ID),
        queue_name=extract_string(attributes, Attrs.QUEUE_NAME),
        batch_id=extract_string(attributes, Attrs.BATCH_ID),
        idempotency_key=extract_string(attributes, Attrs.IDEMPOTENCY_KEY),
        machine_preset=extract_string(attributes, Attrs.MACHINE_PRESET_NAME),
        machine_preset_cpu=extract_number(attributes, Attrs.MACHINE_PRESET_CPU),
        machine_preset_memory=extract_number(attributes, Attrs.MACHINE_PRESET_MEMORY),
        machine_preset_cents_per_ms=extract_double(
            attributes, Attrs.MACHINE_PRESET_CENTS_PER_MS
        ),
    )
