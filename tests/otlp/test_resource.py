"""Tests for otlp/resource: resource property extraction and defaults."""

from taskscope.otlp.resource import extract_resource_properties


def test_identity_fields_default_to_unknown():
    props = extract_resource_properties([])
    for field in (
        "service_name",
        "service_namespace",
        "environment_id",
        "environment_type",
        "organization_id",
        "project_id",
        "project_ref",
        "run_id",
        "task_slug",
    ):
        assert getattr(props, field) == "unknown", field
    assert props.run_is_test is False


def test_optional_fields_stay_absent():
    props = extract_resource_properties([])
    assert props.metadata is None
    assert props.attempt_id is None
    assert props.attempt_number is None
    assert props.queue_name is None
    assert props.machine_preset_cpu is None
    assert props.machine_preset_cents_per_ms is None


def test_extracts_full_run_context(attributes):
    props = extract_resource_properties(
        attributes(
            {
                "$trigger": True,
                "service.name": "worker",
                "service.namespace": "tasks",
                "ctx.environment.id": "env_1",
                "ctx.environment.type": "PRODUCTION",
                "ctx.organization.id": "org_1",
                "ctx.project.id": "proj_1",
                "ctx.project.ref": "proj_ref",
                "ctx.run.id": "run_1",
                "ctx.run.isTest": True,
                "ctx.attempt.id": "attempt_1",
                "ctx.attempt.number": 2,
                "ctx.task.id": "send-email",
                "ctx.task.filePath": "src/trigger/email.ts",
                "worker.id": "worker_1",
                "worker.version": "20240101.1",
                "ctx.queue.id": "queue_1",
                "ctx.queue.name": "task/send-email",
                "ctx.batch.id": "batch_1",
                "ctx.run.idempotencyKey": "idem",
                "ctx.machine.name": "small-1x",
                "ctx.machine.cpu": 0.5,
                "ctx.machine.memory": 1,
                "ctx.machine.centsPerMs": 0.0001,
            }
        )
    )

    assert props.service_name == "worker"
    assert props.service_namespace == "tasks"
    assert props.environment_id == "env_1"
    assert props.environment_type == "PRODUCTION"
    assert props.organization_id == "org_1"
    assert props.project_id == "proj_1"
    assert props.project_ref == "proj_ref"
    assert props.run_id == "run_1"
    assert props.run_is_test is True
    assert props.attempt_id == "attempt_1"
    assert props.attempt_number == 2
    assert props.task_slug == "send-email"
    assert props.task_path == "src/trigger/email.ts"
    assert props.worker_id == "worker_1"
    assert props.worker_version == "20240101.1"
    assert props.queue_id == "queue_1"
    assert props.queue_name == "task/send-email"
    assert props.batch_id == "batch_1"
    assert props.idempotency_key == "idem"
    assert props.machine_preset == "small-1x"
    assert props.machine_preset_cpu == 0.5
    assert props.machine_preset_memory == 1
    assert props.machine_preset_cents_per_ms == 0.0001


def test_metadata_excludes_trigger_marker(attributes):
    props = extract_resource_properties(
        attributes({"$trigger": True, "service.name": "worker"})
    )
    assert props.metadata == {"service.name": "worker"}


def test_wrong_tag_falls_back_to_default(attributes):
    props = extract_resource_properties(
        attributes({"service.name": 12, "ctx.run.isTest": "yes"})
    )
    assert props.service_name == "unknown"
    assert props.run_is_test is False


def test_cents_per_ms_has_no_int_fallback(attributes):
    props = extract_resource_properties(attributes({"ctx.machine.centsPerMs": 1}))
    assert props.machine_preset_cents_per_ms is None
