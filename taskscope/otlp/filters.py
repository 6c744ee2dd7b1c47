"""
Admission filters applied per resource batch before any mapping.

Spans fail open: a batch carrying neither the trigger marker nor an
execution environment comes from the platform's own instrumentation and
is let through. Logs fail closed: only batches explicitly marked with
``$trigger = true`` are kept.
"""

import logging
from collections.abc import Iterable

from opentelemetry.proto.logs.v1.logs_pb2 import ResourceLogs
from opentelemetry.proto.trace.v1.trace_pb2 import ResourceSpans

from taskscope.otlp.attributes import Defaults, SemanticInternalAttributes as Attrs
from taskscope.otlp.values import bool_value, find_attribute, string_value

logger = logging.getLogger(__name__)


def is_admitted_resource_spans(resource_spans: ResourceSpans) -> bool:
    attributes = resource_spans.resource.attributes
    trigger = find_attribute(attributes, Attrs.TRIGGER)
    execution_environment = find_attribute(attributes, Attrs.EXECUTION_ENVIRONMENT)

    if trigger is None and execution_environment is None:
        logger.debug(
            f"Admitting unmarked resource span batch "
            f"({sum(len(s.spans) for s in resource_spans.scope_spans)} spans)"
        )
        return True

    if (
        execution_environment is not None
        and string_value(execution_environment.value)
        == Defaults.TRIGGER_EXECUTION_ENVIRONMENT
    ):
        return True

    if trigger is None:
        return False
    return bool_value(trigger.value) is True


def is_admitted_resource_logs(resource_logs: ResourceLogs) -> bool:
    trigger = find_attribute(resource_logs.resource.attributes, Attrs.TRIGGER)
    if trigger is None:
        return False
    return bool_value(trigger.value) is True


def filter_resource_spans(
    resource_spans: Iterable[ResourceSpans],
) -> list[ResourceSpans]:
    return [batch for batch in resource_spans if is_admitted_resource_spans(batch)]


def filter_resource_logs(resource_logs: Iterable[ResourceLogs]) -> list[ResourceLogs]:
    return [batch for batch in resource_logs if is_admitted_resource_logs(batch)]
