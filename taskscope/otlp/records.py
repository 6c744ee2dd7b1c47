"""
Field rules shared by the span and log mappers.
"""

from collections.abc import Sequence
from typing import Any

from opentelemetry.proto.common.v1.common_pb2 import KeyValue

from taskscope.models.pydantic_models.events import ScalarMap
from taskscope.otlp.attributes import SemanticInternalAttributes as Attrs, metadata_key
from taskscope.otlp.projection import merge, project
from taskscope.otlp.resource import ResourceProperties
from taskscope.otlp.values import extract_int, extract_string


def record_properties(
    attributes: Sequence[KeyValue], resource_attributes: Sequence[KeyValue]
) -> ScalarMap | None:
    """Record attributes plus ``$metadata.``-prefixed resource attributes.

    Identity markers are excluded from both sides; on a key clash the
    resource entry wins.
    """
    return merge(
        project(attributes, [Attrs.SPAN_ID, Attrs.SPAN_PARTIAL]),
        project(resource_attributes, [Attrs.TRIGGER], prefix=Attrs.METADATA),
    )


def resource_fields(
    resource: ResourceProperties, attributes: Sequence[KeyValue]
) -> dict[str, Any]:
    """Resource properties with per-record attempt overrides applied."""
    fields = resource.model_dump()

    attempt_id = extract_string(attributes, metadata_key(Attrs.ATTEMPT_ID))
    if attempt_id is not None:
        fields["attempt_id"] = attempt_id

    attempt_number = extract_int(attributes, metadata_key(Attrs.ATTEMPT_NUMBER))
    if attempt_number is not None:
        fields["attempt_number"] = attempt_number

    return fields
