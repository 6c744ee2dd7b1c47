"""
Projection of OTLP attribute lists onto flat scalar maps.

``None`` and ``{}`` are not interchangeable here: ``project`` returns None
whenever nothing survives the exclusion list, and callers use that to
omit a field entirely.
"""

from collections.abc import Collection, Iterable

from opentelemetry.proto.common.v1.common_pb2 import KeyValue

from taskscope.models.pydantic_models.events import Scalar, ScalarMap
from taskscope.otlp.values import decode_scalar


def project(
    attributes: Iterable[KeyValue] | None,
    exclude_keys: Collection[str] = (),
    prefix: str | None = None,
) -> ScalarMap | None:
    """Build ``{[prefix.]key: scalar}`` from *attributes*.

    Attributes whose key is in *exclude_keys* are skipped. Values that
    decode to none of the scalar variants are dropped from the map.
    Returns None (not an empty dict) when no attribute survives.
    """
    if not attributes:
        return None

    remaining = [
        attribute for attribute in attributes if attribute.key not in exclude_keys
    ]
    if not remaining:
        return None

    result: ScalarMap = {}
    for attribute in remaining:
        value = decode_scalar(attribute.value)
        if value is None:
            continue
        key = f"{prefix}.{attribute.key}" if prefix else attribute.key
        result[key] = value
    return result


def pick(attributes: Iterable[KeyValue], key_prefix: str) -> list[KeyValue]:
    """Select one attribute group and strip the group prefix from its keys.

    ``$output.name`` becomes ``name``; the bare group key (``$output``)
    is kept as is so it can act as the group's sentinel.
    """
    nested_prefix = f"{key_prefix}."
    picked = []
    for attribute in attributes:
        if attribute.key == key_prefix:
            picked.append(KeyValue(key=attribute.key, value=attribute.value))
        elif attribute.key.startswith(nested_prefix):
            picked.append(
                KeyValue(key=attribute.key[len(nested_prefix):], value=attribute.value)
            )
    return picked


def unwrap_singleton(
    values: ScalarMap | None, sentinel_key: str
) -> Scalar | ScalarMap | None:
    """Collapse a group map to its sentinel scalar.

    When the sentinel key is present its value wins and the rest of the
    map is discarded.
    """
    if values is None:
        return None
    if sentinel_key in values:
        return values[sentinel_key]
    return values


def merge(*maps: ScalarMap | None) -> ScalarMap | None:
    """Shallow merge left to right, None when every input is None."""
    present = [m for m in maps if m is not None]
    if not present:
        return None
    merged: ScalarMap = {}
    for m in present:
        merged.update(m)
    return merged


def project_group(
    attributes: Iterable[KeyValue], group: str
) -> Scalar | ScalarMap | None:
    """Project one ``$group`` attribute family and unwrap its sentinel."""
    return unwrap_singleton(project(pick(attributes, group)), group)
