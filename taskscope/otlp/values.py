"""
Decoding of the OTLP ``AnyValue`` tagged union and identifier formatting.

A value is decoded with protobuf's ``WhichOneof``; a tag that does not
match the requested variant decodes to ``None`` so callers can apply
their own default. Nothing in here raises on bad input.
"""

from collections.abc import Iterable

from opentelemetry.proto.common.v1.common_pb2 import AnyValue, KeyValue

from taskscope.models.pydantic_models.events import Scalar

STRING = "string_value"
INT = "int_value"
DOUBLE = "double_value"
BOOL = "bool_value"
BYTES = "bytes_value"


def value_kind(value: AnyValue | None) -> str | None:
    """Name of the populated variant, or None when nothing is set."""
    if value is None:
        return None
    return value.WhichOneof("value")


def string_value(value: AnyValue | None) -> str | None:
    return value.string_value if value_kind(value) == STRING else None


def int_value(value: AnyValue | None) -> int | None:
    return int(value.int_value) if value_kind(value) == INT else None


def double_value(value: AnyValue | None) -> float | None:
    return float(value.double_value) if value_kind(value) == DOUBLE else None


def bool_value(value: AnyValue | None) -> bool | None:
    return bool(value.bool_value) if value_kind(value) == BOOL else None


def bytes_value(value: AnyValue | None) -> bytes | None:
    return bytes(value.bytes_value) if value_kind(value) == BYTES else None


def binary_to_hex(buffer: bytes | str | None) -> str | None:
    """Lowercase hex of an identifier.

    Already formatted strings pass through unchanged; empty or missing
    input returns None, never an empty string.
    """
    if not buffer:
        return None
    if isinstance(buffer, str):
        return buffer
    return bytes(buffer).hex()


def decode_scalar(value: AnyValue | None) -> Scalar | None:
    """Decode in the order string, int, double, bool, bytes-as-hex."""
    kind = value_kind(value)
    if kind == STRING:
        return value.string_value
    if kind == INT:
        return int(value.int_value)
    if kind == DOUBLE:
        return float(value.double_value)
    if kind == BOOL:
        return bool(value.bool_value)
    if kind == BYTES:
        return binary_to_hex(value.bytes_value)
    return None


def find_attribute(attributes: Iterable[KeyValue], key: str) -> KeyValue | None:
    # Keys are not guaranteed unique on the wire; the first one wins
    for attribute in attributes:
        if attribute.key == key:
            return attribute
    return None


def extract_string(
    attributes: Iterable[KeyValue], key: str, default: str | None = None
) -> str | None:
    attribute = find_attribute(attributes, key)
    if attribute is None:
        return default
    value = string_value(attribute.value)
    return default if value is None else value


def extract_int(
    attributes: Iterable[KeyValue], key: str, default: int | None = None
) -> int | None:
    attribute = find_attribute(attributes, key)
    if attribute is None:
        return default
    value = int_value(attribute.value)
    return default if value is None else value


def extract_double(
    attributes: Iterable[KeyValue], key: str, default: float | None = None
) -> float | None:
    attribute = find_attribute(attributes, key)
    if attribute is None:
        return default
    value = double_value(attribute.value)
    return default if value is None else value


def extract_bool(
    attributes: Iterable[KeyValue], key: str, default: bool | None = None
) -> bool | None:
    attribute = find_attribute(attributes, key)
    if attribute is None:
        return default
    value = bool_value(attribute.value)
    return default if value is None else value


def extract_number(attributes: Iterable[KeyValue], key: str) -> float | int | None:
    """Double first, then int, for fields that arrive with either tag."""
    value = extract_double(attributes, key)
    if value is None:
        return extract_int(attributes, key)
    return value
