"""
Tests for otlp/values: AnyValue decoding and identifier formatting.

Covers:
  - each variant decodes only through its own accessor
  - unset values decode to None everywhere
  - decode_scalar order and bytes-as-hex
  - binary_to_hex: lowercase, idempotent on strings, None on empty input
  - extract_* helpers: first match wins, tag mismatch falls back to default
  - extract_number: double first, int second
"""

import pytest
from opentelemetry.proto.common.v1.common_pb2 import AnyValue

from taskscope.otlp.values import (
    binary_to_hex,
    bool_value,
    decode_scalar,
    double_value,
    extract_bool,
    extract_double,
    extract_int,
    extract_number,
    extract_string,
    int_value,
    string_value,
    value_kind,
)


class TestVariantAccessors:
    def test_string_value_only_matches_string_tag(self):
        assert string_value(AnyValue(string_value="hi")) == "hi"
        assert string_value(AnyValue(int_value=1)) is None

    def test_int_value_only_matches_int_tag(self):
        assert int_value(AnyValue(int_value=42)) == 42
        assert int_value(AnyValue(double_value=42.0)) is None

    def test_double_value_only_matches_double_tag(self):
        assert double_value(AnyValue(double_value=1.5)) == 1.5
        assert double_value(AnyValue(int_value=1)) is None

    def test_bool_value_false_is_not_absent(self):
        assert bool_value(AnyValue(bool_value=False)) is False
        assert bool_value(AnyValue(string_value="true")) is None

    def test_empty_string_is_still_a_string(self):
        assert string_value(AnyValue(string_value="")) == ""

    def test_unset_value_has_no_kind(self):
        assert value_kind(AnyValue()) is None
        assert value_kind(None) is None
        assert string_value(None) is None


@pytest.mark.parametrize(
    "value,expected",
    [
        (AnyValue(string_value="abc"), "abc"),
        (AnyValue(int_value=-7), -7),
        (AnyValue(double_value=0.25), 0.25),
        (AnyValue(bool_value=True), True),
        (AnyValue(bytes_value=b"\xde\xad"), "dead"),
        (AnyValue(), None),
    ],
    ids=["string", "int", "double", "bool", "bytes", "unset"],
)
def test_decode_scalar(value, expected):
    decoded = decode_scalar(value)
    assert decoded == expected
    assert type(decoded) is type(expected)


class TestBinaryToHex:
    def test_formats_lowercase_hex(self):
        assert binary_to_hex(b"\xAB\xCD\xEF\x01") == "abcdef01"

    def test_string_input_passes_through(self):
        assert binary_to_hex("abc123") == "abc123"

    def test_hex_round_trip_is_stable(self):
        hex_id = "0af7651916cd43dd8448eb211c80319c"
        assert binary_to_hex(bytes.fromhex(hex_id)) == hex_id
        assert binary_to_hex(binary_to_hex(bytes.fromhex(hex_id))) == hex_id

    @pytest.mark.parametrize("empty", [None, b"", ""], ids=["none", "bytes", "str"])
    def test_absent_input_returns_none_not_empty_string(self, empty):
        assert binary_to_hex(empty) is None


class TestExtractors:
    def test_first_matching_key_wins(self, attributes):
        attrs = attributes([("name", "first"), ("name", "second")])
        assert extract_string(attrs, "name") == "first"

    def test_missing_key_returns_default(self, attributes):
        attrs = attributes({"other": "x"})
        assert extract_string(attrs, "name") is None
        assert extract_string(attrs, "name", "unknown") == "unknown"

    def test_tag_mismatch_returns_default(self, attributes):
        attrs = attributes({"count": "3"})
        assert extract_int(attrs, "count") is None
        assert extract_int(attrs, "count", 0) == 0

    def test_first_match_with_wrong_tag_does_not_fall_through(self, attributes):
        attrs = attributes([("count", "3"), ("count", 3)])
        assert extract_int(attrs, "count") is None

    def test_extract_bool_and_double(self, attributes):
        attrs = attributes({"flag": True, "ratio": 0.5})
        assert extract_bool(attrs, "flag") is True
        assert extract_double(attrs, "ratio") == 0.5
        assert extract_double(attrs, "flag") is None

    def test_extract_number_prefers_double(self, attributes):
        assert extract_number(attributes({"cpu": 0.5}), "cpu") == 0.5

    def test_extract_number_falls_back_to_int(self, attributes):
        value = extract_number(attributes({"cpu": 2}), "cpu")
        assert value == 2
        assert isinstance(value, int)

    def test_extract_number_ignores_strings(self, attributes):
        assert extract_number(attributes({"cpu": "2"}), "cpu") is None
