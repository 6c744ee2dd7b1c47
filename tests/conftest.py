"""
Shared test fixtures for taskscope.

OTLP requests are built from the real opentelemetry-proto messages; the
event store and the Celery broker are always mocked.
"""

import os
from collections.abc import Iterable
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from opentelemetry.proto.collector.logs.v1 import logs_service_pb2
from opentelemetry.proto.collector.trace.v1 import trace_service_pb2
from opentelemetry.proto.common.v1 import common_pb2
from opentelemetry.proto.logs.v1 import logs_pb2
from opentelemetry.proto.resource.v1 import resource_pb2
from opentelemetry.proto.trace.v1 import trace_pb2

os.environ.setdefault("OTLP_EXPORTER_VERBOSE", "false")

from taskscope.main import app  # noqa: E402
from taskscope.otlp.exporter import OTLPExporter  # noqa: E402

TRACE_ID = bytes.fromhex("0af7651916cd43dd8448eb211c80319c")
SPAN_ID = bytes.fromhex("b7ad6b7169203331")


# ---------------------------------------------------------------------------
# Attribute builders
# ---------------------------------------------------------------------------


def _to_any_value(value) -> common_pb2.AnyValue:
    if value is None:
        return common_pb2.AnyValue()
    if isinstance(value, common_pb2.AnyValue):
        return value
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return common_pb2.AnyValue(bool_value=value)
    if isinstance(value, int):
        return common_pb2.AnyValue(int_value=value)
    if isinstance(value, float):
        return common_pb2.AnyValue(double_value=value)
    if isinstance(value, bytes):
        return common_pb2.AnyValue(bytes_value=value)
    if isinstance(value, str):
        return common_pb2.AnyValue(string_value=value)
    raise TypeError(f"Unsupported attribute value: {value!r}")


def _kv(key: str, value) -> common_pb2.KeyValue:
    return common_pb2.KeyValue(key=key, value=_to_any_value(value))


def _attributes(values: dict | Iterable[tuple] | None) -> list[common_pb2.KeyValue]:
    """Build KeyValues from a dict, or from (key, value) pairs to allow duplicates."""
    if not values:
        return []
    items = values.items() if isinstance(values, dict) else values
    return [_kv(key, value) for key, value in items]


@pytest.fixture()
def kv():
    return _kv


@pytest.fixture()
def attributes():
    return _attributes


@pytest.fixture()
def trace_id() -> bytes:
    return TRACE_ID


@pytest.fixture()
def span_id() -> bytes:
    return SPAN_ID


# ---------------------------------------------------------------------------
# Span / trace request factories
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_span():
    def _create(
        name: str = "run-task",
        trace_id: bytes = TRACE_ID,
        span_id: bytes = SPAN_ID,
        parent_span_id: bytes = b"",
        kind: int = trace_pb2.Span.SPAN_KIND_INTERNAL,
        status_code: int = trace_pb2.Status.STATUS_CODE_OK,
        status_message: str = "",
        start: int = 1000,
        end: int = 5000,
        attributes: dict | Iterable[tuple] | None = None,
        events: list[trace_pb2.Span.Event] | None = None,
        links: list[trace_pb2.Span.Link] | None = None,
    ) -> trace_pb2.Span:
        return trace_pb2.Span(
            trace_id=trace_id,
            span_id=span_id,
            parent_span_id=parent_span_id,
            name=name,
            kind=kind,
            status=trace_pb2.Status(code=status_code, message=status_message),
            start_time_unix_nano=start,
            end_time_unix_nano=end,
            attributes=_attributes(attributes),
            events=events or [],
            links=links or [],
        )

    return _create


@pytest.fixture()
def make_resource_spans():
    def _create(
        resource_attributes: dict | Iterable[tuple] | None = None,
        spans: list[trace_pb2.Span] | None = None,
    ) -> trace_pb2.ResourceSpans:
        return trace_pb2.ResourceSpans(
            resource=resource_pb2.Resource(
                attributes=_attributes(resource_attributes)
            ),
            scope_spans=[trace_pb2.ScopeSpans(spans=spans or [])],
        )

    return _create


@pytest.fixture()
def make_trace_request():
    def _create(
        *resource_spans: trace_pb2.ResourceSpans,
    ) -> trace_service_pb2.ExportTraceServiceRequest:
        return trace_service_pb2.ExportTraceServiceRequest(
            resource_spans=list(resource_spans)
        )

    return _create


# ---------------------------------------------------------------------------
# Log / logs request factories
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_log():
    def _create(
        body=None,
        severity_number: int = logs_pb2.SEVERITY_NUMBER_INFO,
        severity_text: str = "INFO",
        trace_id: bytes = TRACE_ID,
        span_id: bytes = SPAN_ID,
        time: int = 2000,
        observed_time: int = 0,
        attributes: dict | Iterable[tuple] | None = None,
    ) -> logs_pb2.LogRecord:
        record = logs_pb2.LogRecord(
            severity_number=severity_number,
            severity_text=severity_text,
            trace_id=trace_id,
            span_id=span_id,
            time_unix_nano=time,
            observed_time_unix_nano=observed_time,
            attributes=_attributes(attributes),
        )
        if body is not None:
            record.body.CopyFrom(_to_any_value(body))
        return record

    return _create


@pytest.fixture()
def make_resource_logs():
    def _create(
        resource_attributes: dict | Iterable[tuple] | None = None,
        logs: list[logs_pb2.LogRecord] | None = None,
    ) -> logs_pb2.ResourceLogs:
        return logs_pb2.ResourceLogs(
            resource=resource_pb2.Resource(
                attributes=_attributes(resource_attributes)
            ),
            scope_logs=[logs_pb2.ScopeLogs(log_records=logs or [])],
        )

    return _create


@pytest.fixture()
def make_logs_request():
    def _create(
        *resource_logs: logs_pb2.ResourceLogs,
    ) -> logs_service_pb2.ExportLogsServiceRequest:
        return logs_service_pb2.ExportLogsServiceRequest(
            resource_logs=list(resource_logs)
        )

    return _create


# ---------------------------------------------------------------------------
# Repository mock
# ---------------------------------------------------------------------------


@pytest.fixture()
def fake_repository():
    """Event repository double recording every insert call."""
    repository = MagicMock()
    counter = iter(range(1, 1_000_000))
    repository.generate_span_id.side_effect = lambda: f"{next(counter):016x}"
    repository.insert_many = AsyncMock(return_value=None)
    repository.insert_many_immediate = AsyncMock(return_value=None)
    return repository


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


@pytest.fixture()
def otlp_exporter(fake_repository):
    return OTLPExporter(fake_repository, enricher=lambda events: events)


@pytest_asyncio.fixture(scope="function")
async def test_client(otlp_exporter):
    from taskscope.api.v1.endpoints.otlp.api import get_otlp_exporter

    app.dependency_overrides[get_otlp_exporter] = lambda: otlp_exporter

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()
