"""
OTLPExporter: the facade the transport calls for every export request.

filter resource batches -> map spans / logs -> enrich -> insert (immediate
or batched). Dispatch failures propagate unchanged; there is no partial
success and no retry at this layer.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Protocol

from opentelemetry import trace
from opentelemetry.proto.collector.logs.v1.logs_service_pb2 import (
    ExportLogsServiceRequest,
    ExportLogsServiceResponse,
)
from opentelemetry.proto.collector.trace.v1.trace_service_pb2 import (
    ExportTraceServiceRequest,
    ExportTraceServiceResponse,
)

from taskscope.config import settings
from taskscope.enrichment import enrich_creatable_events
from taskscope.models.pydantic_models.events import CreatableEvent
from taskscope.otlp.filters import filter_resource_logs, filter_resource_spans
from taskscope.otlp.logs import convert_logs_to_creatable_events
from taskscope.otlp.spans import convert_spans_to_creatable_events

logger = logging.getLogger(__name__)

Enricher = Callable[[list[CreatableEvent]], list[CreatableEvent]]


class EventRepositoryInterface(Protocol):
    def generate_span_id(self) -> str: ...

    async def insert_many(self, events: Sequence[CreatableEvent]) -> None: ...

    async def insert_many_immediate(
        self, events: Sequence[CreatableEvent]
    ) -> None: ...


class OTLPExporter:
    def __init__(
        self,
        event_repository: EventRepositoryInterface,
        verbose: bool = False,
        enricher: Enricher = enrich_creatable_events,
    ):
        self._event_repository = event_repository
        self._verbose = verbose
        self._enricher = enricher
        self._tracer = trace.get_tracer("otlp-exporter")

    async def export_traces(
        self, request: ExportTraceServiceRequest, immediate: bool = False
    ) -> ExportTraceServiceResponse:
        with self._tracer.start_as_current_span("exportTraces") as span:
            total_spans = sum(
                len(scope_spans.spans)
                for resource_spans in request.resource_spans
                for scope_spans in resource_spans.scope_spans
            )
            self._log_verbose(
                f"Exporting traces: {len(request.resource_spans)} resource spans, "
                f"{total_spans} spans"
            )

            admitted = filter_resource_spans(request.resource_spans)
            events: list[CreatableEvent] = []
            for resource_spans in admitted:
                events.extend(convert_spans_to_creatable_events(resource_spans))

            admitted_spans = sum(
                len(scope_spans.spans)
                for resource_spans in admitted
                for scope_spans in resource_spans.scope_spans
            )
            self._log_dropped("exportTraces", admitted_spans, len(events))

            await self._dispatch(events, immediate, "exportTraces", span)
            return ExportTraceServiceResponse()

    async def export_logs(
        self, request: ExportLogsServiceRequest, immediate: bool = False
    ) -> ExportLogsServiceResponse:
        with self._tracer.start_as_current_span("exportLogs") as span:
            total_logs = sum(
                len(scope_logs.log_records)
                for resource_logs in request.resource_logs
                for scope_logs in resource_logs.scope_logs
            )
            self._log_verbose(
                f"Exporting logs: {len(request.resource_logs)} resource logs, "
                f"{total_logs} log records"
            )

            admitted = filter_resource_logs(request.resource_logs)
            events: list[CreatableEvent] = []
            for resource_logs in admitted:
                events.extend(
                    convert_logs_to_creatable_events(
                        resource_logs, self._event_repository.generate_span_id
                    )
                )

            admitted_logs = sum(
                len(scope_logs.log_records)
                for resource_logs in admitted
                for scope_logs in resource_logs.scope_logs
            )
            self._log_dropped("exportLogs", admitted_logs, len(events))

            await self._dispatch(events, immediate, "exportLogs", span)
            return ExportLogsServiceResponse()

    async def _dispatch(
        self,
        events: list[CreatableEvent],
        immediate: bool,
        prefix: str,
        span: trace.Span,
    ) -> None:
        enriched_events = self._enricher(events)

        if self._verbose:
            for event in enriched_events:
                logger.debug(f"Exporting {prefix} event: {event.model_dump()}")

        span.set_attribute("event_count", len(enriched_events))

        if immediate:
            await self._event_repository.insert_many_immediate(enriched_events)
        else:
            await self._event_repository.insert_many(enriched_events)

    def _log_verbose(self, message: str) -> None:
        if self._verbose:
            logger.debug(message)

    def _log_dropped(self, prefix: str, admitted: int, mapped: int) -> None:
        dropped = admitted - mapped
        if dropped and self._verbose:
            logger.debug(f"{prefix}: dropped {dropped} malformed records")


def create_otlp_exporter(event_repository: EventRepositoryInterface) -> OTLPExporter:
    return OTLPExporter(event_repository, verbose=settings.otlp_exporter_verbose)
