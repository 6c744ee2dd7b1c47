import logging
import zlib

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from google.protobuf.message import DecodeError, Message
from opentelemetry.proto.collector.logs.v1.logs_service_pb2 import (
    ExportLogsServiceRequest,
)
from opentelemetry.proto.collector.trace.v1.trace_service_pb2 import (
    ExportTraceServiceRequest,
)

from taskscope.otlp.exporter import OTLPExporter

logger = logging.getLogger(__name__)
router = APIRouter()

PROTOBUF_CONTENT_TYPE = "application/x-protobuf"


def get_otlp_exporter(request: Request) -> OTLPExporter:
    return request.app.state.otlp_exporter


async def _read_export_request(request: Request, message: Message) -> Message:
    """Decode an OTLP/HTTP protobuf body (optionally gzip encoded) into *message*."""
    content_type = request.headers.get("content-type", "")
    if PROTOBUF_CONTENT_TYPE not in content_type:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported content type, expected {PROTOBUF_CONTENT_TYPE}",
        )

    body = await request.body()

    # The OTel SDK might send data with gzip compression
    content_encoding = request.headers.get("content-encoding", "")
    try:
        if "gzip" in content_encoding:
            body = zlib.decompress(body, 16 + zlib.MAX_WBITS)
        message.ParseFromString(body)
    except (zlib.error, DecodeError) as e:
        logger.warning(f"Rejected undecodable OTLP body ({len(body)} bytes): {e}")
        raise HTTPException(
            status_code=400, detail="Invalid OTLP request body"
        ) from e

    return message


@router.post("/traces")
async def export_traces_endpoint(
    request: Request,
    immediate: bool = False,
    exporter: OTLPExporter = Depends(get_otlp_exporter),
):
    """
    Endpoint to receive OTLP traces over HTTP/protobuf.
    """
    export_request = await _read_export_request(request, ExportTraceServiceRequest())
    response = await exporter.export_traces(export_request, immediate=immediate)
    return Response(
        content=response.SerializeToString(), media_type=PROTOBUF_CONTENT_TYPE
    )


@router.post("/logs")
async def export_logs_endpoint(
    request: Request,
    immediate: bool = False,
    exporter: OTLPExporter = Depends(get_otlp_exporter),
):
    """
    Endpoint to receive OTLP logs over HTTP/protobuf.
    """
    export_request = await _read_export_request(request, ExportLogsServiceRequest())
    response = await exporter.export_logs(export_request, immediate=immediate)
    return Response(
        content=response.SerializeToString(), media_type=PROTOBUF_CONTENT_TYPE
    )
