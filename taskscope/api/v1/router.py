"""
Router assembly for the OTLP/HTTP ingest surface.

OTLP exporters post to ``<base>/v1/traces`` and ``<base>/v1/logs``, so the
otlp router is mounted under ``/v1`` rather than an ``/api`` prefix.
"""

from fastapi import APIRouter

from taskscope.api.v1.endpoints.otlp import api as otlp_api

otlp_router = APIRouter()
otlp_router.include_router(otlp_api.router, prefix="/v1", tags=["otlp"])
