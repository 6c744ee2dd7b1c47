"""
taskscope ingest entry point.

Receives OTLP/HTTP trace and log exports and writes them to the task event
store through a single OTLPExporter built at startup.
"""

import logging
from logging import Filter, getLogger

from fastapi import FastAPI

from taskscope.api.v1.router import otlp_router
from taskscope.config import settings, setup_opentelemetry
from taskscope.otlp.exporter import create_otlp_exporter
from taskscope.repository import EventRepository

logger = getLogger(__name__)
logger.setLevel(logging.INFO)


class HealthCheckFilter(Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.getMessage().find("/health") == -1


logging.getLogger("uvicorn.access").addFilter(HealthCheckFilter())


app = FastAPI(title=settings.app_name, debug=settings.debug, redirect_slashes=False)


@app.on_event("startup")
async def startup_event():
    logger.info("--- Starting taskscope ingest ---")

    setup_opentelemetry()

    if not hasattr(app.state, "otlp_exporter"):
        app.state.otlp_exporter = create_otlp_exporter(EventRepository())

    logger.info("--- taskscope startup completed ---")


@app.on_event("shutdown")
async def shutdown_event():
    try:
        logger.info("--- Server shutting down! ---")

        from taskscope.db.session import dispose_engine

        await dispose_engine()
        logger.info("--- Database connections closed. ---")
    except Exception as e:
        logger.error(f"Warning: Error during shutdown: {e}")


app.include_router(otlp_router)


@app.get("/health")
def health_check():
    return {"status": "healthy"}
