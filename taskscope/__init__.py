"""
taskscope: event store ingest for task-execution observability.

This package converts OTLP trace and log export requests into flat
CreatableEvent records and hands them to the task event store, either
immediately or through the Celery batch writer.

Data model: every span or log record becomes one event, scoped by the
environment, project and run identity carried on its resource.
"""
