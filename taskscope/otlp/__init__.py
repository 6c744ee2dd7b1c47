"""
OTLP normalization pipeline.

Turns OTLP trace and log export requests into CreatableEvent records:
admission filtering per resource batch, attribute decoding and
projection, resource property extraction, and span / log mapping.
"""
