"""
Observability utilities for cedar_domain.

Tracing is optional: when OpenTelemetry is not installed, or tracing is
disabled, components fall back to a no-op tracer.

Example:
    >>> from cedar_domain.observability import create_tracer
    >>> tracer = create_tracer(__name__, enable_tracing=True)
    >>> with tracer.span("operation"):
    ...     pass
"""

from cedar_domain.observability.attributes import (
    ATTR_AGGREGATE_ID,
    ATTR_AGGREGATE_TYPE,
    ATTR_BUCKET_ID,
    ATTR_COMMIT_ID,
    ATTR_EVENT_COUNT,
    ATTR_EXPECTED_VERSION,
    ATTR_VERSION,
)
from cedar_domain.observability.tracer import (
    OTEL_AVAILABLE,
    MockTracer,
    NullTracer,
    OpenTelemetryTracer,
    RecordedSpan,
    Tracer,
    create_tracer,
)

__all__ = [
    "OTEL_AVAILABLE",
    "Tracer",
    "NullTracer",
    "OpenTelemetryTracer",
    "MockTracer",
    "RecordedSpan",
    "create_tracer",
    "ATTR_AGGREGATE_ID",
    "ATTR_AGGREGATE_TYPE",
    "ATTR_BUCKET_ID",
    "ATTR_COMMIT_ID",
    "ATTR_EVENT_COUNT",
    "ATTR_EXPECTED_VERSION",
    "ATTR_VERSION",
]
