"""
Tracers used by cedar_domain repositories.

A repository takes a tracer at construction and wraps get_by_id() and
save() in spans named "cedar_domain.repository.<operation>". Which tracer
it gets decides where the spans go:

- OpenTelemetryTracer: the active OpenTelemetry tracer provider
- NullTracer: nowhere (OpenTelemetry missing or tracing disabled)
- MockTracer: an in-memory list, for assertions in tests

Example:
    >>> repo = InMemoryAggregateRepository(tracer=MockTracer())
    >>> await repo.save(order, commit_id=uuid4())
    >>> repo._tracer.span_names
    ['cedar_domain.repository.save']
"""

from __future__ import annotations

import contextlib
from collections.abc import Iterator
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING, Any, NamedTuple, Protocol, runtime_checkable

if TYPE_CHECKING:
    from opentelemetry.trace import Span

try:
    from opentelemetry import trace

    OTEL_AVAILABLE = True
except ImportError:
    OTEL_AVAILABLE = False
    trace = None  # type: ignore[assignment]

SpanAttributes = dict[str, Any]


@runtime_checkable
class Tracer(Protocol):
    """What a repository needs from a tracer."""

    def span(
        self,
        name: str,
        attributes: SpanAttributes | None = None,
    ) -> AbstractContextManager[Span | None]:
        """
        Open a span around a repository operation.

        The context manager yields the live span, or None when spans are not
        exported. Callers only set result attributes (event count, version)
        when they get a span back.
        """
        ...

    @property
    def enabled(self) -> bool:
        """Check if spans are exported anywhere."""
        ...


class NullTracer:
    """Tracer that exports nothing; every span yields None."""

    @contextlib.contextmanager
    def span(self, name: str, attributes: SpanAttributes | None = None) -> Iterator[None]:
        yield None

    @property
    def enabled(self) -> bool:
        return False


class OpenTelemetryTracer:
    """
    Tracer backed by OpenTelemetry.

    Spans become children of whatever span is current, so a repository call
    made inside a request span shows up under it.

    Raises:
        ImportError: If opentelemetry-api is not installed
    """

    def __init__(self, tracer_name: str) -> None:
        from opentelemetry import trace

        self._tracer = trace.get_tracer(tracer_name)

    def span(
        self,
        name: str,
        attributes: SpanAttributes | None = None,
    ) -> AbstractContextManager[Span | None]:
        return self._tracer.start_as_current_span(name, attributes=attributes or {})

    @property
    def enabled(self) -> bool:
        return True


class RecordedSpan(NamedTuple):
    """A span captured by MockTracer."""

    name: str
    attributes: SpanAttributes | None


class MockTracer:
    """
    Tracer that records spans in memory.

    Recorded spans compare equal to plain (name, attributes) tuples:

        >>> tracer = MockTracer()
        >>> with tracer.span("cedar_domain.repository.save", {"k": "v"}):
        ...     pass
        >>> tracer.spans == [("cedar_domain.repository.save", {"k": "v"})]
        True
    """

    def __init__(self) -> None:
        self.spans: list[RecordedSpan] = []

    @contextlib.contextmanager
    def span(self, name: str, attributes: SpanAttributes | None = None) -> Iterator[None]:
        self.spans.append(RecordedSpan(name, attributes))
        yield None

    @property
    def enabled(self) -> bool:
        return True

    @property
    def span_names(self) -> list[str]:
        """Get the names of the recorded spans, in order."""
        return [span.name for span in self.spans]

    def clear(self) -> None:
        self.spans.clear()


def create_tracer(name: str, enable_tracing: bool = True) -> Tracer:
    """
    Pick the tracer for a component.

    Args:
        name: Tracer name, usually the component's module __name__
        enable_tracing: False forces a NullTracer

    Returns:
        OpenTelemetryTracer when enabled and opentelemetry is importable,
        NullTracer otherwise
    """
    if enable_tracing and OTEL_AVAILABLE:
        return OpenTelemetryTracer(name)
    return NullTracer()


__all__ = [
    "OTEL_AVAILABLE",
    "MockTracer",
    "NullTracer",
    "OpenTelemetryTracer",
    "RecordedSpan",
    "SpanAttributes",
    "Tracer",
    "create_tracer",
]
