"""
In-memory aggregate repository implementation.

Useful for testing and development. Not suitable for production
as all streams are lost when the process terminates.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from cedar_domain.aggregates.base import AggregateRoot
from cedar_domain.exceptions import (
    AggregateNotFoundError,
    InvalidArgumentError,
    OptimisticLockError,
)
from cedar_domain.observability import (
    ATTR_AGGREGATE_ID,
    ATTR_AGGREGATE_TYPE,
    ATTR_BUCKET_ID,
    ATTR_COMMIT_ID,
    ATTR_EVENT_COUNT,
    ATTR_EXPECTED_VERSION,
    ATTR_VERSION,
    Tracer,
    create_tracer,
)
from cedar_domain.persistence.factory import default_create_aggregate
from cedar_domain.persistence.interface import (
    DEFAULT_BUCKET_ID,
    AggregateRepository,
    CreateAggregate,
    TAggregate,
    UpdateHeaders,
)

logger = logging.getLogger(__name__)


@dataclass
class _Stream:
    """Committed events, headers and applied commit ids of one aggregate."""

    events: list[Any] = field(default_factory=list)
    headers: dict[str, str] = field(default_factory=dict)
    commit_ids: set[UUID] = field(default_factory=set)

    @property
    def version(self) -> int:
        return len(self.events)


class InMemoryAggregateRepository(AggregateRepository):
    """
    In-memory implementation of the aggregate repository.

    Keeps one stream per (bucket_id, aggregate_id). Suitable for:

    - Unit testing
    - Development environments
    - Prototyping

    Concurrency:
        save() compares the stream version with the aggregate's
        original_version and raises OptimisticLockError on mismatch,
        leaving the aggregate's uncommitted events in place. A save whose
        commit_id was already applied to the stream is a no-op.

    Thread-safety:
        Uses an asyncio.Lock; safe for concurrent tasks within a single
        event loop.

    Example:
        >>> repo = InMemoryAggregateRepository()
        >>> order = OrderAggregate("order-1")
        >>> order.place()
        >>> await repo.save(order, commit_id=uuid4())
        >>> loaded = await repo.get_by_id(OrderAggregate, "order-1")
        >>> assert loaded.version == order.version
    """

    def __init__(
        self,
        *,
        create_aggregate: CreateAggregate = default_create_aggregate,
        tracer: Tracer | None = None,
        enable_tracing: bool = True,
    ) -> None:
        """
        Initialize an empty in-memory repository.

        Args:
            create_aggregate: Strategy building an empty aggregate from its
                type and id. Defaults to calling the constructor with the id.
            tracer: Optional custom Tracer instance. If not provided, one is
                   created based on enable_tracing setting.
            enable_tracing: If True and OpenTelemetry is available, emit traces (default: True).
                          Ignored if tracer is explicitly provided.
        """
        self._tracer = tracer or create_tracer(__name__, enable_tracing)
        self._create_aggregate = create_aggregate
        self._streams: dict[tuple[str, str], _Stream] = {}
        self._lock: asyncio.Lock = asyncio.Lock()

    async def get_by_id(
        self,
        aggregate_type: type[TAggregate],
        aggregate_id: str,
        *,
        bucket_id: str = DEFAULT_BUCKET_ID,
        version: int | None = None,
    ) -> TAggregate:
        """
        Load an aggregate by replaying its stream.

        Raises:
            AggregateNotFoundError: If no events exist up to `version`
            InvalidArgumentError: If version is negative
        """
        if version is not None and version < 0:
            raise InvalidArgumentError("version", f"must be >= 0, got {version}")

        with self._tracer.span(
            "cedar_domain.repository.get_by_id",
            {
                ATTR_AGGREGATE_ID: aggregate_id,
                ATTR_AGGREGATE_TYPE: aggregate_type.__name__,
                ATTR_BUCKET_ID: bucket_id,
            },
        ) as span:
            async with self._lock:
                stream = self._streams.get((bucket_id, aggregate_id))
                events = list(stream.events) if stream is not None else []

            if version is not None:
                events = events[:version]
            if not events:
                raise AggregateNotFoundError(aggregate_id, bucket_id)

            aggregate = self._create_aggregate(aggregate_type, aggregate_id)
            aggregate.load_from_history(events)

            if span:
                span.set_attribute(ATTR_EVENT_COUNT, len(events))
                span.set_attribute(ATTR_VERSION, aggregate.version)

            logger.debug(
                "Loaded %s/%s at version %d",
                aggregate_type.__name__,
                aggregate_id,
                aggregate.version,
                extra={
                    "aggregate_id": aggregate_id,
                    "aggregate_type": aggregate_type.__name__,
                    "bucket_id": bucket_id,
                    "version": aggregate.version,
                },
            )
            return aggregate

    async def save(
        self,
        aggregate: AggregateRoot,
        *,
        commit_id: UUID,
        bucket_id: str = DEFAULT_BUCKET_ID,
        update_headers: UpdateHeaders | None = None,
    ) -> None:
        """
        Append the aggregate's uncommitted events to its stream.

        Note:
            If there are no uncommitted events, this is a no-op.
        """
        if not aggregate.has_uncommitted_events:
            return

        key = (bucket_id, aggregate.aggregate_id)
        expected_version = aggregate.original_version

        with self._tracer.span(
            "cedar_domain.repository.save",
            {
                ATTR_AGGREGATE_ID: aggregate.aggregate_id,
                ATTR_AGGREGATE_TYPE: type(aggregate).__name__,
                ATTR_BUCKET_ID: bucket_id,
                ATTR_COMMIT_ID: str(commit_id),
                ATTR_EXPECTED_VERSION: expected_version,
            },
        ) as span:
            async with self._lock:
                stream = self._streams.get(key)

                if stream is not None and commit_id in stream.commit_ids:
                    aggregate.take_uncommitted_events()
                    logger.info(
                        "Commit %s already applied to %s/%s; skipping",
                        commit_id,
                        bucket_id,
                        aggregate.aggregate_id,
                        extra={
                            "aggregate_id": aggregate.aggregate_id,
                            "bucket_id": bucket_id,
                            "commit_id": str(commit_id),
                        },
                    )
                    return

                current_version = stream.version if stream is not None else 0
                if current_version != expected_version:
                    raise OptimisticLockError(
                        aggregate.aggregate_id, expected_version, current_version
                    )

                headers = dict(stream.headers) if stream is not None else {}
                if update_headers is not None:
                    update_headers(headers)

                if stream is None:
                    stream = _Stream()
                    self._streams[key] = stream

                events = aggregate.take_uncommitted_events()
                stream.events.extend(events)
                stream.headers = headers
                stream.commit_ids.add(commit_id)

            if span:
                span.set_attribute(ATTR_EVENT_COUNT, len(events))
                span.set_attribute(ATTR_VERSION, aggregate.version)

            logger.debug(
                "Saved %d events for %s/%s at version %d",
                len(events),
                bucket_id,
                aggregate.aggregate_id,
                aggregate.version,
                extra={
                    "aggregate_id": aggregate.aggregate_id,
                    "bucket_id": bucket_id,
                    "commit_id": str(commit_id),
                    "event_count": len(events),
                    "version": aggregate.version,
                },
            )

    async def get_events(
        self,
        aggregate_id: str,
        *,
        bucket_id: str = DEFAULT_BUCKET_ID,
    ) -> list[Any]:
        """Get a copy of the committed events of a stream (empty if none)."""
        async with self._lock:
            stream = self._streams.get((bucket_id, aggregate_id))
            return list(stream.events) if stream is not None else []

    async def get_headers(
        self,
        aggregate_id: str,
        *,
        bucket_id: str = DEFAULT_BUCKET_ID,
    ) -> dict[str, str]:
        """Get a copy of a stream's headers (empty if none)."""
        async with self._lock:
            stream = self._streams.get((bucket_id, aggregate_id))
            return dict(stream.headers) if stream is not None else {}

    async def exists(
        self,
        aggregate_id: str,
        *,
        bucket_id: str = DEFAULT_BUCKET_ID,
    ) -> bool:
        """Check if a stream has committed events."""
        async with self._lock:
            stream = self._streams.get((bucket_id, aggregate_id))
            return stream is not None and stream.version > 0

    def clear(self) -> None:
        """Remove all streams."""
        self._streams.clear()

    def __repr__(self) -> str:
        """String representation of repository."""
        return f"{self.__class__.__name__}(streams={len(self._streams)})"


__all__ = ["InMemoryAggregateRepository"]
