"""
Persistence boundary for event-sourced aggregates.

The aggregate kernel performs no I/O. A repository loads an aggregate by
replaying its stream inside a rehydration session, and saves it by
draining its uncommitted events and appending them to the stream.

This module provides:
- AggregateRepository: Abstract base class for repository implementations
- CreateAggregate: Signature of the aggregate construction strategy
- UpdateHeaders: Signature of the stream header callback used by save()
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TypeVar
from uuid import UUID

from cedar_domain.aggregates.base import AggregateRoot

# Type variable for aggregate root
TAggregate = TypeVar("TAggregate", bound=AggregateRoot)

# Builds a new, empty aggregate of the given type for an id
CreateAggregate = Callable[[type[TAggregate], str], TAggregate]

# Mutates the stream's headers as part of a save
UpdateHeaders = Callable[[dict[str, str]], None]

# Bucket used when the caller does not partition streams
DEFAULT_BUCKET_ID = "default"


class AggregateRepository(ABC):
    """
    Abstract base class for aggregate repositories.

    Streams are addressed by (bucket_id, aggregate_id). Buckets partition
    streams, e.g. per tenant; most applications use DEFAULT_BUCKET_ID.

    Cancellation is asyncio task cancellation: both operations are
    coroutines and may be cancelled by the caller.
    """

    @abstractmethod
    async def get_by_id(
        self,
        aggregate_type: type[TAggregate],
        aggregate_id: str,
        *,
        bucket_id: str = DEFAULT_BUCKET_ID,
        version: int | None = None,
    ) -> TAggregate:
        """
        Load an aggregate from its stream.

        Args:
            aggregate_type: Class of the aggregate to build
            aggregate_id: ID of the aggregate
            bucket_id: Bucket holding the stream
            version: Replay only the first `version` events. None loads the
                latest version.

        Returns:
            The rehydrated aggregate, with original_version == version

        Raises:
            AggregateNotFoundError: If the stream has no events
        """
        pass

    @abstractmethod
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

        Args:
            aggregate: The aggregate to save
            commit_id: Identifies this save so that a retry is not applied
                twice. If you have a command id, use it here.
            bucket_id: Bucket holding the stream
            update_headers: Optional callback that updates the stream headers

        Raises:
            OptimisticLockError: If the stream moved past the aggregate's
                original_version since it was loaded
        """
        pass


__all__ = [
    "DEFAULT_BUCKET_ID",
    "AggregateRepository",
    "CreateAggregate",
    "TAggregate",
    "UpdateHeaders",
]
