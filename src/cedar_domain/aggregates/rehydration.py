"""
Rehydration sessions for event-sourced aggregates.

A session replays committed history into an aggregate. While it is open,
applied events advance the aggregate's version without becoming
uncommitted, and new events cannot be raised. Closing the session settles
the aggregate's original version at the replayed version.
"""

from __future__ import annotations

from types import TracebackType
from typing import TYPE_CHECKING, Any

from cedar_domain.exceptions import InvalidAggregateStateError, InvalidArgumentError

if TYPE_CHECKING:
    from cedar_domain.aggregates.base import AggregateRoot


class RehydrationSession:
    """
    Scoped handle for replaying history into one aggregate.

    Obtain a session from AggregateRoot.begin_rehydrate() and use it as a
    context manager so it is closed on every exit path:

        >>> with aggregate.begin_rehydrate() as session:
        ...     for event in history:
        ...         session.apply_event(event)

    The session closes even if a handler raises part way through the
    stream; the aggregate then reports the version reached before the
    failure.
    """

    def __init__(self, aggregate: AggregateRoot) -> None:
        self._aggregate = aggregate
        self._closed = False
        self._applied = 0

    @property
    def aggregate(self) -> AggregateRoot:
        """Get the aggregate being rehydrated."""
        return self._aggregate

    @property
    def closed(self) -> bool:
        """Check if the session has been closed."""
        return self._closed

    @property
    def applied_count(self) -> int:
        """Get the number of events applied through this session."""
        return self._applied

    def apply_event(self, event: Any) -> None:
        """
        Replay one committed event.

        Args:
            event: The historical event, in stream order

        Raises:
            InvalidAggregateStateError: If the session is already closed
            InvalidArgumentError: If event is None
        """
        if self._closed:
            raise InvalidAggregateStateError(
                self._aggregate.aggregate_id,
                "cannot apply events through a closed rehydration session",
            )
        if event is None:
            raise InvalidArgumentError("event", "must not be None")
        self._aggregate._replay_event(event)
        self._applied += 1

    def close(self) -> None:
        """End the session. Calling close() more than once has no effect."""
        if self._closed:
            return
        self._closed = True
        self._aggregate._end_rehydrate(self._applied)

    def __enter__(self) -> RehydrationSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        """String representation of session."""
        return (
            f"{self.__class__.__name__}("
            f"aggregate_id={self._aggregate.aggregate_id}, "
            f"applied={self._applied}, "
            f"closed={self._closed})"
        )


__all__ = ["RehydrationSession"]
