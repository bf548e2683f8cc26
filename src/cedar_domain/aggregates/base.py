"""
Base class for event-sourced aggregates.

Aggregates are the consistency boundaries in event sourcing. Their state
is derived entirely from the events applied to them: business methods
raise new events, and loading replays committed ones.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from cedar_domain.aggregates.rehydration import RehydrationSession
from cedar_domain.exceptions import (
    HandlerNotFoundError,
    InvalidAggregateStateError,
    InvalidArgumentError,
)
from cedar_domain.handlers.router import ConventionEventRouter, EventRouter
from cedar_domain.types import AggregateId, UnregisteredEventHandling

logger = logging.getLogger(__name__)

# Builds the router an aggregate owns, given the aggregate being constructed
RouterFactory = Callable[["AggregateRoot"], EventRouter]


def convention_router_factory(aggregate: "AggregateRoot") -> ConventionEventRouter:
    """
    Build the default router for an aggregate.

    The router uses the aggregate class's unregistered_event_handling mode
    and has the aggregate's apply handlers registered on it.
    """
    router = ConventionEventRouter(type(aggregate).unregistered_event_handling)
    router.register_aggregate(aggregate)
    return router


class AggregateRoot:
    """
    Base class for event-sourced aggregate roots.

    An aggregate:
    - Changes state only by raising events, which are routed to its
      apply handlers by exact event type
    - Tracks raised events as uncommitted until they are taken for persistence
    - Counts every applied event in its version
    - Is rebuilt from committed history through a rehydration session

    Subclasses pass the aggregate id to the base constructor, implement
    business methods that call _raise_event(), and implement one apply
    handler per event type. Apply handlers are found by convention (see
    cedar_domain.handlers.discover_apply_handlers) or marked with @handles.

    Example:
        >>> class OrderAggregate(AggregateRoot):
        ...     def __init__(self, aggregate_id: str) -> None:
        ...         super().__init__(aggregate_id)
        ...         self._status = "draft"
        ...
        ...     def place(self) -> None:
        ...         if self._status != "draft":
        ...             raise ValueError("Order already placed")
        ...         self._raise_event(OrderPlaced())
        ...
        ...     def _apply_placed(self, event: OrderPlaced) -> None:
        ...         self._status = "placed"

    Configuration:
        unregistered_event_handling: What the default router does with an
            event that has no handler:
            - "ignore": Silently ignore (default)
            - "warn": Log a warning
            - "error": Raise HandlerNotFoundError

    Attributes:
        aggregate_id: Stable identity, used for equality and hashing
        version: Number of events applied (committed and uncommitted)
        original_version: Version at the last load or save
    """

    # Class-level configuration for the default router
    # Options: "ignore" (default), "warn", "error"
    unregistered_event_handling: UnregisteredEventHandling = "ignore"

    def __init__(
        self,
        aggregate_id: AggregateId,
        router_factory: RouterFactory | None = None,
    ) -> None:
        """
        Initialize aggregate root.

        Args:
            aggregate_id: Unique, non-empty identifier for this aggregate
            router_factory: Optional callable building this aggregate's
                router. Defaults to a ConventionEventRouter bound to the
                aggregate.

        Raises:
            InvalidArgumentError: If aggregate_id is not a non-empty string
            HandlerConfigurationError: If the class's apply handlers are ambiguous
        """
        if not isinstance(aggregate_id, str) or not aggregate_id:
            raise InvalidArgumentError(
                "aggregate_id",
                f"must be a non-empty string, got {aggregate_id!r}",
            )

        self._aggregate_id = aggregate_id
        self._version = 0
        self._original_version = 0
        self._uncommitted_events: list[Any] = []
        self._rehydration: RehydrationSession | None = None

        factory = router_factory or convention_router_factory
        router = factory(self)
        if router is None:
            raise InvalidArgumentError("router_factory", "returned None")
        self._router: EventRouter = router

    @property
    def aggregate_id(self) -> AggregateId:
        """Get the unique identifier for this aggregate."""
        return self._aggregate_id

    @property
    def version(self) -> int:
        """Get the current version (number of events applied)."""
        return self._version

    @property
    def original_version(self) -> int:
        """Get the version at the last load or save."""
        return self._original_version

    @property
    def router(self) -> EventRouter:
        """Get the router this aggregate dispatches events through."""
        return self._router

    @property
    def uncommitted_events(self) -> list[Any]:
        """
        Get events that haven't been persisted yet.

        Returns a copy to prevent external modification.
        """
        return self._uncommitted_events.copy()

    @property
    def has_uncommitted_events(self) -> bool:
        """Check if there are events waiting to be persisted."""
        return len(self._uncommitted_events) > 0

    @property
    def is_rehydrating(self) -> bool:
        """Check if a rehydration session is open."""
        return self._rehydration is not None

    def _raise_event(self, event: Any) -> None:
        """
        Apply a new event and record it for persistence.

        Called from business methods. The event is dispatched to its
        handler first; only if the handler succeeds is it appended to the
        uncommitted events and counted in the version.

        Raising None is a no-op, so a command that decides nothing
        happened can pass its result straight through.

        Args:
            event: The new event, or None

        Raises:
            InvalidAggregateStateError: If a rehydration session is open
            HandlerNotFoundError: If no handler matches in "error" mode
        """
        if self._rehydration is not None:
            raise InvalidAggregateStateError(
                self._aggregate_id,
                "cannot raise events while a rehydration session is open",
            )
        if event is None:
            return

        self._router.dispatch(event)
        self._uncommitted_events.append(event)
        self._version += 1

    def begin_rehydrate(self) -> RehydrationSession:
        """
        Open a session for replaying committed history.

        Returns:
            A RehydrationSession; use it as a context manager

        Raises:
            InvalidAggregateStateError: If a session is already open, or the
                aggregate has uncommitted events

        Example:
            >>> aggregate = OrderAggregate(order_id)
            >>> with aggregate.begin_rehydrate() as session:
            ...     for event in stream:
            ...         session.apply_event(event)
            >>> assert aggregate.original_version == aggregate.version
        """
        if self._rehydration is not None:
            raise InvalidAggregateStateError(
                self._aggregate_id,
                "a rehydration session is already open",
            )
        if self._uncommitted_events:
            raise InvalidAggregateStateError(
                self._aggregate_id,
                "cannot rehydrate an aggregate with uncommitted events",
            )

        session = RehydrationSession(self)
        self._rehydration = session
        return session

    def load_from_history(self, events: Iterable[Any]) -> None:
        """
        Reconstitute aggregate state from event history.

        Replays all events in order inside a single rehydration session.

        Args:
            events: Historical events in stream order
        """
        with self.begin_rehydrate() as session:
            for event in events:
                session.apply_event(event)

    def take_uncommitted_events(self) -> list[Any]:
        """
        Drain the uncommitted events for persistence.

        Returns the events in the order they were raised, clears them, and
        settles original_version at the current version. A second call
        with no events raised in between returns an empty list.

        Returns:
            List of uncommitted events that were cleared
        """
        events = self._uncommitted_events
        self._uncommitted_events = []
        self._original_version = self._version
        return events

    def raise_handler_not_found(self, event: Any) -> None:
        """
        Escalate an event that no handler accepts.

        Called by a strict router. Subclasses may override this to
        translate the failure, but it should not return normally.

        Raises:
            HandlerNotFoundError: Always
        """
        raise HandlerNotFoundError(type(event), self._aggregate_id)

    def _replay_event(self, event: Any) -> None:
        """Apply a historical event; used by RehydrationSession."""
        self._router.dispatch(event)
        self._version += 1

    def _end_rehydrate(self, applied: int) -> None:
        """Close the open rehydration session; used by RehydrationSession."""
        self._original_version = self._version
        self._rehydration = None
        logger.debug(
            "Rehydrated %s %s to version %d (%d events replayed)",
            self.__class__.__name__,
            self._aggregate_id,
            self._version,
            applied,
            extra={
                "aggregate_id": self._aggregate_id,
                "aggregate_type": self.__class__.__name__,
                "version": self._version,
                "events_replayed": applied,
            },
        )

    def __repr__(self) -> str:
        """String representation of aggregate."""
        return (
            f"{self.__class__.__name__}("
            f"id={self._aggregate_id}, "
            f"version={self._version}, "
            f"uncommitted={len(self._uncommitted_events)})"
        )

    def __eq__(self, other: object) -> bool:
        """
        Check equality based on aggregate ID.

        Aggregates of different classes, or with diverging state, are
        equal when their ids are equal.
        """
        if not isinstance(other, AggregateRoot):
            return NotImplemented
        return self._aggregate_id == other._aggregate_id

    def __hash__(self) -> int:
        """Hash based on aggregate ID."""
        return hash(self._aggregate_id)


__all__ = [
    "AggregateRoot",
    "RouterFactory",
    "convention_router_factory",
]
