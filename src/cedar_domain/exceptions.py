"""Library exceptions for the cedar_domain package."""

from typing import Any


class CedarDomainError(Exception):
    """Base exception for cedar_domain library."""

    pass


class InvalidArgumentError(CedarDomainError, ValueError):
    """Raised when a kernel operation receives a missing or invalid argument."""

    def __init__(self, argument: str, message: str) -> None:
        self.argument = argument
        super().__init__(f"Invalid argument '{argument}': {message}")


class InvalidAggregateStateError(CedarDomainError, RuntimeError):
    """
    Raised when an operation is not allowed in the aggregate's current state.

    This error occurs when:
    - An event is raised while a rehydration session is open
    - A second rehydration session is opened on the same aggregate
    - An event is applied through a session that has already been closed

    Attributes:
        aggregate_id: ID of the aggregate the operation targeted
    """

    def __init__(self, aggregate_id: str, message: str) -> None:
        self.aggregate_id = aggregate_id
        super().__init__(f"Aggregate {aggregate_id}: {message}")


class HandlerNotFoundError(CedarDomainError):
    """
    Raised when an event has no registered handler and strict mode is enabled.

    Attributes:
        event_type: The class of the event that wasn't handled
        aggregate_id: ID of the aggregate, or None if the router had no
            aggregate registered
        available_handlers: Names of the event types that do have handlers
    """

    def __init__(
        self,
        event_type: type,
        aggregate_id: str | None,
        available_handlers: list[str] | None = None,
    ) -> None:
        self.event_type = event_type
        self.aggregate_id = aggregate_id
        self.available_handlers = available_handlers or []
        handlers_str = ", ".join(self.available_handlers) if self.available_handlers else "none"
        super().__init__(
            f"No handler registered for event type '{event_type.__name__}' "
            f"on aggregate {aggregate_id}. "
            f"Available handlers: {handlers_str}."
        )


class HandlerConfigurationError(CedarDomainError, TypeError):
    """
    Raised when the apply handlers of an aggregate class are ambiguous or malformed.

    Detected while scanning an aggregate class, so it surfaces from the
    aggregate's constructor and no instance is produced.

    Attributes:
        owner_name: Name of the aggregate class being scanned
        event_type: The event type the conflicting handlers claim, if known
        handler_names: Names of the offending methods
    """

    def __init__(
        self,
        owner_name: str,
        message: str,
        event_type: type | None = None,
        handler_names: list[str] | None = None,
    ) -> None:
        self.owner_name = owner_name
        self.event_type = event_type
        self.handler_names = handler_names or []
        super().__init__(f"Invalid apply handlers on {owner_name}: {message}")


class AggregateNotFoundError(CedarDomainError):
    """Raised when an aggregate cannot be found."""

    def __init__(self, aggregate_id: str, bucket_id: str | None = None) -> None:
        self.aggregate_id = aggregate_id
        self.bucket_id = bucket_id
        bucket_info = f" in bucket {bucket_id}" if bucket_id else ""
        super().__init__(f"Aggregate not found{bucket_info}: {aggregate_id}")


class AggregateConstructionError(CedarDomainError):
    """Raised when an aggregate type has no constructor that accepts just an id."""

    def __init__(self, aggregate_type: type[Any], message: str) -> None:
        self.aggregate_type = aggregate_type
        super().__init__(f"Cannot construct {aggregate_type.__name__} from an id: {message}")


class OptimisticLockError(CedarDomainError):
    """Raised when there's a version conflict while saving an aggregate."""

    def __init__(self, aggregate_id: str, expected_version: int, actual_version: int) -> None:
        self.aggregate_id = aggregate_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Optimistic lock error for aggregate {aggregate_id}: "
            f"expected version {expected_version}, but current version is {actual_version}"
        )


class ScenarioFailedError(CedarDomainError, AssertionError):
    """Raised when an aggregate scenario does not produce the expected outcome."""

    pass
