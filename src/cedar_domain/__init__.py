"""
cedar_domain - Event-sourced aggregate kernel for Python.

This library provides:
- AggregateRoot base class with raise/apply event cycle and version tracking
- Convention-based event routing by exact event type
- Scoped rehydration sessions for replaying committed history
- Domain Event base class with Pydantic models
- Repository boundary with an in-memory implementation
- Given/When/Then scenario helpers for testing aggregates
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cedar-domain")
except PackageNotFoundError:
    # Package not installed (running from source without install)
    __version__ = "0.0.0.dev0"

from cedar_domain.aggregates.base import AggregateRoot, RouterFactory
from cedar_domain.aggregates.rehydration import RehydrationSession
from cedar_domain.events.base import DomainEvent
from cedar_domain.exceptions import (
    AggregateConstructionError,
    AggregateNotFoundError,
    CedarDomainError,
    HandlerConfigurationError,
    HandlerNotFoundError,
    InvalidAggregateStateError,
    InvalidArgumentError,
    OptimisticLockError,
    ScenarioFailedError,
)
from cedar_domain.handlers import (
    ConventionEventRouter,
    EventRouter,
    discover_apply_handlers,
    handles,
)
from cedar_domain.persistence import (
    DEFAULT_BUCKET_ID,
    AggregateRepository,
    InMemoryAggregateRepository,
    default_create_aggregate,
)
from cedar_domain.types import AggregateId, EventHandler, UnregisteredEventHandling

__all__ = [
    "__version__",
    # Aggregates
    "AggregateRoot",
    "RehydrationSession",
    "RouterFactory",
    # Events
    "DomainEvent",
    # Routing
    "ConventionEventRouter",
    "EventRouter",
    "discover_apply_handlers",
    "handles",
    # Persistence
    "DEFAULT_BUCKET_ID",
    "AggregateRepository",
    "InMemoryAggregateRepository",
    "default_create_aggregate",
    # Types
    "AggregateId",
    "EventHandler",
    "UnregisteredEventHandling",
    # Exceptions
    "AggregateConstructionError",
    "AggregateNotFoundError",
    "CedarDomainError",
    "HandlerConfigurationError",
    "HandlerNotFoundError",
    "InvalidAggregateStateError",
    "InvalidArgumentError",
    "OptimisticLockError",
    "ScenarioFailedError",
]
