"""Aggregate pattern implementations for the cedar_domain library."""

from cedar_domain.aggregates.base import (
    AggregateRoot,
    RouterFactory,
    convention_router_factory,
)
from cedar_domain.aggregates.rehydration import RehydrationSession

__all__ = [
    "AggregateRoot",
    "RehydrationSession",
    "RouterFactory",
    "convention_router_factory",
]
