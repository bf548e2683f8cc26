"""
Shared test fixtures for the cedar_domain library.

Usage:
    from tests.fixtures import (
        CounterAggregate,
        OrderAggregate,
        CounterIncremented,
        OrderPlaced,
        create_event,
    )
"""

from tests.fixtures.aggregates import (
    CounterAggregate,
    OrderAggregate,
    StrictCounterAggregate,
)
from tests.fixtures.events import (
    CounterDecremented,
    CounterIncremented,
    CounterReset,
    OrderCancelled,
    OrderItemAdded,
    OrderPlaced,
    OrderShipped,
    Pinged,
    SomethingHappened,
    create_event,
)

__all__ = [
    # Events
    "CounterIncremented",
    "CounterDecremented",
    "CounterReset",
    "OrderPlaced",
    "OrderItemAdded",
    "OrderShipped",
    "OrderCancelled",
    "Pinged",
    "SomethingHappened",
    # Aggregates
    "CounterAggregate",
    "StrictCounterAggregate",
    "OrderAggregate",
    # Factories
    "create_event",
]
