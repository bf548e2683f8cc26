"""
Shared test aggregate implementations.

This module provides reusable aggregate implementations for testing:
- CounterAggregate: Apply handlers discovered by naming convention
- StrictCounterAggregate: CounterAggregate that rejects unhandled events
- OrderAggregate: Business rules, @handles handlers, constructor arguments
"""

from typing import Any

from cedar_domain.aggregates.base import AggregateRoot
from cedar_domain.handlers import handles
from tests.fixtures.events import (
    CounterDecremented,
    CounterIncremented,
    CounterReset,
    OrderCancelled,
    OrderItemAdded,
    OrderPlaced,
    OrderShipped,
)

# =============================================================================
# Counter Aggregate (convention handlers)
# =============================================================================


class CounterAggregate(AggregateRoot):
    """
    Simple counter aggregate for testing basic event sourcing patterns.

    Handlers follow the _apply_ naming convention.
    """

    def __init__(self, aggregate_id: str) -> None:
        super().__init__(aggregate_id)
        self.value = 0
        self.applied: list[Any] = []

    def _apply_incremented(self, event: CounterIncremented) -> None:
        self.value += event.increment
        self.applied.append(event)

    def _apply_decremented(self, event: CounterDecremented) -> None:
        self.value -= event.decrement
        self.applied.append(event)

    def _apply_reset(self, event: CounterReset) -> None:
        self.value = 0
        self.applied.append(event)

    def increment(self, amount: int = 1) -> None:
        """Command: Increment the counter by the specified amount."""
        self._raise_event(CounterIncremented(increment=amount))

    def decrement(self, amount: int = 1) -> None:
        """Command: Decrement the counter by the specified amount."""
        self._raise_event(CounterDecremented(decrement=amount))

    def reset(self) -> None:
        """Command: Reset the counter, or do nothing if it is already zero."""
        self._raise_event(CounterReset() if self.value != 0 else None)

    def emit(self, event: Any) -> None:
        """Command: Raise an arbitrary event."""
        self._raise_event(event)


class StrictCounterAggregate(CounterAggregate):
    """Counter that fails on events it has no handler for."""

    unregistered_event_handling = "error"


# =============================================================================
# Order Aggregate (@handles handlers and business rules)
# =============================================================================


class OrderAggregate(AggregateRoot):
    """Order aggregate with a lifecycle: place, add items, ship or cancel."""

    def __init__(self, aggregate_id: str) -> None:
        super().__init__(aggregate_id)
        self.status = "draft"
        self.order_number: str | None = None
        self.items: list[str] = []
        self.total = 0.0
        self.tracking_number: str | None = None

    @handles(OrderPlaced)
    def _on_placed(self, event: OrderPlaced) -> None:
        self.status = "placed"
        self.order_number = event.order_number

    @handles(OrderItemAdded)
    def _on_item_added(self, event: OrderItemAdded) -> None:
        self.items.append(event.item_name)
        self.total += event.price

    @handles(OrderShipped)
    def _on_shipped(self, event: OrderShipped) -> None:
        self.status = "shipped"
        self.tracking_number = event.tracking_number

    def _apply_cancelled(self, event: OrderCancelled) -> None:
        self.status = "cancelled"

    def place(self, order_number: str) -> None:
        """Command: Place the order."""
        if self.status != "draft":
            raise ValueError(f"Order {self.aggregate_id} is already {self.status}")
        self._raise_event(OrderPlaced(order_number=order_number))

    def add_item(self, item_name: str, price: float) -> None:
        """Command: Add an item to a placed order."""
        if self.status != "placed":
            raise ValueError("Items can only be added to placed orders")
        self._raise_event(OrderItemAdded(item_name=item_name, price=price))

    def ship(self, tracking_number: str) -> None:
        """Command: Ship the order."""
        if self.status != "placed" or not self.items:
            raise ValueError("Only placed orders with items can be shipped")
        self._raise_event(OrderShipped(tracking_number=tracking_number))

    def cancel(self, reason: str = "") -> None:
        """Command: Cancel the order."""
        if self.status == "shipped":
            raise ValueError("Shipped orders cannot be cancelled")
        self._raise_event(OrderCancelled(reason=reason))
