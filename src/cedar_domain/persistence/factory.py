"""Default aggregate construction strategy used by repositories."""

import inspect

from cedar_domain.aggregates.base import AggregateRoot
from cedar_domain.exceptions import AggregateConstructionError
from cedar_domain.persistence.interface import TAggregate


def default_create_aggregate(aggregate_type: type[TAggregate], aggregate_id: str) -> TAggregate:
    """
    Construct an aggregate whose constructor takes the aggregate id as its only argument.

    Errors raised by the constructor itself propagate unchanged, so a
    failing constructor never yields an instance.

    Args:
        aggregate_type: AggregateRoot subclass to construct
        aggregate_id: ID passed to the constructor

    Returns:
        The new aggregate at version 0

    Raises:
        AggregateConstructionError: If the class is not an aggregate, or
            its constructor cannot be called with just the id

    Example:
        >>> order = default_create_aggregate(OrderAggregate, "order-1")
        >>> assert order.version == 0
    """
    if not (isinstance(aggregate_type, type) and issubclass(aggregate_type, AggregateRoot)):
        raise AggregateConstructionError(
            aggregate_type if isinstance(aggregate_type, type) else type(aggregate_type),
            "not an AggregateRoot subclass",
        )

    try:
        inspect.signature(aggregate_type).bind(aggregate_id)
    except TypeError as e:
        raise AggregateConstructionError(
            aggregate_type,
            f"the constructor must accept the id as its only argument ({e})",
        ) from e

    return aggregate_type(aggregate_id)


__all__ = ["default_create_aggregate"]
