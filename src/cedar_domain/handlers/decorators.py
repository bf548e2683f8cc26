"""
Event handler decorators.

The @handles decorator marks an aggregate method as the apply handler for
an event type when the method's name or annotations don't follow the
apply-handler naming convention.

Example:
    >>> from cedar_domain.handlers import handles
"""

from collections.abc import Callable
from typing import Any, TypeVar

# Type variable for handler functions - preserves the exact type of the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handles(event_type: type) -> Callable[[F], F]:
    """
    Decorator to mark a method as the apply handler for a specific event type.

    The decorator attaches the event type to the function, which is then
    discovered when the aggregate's router scans its class.

    Args:
        event_type: The event class this handler applies

    Returns:
        A decorator function that marks the handler and preserves the original function

    Example:
        >>> class Order(AggregateRoot):
        ...     @handles(OrderShipped)
        ...     def _on_shipped(self, event: OrderShipped) -> None:
        ...         self._status = "shipped"

    Notes:
        - The handler signature must be (self, event) -> None
        - A class may only have one handler per event type, whether
          declared by decorator or by naming convention
    """

    def decorator(func: F) -> F:
        func._handles_event_type = event_type  # type: ignore[attr-defined]
        return func

    return decorator


def get_handled_event_type(func: Callable[..., Any]) -> type | None:
    """
    Get the event type handled by a decorated function.

    Args:
        func: A function potentially decorated with @handles

    Returns:
        The event type if decorated with @handles, None otherwise
    """
    return getattr(func, "_handles_event_type", None)


def is_event_handler(func: Callable[..., Any]) -> bool:
    """Check if a function is decorated as an event handler."""
    return hasattr(func, "_handles_event_type")


__all__ = [
    "handles",
    "get_handled_event_type",
    "is_event_handler",
]
