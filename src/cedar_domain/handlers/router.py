"""
Event routing for aggregates.

A router maps the runtime class of an event to the function that applies
it to aggregate state. Lookup is by exact class: a handler registered for
a base class is never used for its subclasses.

This module provides:
- EventRouter: Protocol every router implements
- ConventionEventRouter: Default router that discovers apply handlers on
  an aggregate class and also accepts explicit registrations
- discover_apply_handlers: The per-class scan behind convention routing

Example:
    >>> router = ConventionEventRouter(unregistered_event_handling="error")
    >>> router.register(OrderShipped, lambda event: shipped.append(event))
    >>> router.dispatch(OrderShipped())
"""

from __future__ import annotations

import inspect
import logging
import typing
import weakref
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from cedar_domain.exceptions import (
    HandlerConfigurationError,
    HandlerNotFoundError,
    InvalidArgumentError,
)
from cedar_domain.handlers.decorators import get_handled_event_type
from cedar_domain.types import EventHandler, UnregisteredEventHandling

if TYPE_CHECKING:
    from cedar_domain.aggregates.base import AggregateRoot

logger = logging.getLogger(__name__)

# Method name prefix that marks an apply handler by convention; public
# methods are commands and are only handlers when decorated with @handles
APPLY_HANDLER_PREFIX = "_apply_"

_UNREGISTERED_EVENT_MODES = ("ignore", "warn", "error")

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)

# Scan results per aggregate class (event type -> method name); entries go
# away with their class
_apply_handler_cache: weakref.WeakKeyDictionary[type, dict[type, str]] = (
    weakref.WeakKeyDictionary()
)


@runtime_checkable
class EventRouter(Protocol):
    """
    Protocol for routing events to their apply handlers.

    Each aggregate owns exactly one router for its lifetime. The aggregate
    calls dispatch() for every event it raises or replays.
    """

    def register(self, event_type: type, handler: EventHandler) -> None:
        """
        Bind a handler for an exact event type.

        Registering the same type again replaces the previous handler.

        Raises:
            InvalidArgumentError: If handler is None
        """
        ...

    def dispatch(self, event: Any) -> None:
        """
        Invoke the handler registered for type(event).

        Raises:
            InvalidArgumentError: If event is None
            HandlerNotFoundError: If no handler matches and the router is strict
        """
        ...


def discover_apply_handlers(aggregate_type: type) -> dict[type, str]:
    """
    Scan an aggregate class for apply handlers.

    A method is an apply handler when it is a plain (non-static, non-class)
    method and either:
    - is decorated with @handles(EventType), or
    - has a name starting with "_apply_", takes exactly one
      parameter after self annotated with a class, and declares no return
      value.

    The scan runs once per class; later calls return a copy of the cached
    table.

    Args:
        aggregate_type: The aggregate class to scan

    Returns:
        Mapping of event type to handler method name

    Raises:
        HandlerConfigurationError: If two methods claim the same event type,
            a decorated handler has the wrong shape, or a handler's
            annotations cannot be resolved
    """
    cached = _apply_handler_cache.get(aggregate_type)
    if cached is not None:
        return dict(cached)

    owner_name = aggregate_type.__name__
    table: dict[type, str] = {}

    for attr_name in dir(aggregate_type):
        if attr_name.startswith("__"):
            continue

        attr = inspect.getattr_static(aggregate_type, attr_name, None)
        if not inspect.isfunction(attr):
            continue

        event_type = _resolve_handler_event_type(owner_name, attr_name, attr)
        if event_type is None:
            continue

        existing = table.get(event_type)
        if existing is not None:
            raise HandlerConfigurationError(
                owner_name,
                f"methods '{existing}' and '{attr_name}' both apply "
                f"{event_type.__name__}; keep exactly one",
                event_type=event_type,
                handler_names=[existing, attr_name],
            )

        table[event_type] = attr_name
        logger.debug(
            "Discovered apply handler %s.%s for %s",
            owner_name,
            attr_name,
            event_type.__name__,
            extra={
                "owner": owner_name,
                "handler": attr_name,
                "event_type": event_type.__name__,
            },
        )

    _apply_handler_cache[aggregate_type] = table
    return dict(table)


def _resolve_handler_event_type(owner_name: str, name: str, func: Any) -> type | None:
    """Return the event type a method applies, or None if it isn't a handler."""
    params = list(inspect.signature(func).parameters.values())[1:]

    declared = get_handled_event_type(func)
    if declared is not None:
        if not isinstance(declared, type):
            raise HandlerConfigurationError(
                owner_name,
                f"@handles on '{name}' must be given a class, got {declared!r}",
                handler_names=[name],
            )
        if len(params) != 1 or params[0].kind not in _POSITIONAL_KINDS:
            raise HandlerConfigurationError(
                owner_name,
                f"'{name}' must have the signature "
                f"def {name}(self, event: {declared.__name__}) -> None",
                event_type=declared,
                handler_names=[name],
            )
        return declared

    if not name.startswith(APPLY_HANDLER_PREFIX):
        return None
    if len(params) != 1 or params[0].kind not in _POSITIONAL_KINDS:
        return None

    try:
        hints = typing.get_type_hints(func)
    except (NameError, TypeError) as e:
        raise HandlerConfigurationError(
            owner_name,
            f"cannot resolve the annotations of '{name}': {e}",
            handler_names=[name],
        ) from e

    if "return" in hints and hints["return"] is not type(None):
        return None

    event_type = hints.get(params[0].name)
    if not isinstance(event_type, type):
        return None
    return event_type


class ConventionEventRouter:
    """
    Router that discovers apply handlers by convention.

    Handlers come from two sources that share one table:
    - register_aggregate() binds every apply handler found on the
      aggregate's class (see discover_apply_handlers)
    - register() binds an explicit handler, e.g. a closure that records
      events for a test

    Whichever registration for a type happens last wins.

    Unhandled events are treated according to unregistered_event_handling:
    - "ignore": Silently ignore (default)
    - "warn": Log a warning and continue
    - "error": Escalate through the registered aggregate's
      raise_handler_not_found(), or raise HandlerNotFoundError directly
      when no aggregate is registered

    Example:
        >>> router = ConventionEventRouter(unregistered_event_handling="error")
        >>> router.register_aggregate(order)
        >>> router.dispatch(OrderShipped())
    """

    def __init__(
        self,
        unregistered_event_handling: UnregisteredEventHandling = "ignore",
        *,
        throw_on_apply_not_found: bool = False,
    ) -> None:
        """
        Initialize the router.

        Args:
            unregistered_event_handling: How to treat events with no handler
            throw_on_apply_not_found: Shorthand for unregistered_event_handling="error"

        Raises:
            InvalidArgumentError: If unregistered_event_handling is not a known mode
        """
        if throw_on_apply_not_found:
            unregistered_event_handling = "error"
        if unregistered_event_handling not in _UNREGISTERED_EVENT_MODES:
            raise InvalidArgumentError(
                "unregistered_event_handling",
                f"expected one of {', '.join(_UNREGISTERED_EVENT_MODES)}, "
                f"got {unregistered_event_handling!r}",
            )
        self._unregistered_event_handling = unregistered_event_handling
        self._handlers: dict[type, EventHandler] = {}
        self._registered: AggregateRoot | None = None

    @property
    def unregistered_event_handling(self) -> UnregisteredEventHandling:
        """Get the mode used for events with no handler."""
        return self._unregistered_event_handling

    @property
    def registered_aggregate(self) -> AggregateRoot | None:
        """Get the aggregate whose handlers were registered, if any."""
        return self._registered

    @property
    def event_types(self) -> list[type]:
        """Get the event types that currently have a handler."""
        return list(self._handlers)

    def has_handler(self, event_type: type) -> bool:
        """Check if a handler is registered for exactly this event type."""
        return event_type in self._handlers

    def register(self, event_type: type, handler: EventHandler) -> None:
        """
        Bind an explicit handler for an event type.

        Args:
            event_type: The exact event class to handle
            handler: Callable receiving the event instance

        Raises:
            InvalidArgumentError: If handler is None or not callable, or
                event_type is not a class
        """
        if handler is None:
            raise InvalidArgumentError("handler", "must not be None")
        if not callable(handler):
            raise InvalidArgumentError("handler", f"must be callable, got {handler!r}")
        if not isinstance(event_type, type):
            raise InvalidArgumentError("event_type", f"must be a class, got {event_type!r}")

        self._handlers[event_type] = handler

    def register_aggregate(self, aggregate: AggregateRoot) -> None:
        """
        Bind every apply handler discovered on the aggregate's class.

        Args:
            aggregate: The aggregate whose methods handle events. It also
                becomes the target of missing-handler escalation.

        Raises:
            InvalidArgumentError: If aggregate is None
            HandlerConfigurationError: If the aggregate's handlers are ambiguous
        """
        if aggregate is None:
            raise InvalidArgumentError("aggregate", "must not be None")

        table = discover_apply_handlers(type(aggregate))
        self._registered = aggregate
        for event_type, method_name in table.items():
            self._handlers[event_type] = getattr(aggregate, method_name)

    def dispatch(self, event: Any) -> None:
        """
        Route an event to the handler registered for its exact type.

        Raises:
            InvalidArgumentError: If event is None
            HandlerNotFoundError: If no handler matches in "error" mode
        """
        if event is None:
            raise InvalidArgumentError("event", "must not be None")

        handler = self._handlers.get(type(event))
        if handler is not None:
            handler(event)
        else:
            self._handle_unregistered_event(event)

    def _handle_unregistered_event(self, event: Any) -> None:
        """Apply the configured policy to an event with no handler."""
        mode = self._unregistered_event_handling
        if mode == "ignore":
            return

        event_type = type(event)
        if mode == "error":
            if self._registered is not None:
                self._registered.raise_handler_not_found(event)
            else:
                raise HandlerNotFoundError(
                    event_type,
                    None,
                    available_handlers=[et.__name__ for et in self._handlers],
                )
            return

        available_handlers = [et.__name__ for et in self._handlers]
        aggregate_id = self._registered.aggregate_id if self._registered is not None else None
        logger.warning(
            "No handler registered for event type %s on aggregate %s. Available handlers: %s.",
            event_type.__name__,
            aggregate_id,
            ", ".join(available_handlers) if available_handlers else "none",
            extra={
                "event_type": event_type.__name__,
                "aggregate_id": aggregate_id,
                "available_handlers": available_handlers,
            },
        )

    def __repr__(self) -> str:
        """String representation of router."""
        return (
            f"{self.__class__.__name__}("
            f"handlers={len(self._handlers)}, "
            f"unregistered_event_handling={self._unregistered_event_handling!r})"
        )


__all__ = [
    "APPLY_HANDLER_PREFIX",
    "ConventionEventRouter",
    "EventRouter",
    "discover_apply_handlers",
]
