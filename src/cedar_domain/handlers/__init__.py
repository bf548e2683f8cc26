"""
Handler infrastructure for aggregates.

This module provides:
- handles: Decorator for marking apply handler methods
- EventRouter: Protocol for routing events to handlers
- ConventionEventRouter: Default router with convention discovery
- discover_apply_handlers: Scan an aggregate class for apply handlers

Example:
    >>> from cedar_domain.handlers import ConventionEventRouter, handles
"""

from cedar_domain.handlers.decorators import (
    get_handled_event_type,
    handles,
    is_event_handler,
)
from cedar_domain.handlers.router import (
    APPLY_HANDLER_PREFIX,
    ConventionEventRouter,
    EventRouter,
    discover_apply_handlers,
)

__all__ = [
    "APPLY_HANDLER_PREFIX",
    "ConventionEventRouter",
    "EventRouter",
    "discover_apply_handlers",
    "get_handled_event_type",
    "handles",
    "is_event_handler",
]
