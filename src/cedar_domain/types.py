"""Common type definitions for the cedar_domain library."""

from collections.abc import Callable
from typing import Any, Literal

# Aggregate identity is a stable, non-empty string
AggregateId = str

# A handler receives the event instance and mutates aggregate-private state
EventHandler = Callable[[Any], None]

# How a router treats an event whose type has no handler
UnregisteredEventHandling = Literal["ignore", "warn", "error"]
