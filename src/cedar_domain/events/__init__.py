"""Domain event base types for the cedar_domain library."""

from cedar_domain.events.base import DomainEvent

__all__ = ["DomainEvent"]
