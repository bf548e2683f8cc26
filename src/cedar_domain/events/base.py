"""
Base class for domain events.

Events are immutable records of things that have happened to an aggregate.
The aggregate kernel routes events by their runtime class and never reads
their fields, so any object can be raised as an event. DomainEvent is a
convenience base that gives events identity, a timestamp and metadata.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Self
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DomainEvent(BaseModel):
    """
    Immutable base class for domain events with automatic event_type derivation.

    Attributes:
        event_id: Unique identifier for this event instance
        event_type: Type name of the event (defaults to the class name)
        occurred_at: When the event occurred (UTC timestamp)
        metadata: Additional event metadata dictionary

    Example:
        >>> class OrderPlaced(DomainEvent):
        ...     order_number: str
        ...
        >>> event = OrderPlaced(order_number="ORD-001")
        >>> assert event.event_type == "OrderPlaced"
    """

    model_config = ConfigDict(frozen=True)

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier",
    )
    event_type: str = Field(
        default="",
        description="Type of event (derived from class name if not set)",
    )
    occurred_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When event occurred (UTC)",
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event metadata",
    )

    @model_validator(mode="before")
    @classmethod
    def _ensure_event_type(cls, data: Any) -> Any:
        """
        Fill event_type with the class name when it is not provided.

        Respects an explicit non-empty default declared by a subclass.
        """
        if isinstance(data, dict) and not data.get("event_type"):
            field_info = cls.model_fields.get("event_type")
            field_default = field_info.default if field_info else ""
            if not field_default or data.get("event_type") == "":
                data = dict(data)
                data["event_type"] = cls.__name__
        return data

    def __str__(self) -> str:
        """String representation of event."""
        return f"{self.event_type}(event_id={self.event_id})"

    def with_metadata(self, **kwargs: Any) -> Self:
        """
        Create a copy of this event with additional metadata.

        Args:
            **kwargs: Key-value pairs to add to metadata

        Returns:
            New event instance with updated metadata
        """
        new_metadata = {**self.metadata, **kwargs}
        return self.model_copy(update={"metadata": new_metadata})

    def payload(self) -> dict[str, Any]:
        """
        Get the event's business fields, without identity and timestamp.

        Two events recording the same fact at different times have equal
        payloads, which is what scenario assertions compare.
        """
        return self.model_dump(exclude={"event_id", "occurred_at"})


__all__ = ["DomainEvent"]
