"""
Persistence boundary for the cedar_domain library.

This module provides:
- AggregateRepository: Abstract base class for loading and saving aggregates
- InMemoryAggregateRepository: Reference implementation for tests and prototypes
- default_create_aggregate: Builds an aggregate by calling its constructor with the id
"""

from cedar_domain.persistence.factory import default_create_aggregate
from cedar_domain.persistence.in_memory import InMemoryAggregateRepository
from cedar_domain.persistence.interface import (
    DEFAULT_BUCKET_ID,
    AggregateRepository,
    CreateAggregate,
    TAggregate,
    UpdateHeaders,
)

__all__ = [
    "DEFAULT_BUCKET_ID",
    "AggregateRepository",
    "CreateAggregate",
    "InMemoryAggregateRepository",
    "TAggregate",
    "UpdateHeaders",
    "default_create_aggregate",
]
