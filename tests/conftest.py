"""
Shared pytest fixtures for the cedar_domain library tests.

This module provides test fixtures including:
- Sample data fixtures (aggregate_id)
- Aggregate fixtures (counter_aggregate, order_aggregate, populated_counter)
- Event fixtures (counter_history)
- Repository fixtures (repository, mock_tracer)

All fixtures are function scoped.
"""

from __future__ import annotations

from uuid import uuid4

import pytest

from cedar_domain.observability import MockTracer
from cedar_domain.persistence import InMemoryAggregateRepository
from tests.fixtures import (
    CounterAggregate,
    CounterDecremented,
    CounterIncremented,
    OrderAggregate,
)

# =============================================================================
# Sample Data Fixtures
# =============================================================================


@pytest.fixture
def aggregate_id() -> str:
    """
    Provide a random aggregate ID.

    Returns:
        A new random id string for use as an aggregate identifier.
    """
    return str(uuid4())


# =============================================================================
# Event Fixtures
# =============================================================================


@pytest.fixture
def counter_history() -> list[CounterIncremented | CounterDecremented]:
    """Committed counter history: +5, +3, -2 (value 6, version 3)."""
    return [
        CounterIncremented(increment=5),
        CounterIncremented(increment=3),
        CounterDecremented(decrement=2),
    ]


# =============================================================================
# Aggregate Fixtures
# =============================================================================


@pytest.fixture
def counter_aggregate(aggregate_id: str) -> CounterAggregate:
    """Provide a fresh CounterAggregate at version 0."""
    return CounterAggregate(aggregate_id)


@pytest.fixture
def order_aggregate(aggregate_id: str) -> OrderAggregate:
    """Provide a fresh OrderAggregate in draft status."""
    return OrderAggregate(aggregate_id)


@pytest.fixture
def populated_counter(
    aggregate_id: str,
    counter_history: list[CounterIncremented | CounterDecremented],
) -> CounterAggregate:
    """Provide a CounterAggregate rehydrated from counter_history."""
    counter = CounterAggregate(aggregate_id)
    counter.load_from_history(counter_history)
    return counter


# =============================================================================
# Repository Fixtures
# =============================================================================


@pytest.fixture
def mock_tracer() -> MockTracer:
    """Provide a tracer that records spans."""
    return MockTracer()


@pytest.fixture
def repository(mock_tracer: MockTracer) -> InMemoryAggregateRepository:
    """Provide an empty in-memory repository recording spans on mock_tracer."""
    return InMemoryAggregateRepository(tracer=mock_tracer)
