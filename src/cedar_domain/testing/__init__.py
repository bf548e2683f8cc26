"""
Test utilities for cedar_domain.

Components:
    Scenario: Given/When/Then scenarios for aggregates
    events_match: Compare events by type and payload

Example:
    >>> from cedar_domain.testing import Scenario
    >>> Scenario.for_aggregate(OrderAggregate).when(lambda o: o.place()).then(OrderPlaced()).run()

Note:
    This module is optional and intended for test code only. It should not
    be imported in production code paths.
"""

from cedar_domain.testing.scenario import Scenario, event_payload, events_match

__all__ = [
    "Scenario",
    "event_payload",
    "events_match",
]
