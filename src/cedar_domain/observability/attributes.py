"""
Standard span attributes for cedar_domain.

Attribute names used by traced components, so spans from different
repositories can be filtered the same way.

Example:
    >>> from cedar_domain.observability.attributes import ATTR_AGGREGATE_ID
    >>>
    >>> with tracer.span(
    ...     "cedar_domain.repository.save",
    ...     {ATTR_AGGREGATE_ID: aggregate.aggregate_id},
    ... ):
    ...     pass
"""

# =============================================================================
# Aggregate Attributes
# =============================================================================

ATTR_AGGREGATE_ID = "cedar_domain.aggregate.id"
"""Unique identifier for the aggregate instance (string)."""

ATTR_AGGREGATE_TYPE = "cedar_domain.aggregate.type"
"""Class name of the aggregate (e.g., 'OrderAggregate')."""

# =============================================================================
# Stream Attributes
# =============================================================================

ATTR_BUCKET_ID = "cedar_domain.bucket.id"
"""Bucket (partition) holding the aggregate's stream (string)."""

ATTR_COMMIT_ID = "cedar_domain.commit.id"
"""Commit identifier used to deduplicate saves (UUID string)."""

ATTR_EVENT_COUNT = "cedar_domain.event.count"
"""Number of events in an operation (integer)."""

# =============================================================================
# Version Attributes
# =============================================================================

ATTR_VERSION = "cedar_domain.version"
"""Current version of an aggregate or stream (integer)."""

ATTR_EXPECTED_VERSION = "cedar_domain.expected_version"
"""Expected stream version for optimistic concurrency (integer)."""

__all__ = [
    "ATTR_AGGREGATE_ID",
    "ATTR_AGGREGATE_TYPE",
    "ATTR_BUCKET_ID",
    "ATTR_COMMIT_ID",
    "ATTR_EVENT_COUNT",
    "ATTR_EXPECTED_VERSION",
    "ATTR_VERSION",
]
