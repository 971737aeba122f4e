"""Shared model utilities used across all models."""

from datetime import UTC, datetime
from enum import IntEnum

ACTIVE_STATUS = 1


class OrderStatus(IntEnum):
    """Order lifecycle states written by payment integrations."""

    APPROVED = 103
    CANCELED = 105
    REFUNDED = 106
    COMPLETED = 600


class OrderLineStatus(IntEnum):
    """Order detail line states that carry a billable quantity."""

    PARTIALLY_REFUNDED = 202
    FULFILLED = 204


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)
