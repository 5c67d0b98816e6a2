from __future__ import annotations

from enum import Enum


class EventKind(str, Enum):
    """Commercetools notification types this service forwards to Segment.

    Values are the normalized event names reported back to webhook callers,
    not the raw Commercetools `type` strings.

    - CUSTOMER_CREATED: `type == "CustomerCreated"`
    - CUSTOMER_UPDATED: `type == "CustomerUpdated"`

    Example:
        >>> from customer_sync.types import EventKind
        >>> EventKind("customer.created") is EventKind.CUSTOMER_CREATED
        True
    """

    CUSTOMER_CREATED = "customer.created"
    CUSTOMER_UPDATED = "customer.updated"


class SnsMessageType(str, Enum):
    """SNS envelope `Type` values seen by the queue handler."""

    NOTIFICATION = "Notification"
    SUBSCRIPTION_CONFIRMATION = "SubscriptionConfirmation"
