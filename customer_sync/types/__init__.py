"""Core types for the Commercetools to Segment customer sync.

This package centralizes the enums, payload models, result types and the
identity client protocol. Most modules should import types from here rather
than directly from submodules.

Usage:
    from customer_sync.types import Customer, IdentityPayload, IdentityClient
"""

from .customer import Address, Customer
from .enums import EventKind, SnsMessageType
from .identity import IdentityPayload, TraitAddress, Traits
from .protocols import IdentityClient
from .results import (
    DeliveryFailure,
    DeliveryResult,
    DeliverySuccess,
    InvalidPayload,
    ProcessingResult,
    ValidationResult,
    ValidPayload,
)
from .webhook import WebhookEvent, WebhookResource

__all__ = [
    "Address",
    "Customer",
    "EventKind",
    "SnsMessageType",
    "IdentityPayload",
    "TraitAddress",
    "Traits",
    "IdentityClient",
    "DeliveryFailure",
    "DeliveryResult",
    "DeliverySuccess",
    "InvalidPayload",
    "ProcessingResult",
    "ValidationResult",
    "ValidPayload",
    "WebhookEvent",
    "WebhookResource",
]
