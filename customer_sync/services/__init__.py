"""Services package for the customer sync."""

from .delivery import send_customer, send_customer_with_client
from .pipeline import process_payload

__all__ = [
    "process_payload",
    "send_customer",
    "send_customer_with_client",
]
