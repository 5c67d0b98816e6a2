"""Commercetools webhook validation and customer extraction."""

from .extractor import extract_customer
from .validator import identify_event_type, parse_json, validate_method, validate_payload

__all__ = [
    "extract_customer",
    "identify_event_type",
    "parse_json",
    "validate_method",
    "validate_payload",
]
