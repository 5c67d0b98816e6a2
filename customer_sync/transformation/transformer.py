"""Commercetools customer to Segment identify payload mapping.

Pure functions only. Empty strings, whitespace and None are all treated as
"no value", and a trait with no value is left out of the payload entirely.
"""

from __future__ import annotations

from typing import List, Optional

from customer_sync.types import Address, Customer, IdentityPayload, TraitAddress, Traits


def _clean(value: Optional[str]) -> str:
    return value.strip() if value else ""


def _join_or_either(first: Optional[str], second: Optional[str]) -> Optional[str]:
    """Join both parts with a space, or return whichever one is non-blank."""
    a, b = _clean(first), _clean(second)
    if a and b:
        return f"{a} {b}"
    return a or b or None


def extract_name(customer: Customer) -> Optional[str]:
    """Resolve the display name: fullName, then first + last, then either alone."""
    full_name = _clean(customer.fullName)
    if full_name:
        return full_name
    return _join_or_either(customer.firstName, customer.lastName)


def extract_address(addresses: Optional[List[Address]]) -> Optional[TraitAddress]:
    """Build the address trait from the first address only.

    Returns None instead of an empty object when nothing usable is left.
    """
    if not addresses:
        return None

    first = addresses[0]
    parts = {
        "street": _join_or_either(first.streetName, first.streetNumber),
        "city": _clean(first.city) or None,
        "postalCode": _clean(first.postalCode) or None,
        "country": _clean(first.country) or None,
    }
    if all(value is None for value in parts.values()):
        return None
    return TraitAddress(**parts)


def transform_customer(customer: Customer) -> IdentityPayload:
    """Map a customer to a Segment identify payload.

    A missing or blank email yields an empty `userId`; callers decide whether
    that is an error.
    """
    email = _clean(customer.email)
    traits = Traits(
        email=email,
        name=extract_name(customer),
        address=extract_address(customer.addresses),
    )
    return IdentityPayload(userId=email, traits=traits)
