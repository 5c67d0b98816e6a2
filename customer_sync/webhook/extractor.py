from __future__ import annotations

from typing import Any, Dict, List, Optional

from customer_sync.types import Address, Customer

_CUSTOMER_FIELDS = ("email", "firstName", "lastName", "fullName")
_ADDRESS_FIELDS = ("streetName", "streetNumber", "city", "postalCode", "country")


def _string_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _pick_strings(record: Dict[str, Any], fields: tuple) -> Dict[str, Optional[str]]:
    """Copy the given keys that are present, coercing non-string values to None."""
    return {name: _string_or_none(record[name]) for name in fields if name in record}


def _extract_address(value: Any) -> Address:
    if not isinstance(value, dict):
        return Address()
    return Address(**_pick_strings(value, _ADDRESS_FIELDS))


def _extract_addresses(value: Any) -> Optional[List[Address]]:
    if not isinstance(value, list):
        return None
    return [_extract_address(item) for item in value]


def extract_customer(payload: Any) -> Optional[Customer]:
    """Pull the `customer` block out of a webhook payload.

    Never raises. Returns None only when there is no customer object at all;
    malformed optional fields are coerced to None instead of failing. Keys that
    are absent from the source stay unset on the returned model.
    """
    if not isinstance(payload, dict):
        return None

    customer_data = payload.get("customer")
    if not isinstance(customer_data, dict):
        return None

    fields: Dict[str, Any] = _pick_strings(customer_data, _CUSTOMER_FIELDS)
    if "addresses" in customer_data:
        fields["addresses"] = _extract_addresses(customer_data["addresses"])

    return Customer(**fields)
