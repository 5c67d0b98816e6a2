from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class Address(BaseModel):
    """Commercetools address as extracted from a webhook payload.

    Every field is tri-state: absent (not in `model_fields_set`), present as
    `None`, or present as a string. Use `to_dict()` to get the shape back with
    absent keys omitted.
    """

    model_config = ConfigDict(frozen=True)

    streetName: Optional[str] = None
    streetNumber: Optional[str] = None
    city: Optional[str] = None
    postalCode: Optional[str] = None
    country: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class Customer(BaseModel):
    """Commercetools customer record carried inside a notification.

    Like `Address`, fields that were not present in the source payload stay
    unset rather than defaulting to `None`; the transformer treats both the
    same but callers serializing the record can tell them apart.

    Example:
        >>> c = Customer(email="a@b.com", firstName=None)
        >>> c.to_dict()
        {'email': 'a@b.com', 'firstName': None}
    """

    model_config = ConfigDict(frozen=True)

    email: Optional[str] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    fullName: Optional[str] = None
    addresses: Optional[List[Address]] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)
