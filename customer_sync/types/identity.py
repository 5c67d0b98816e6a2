from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class TraitAddress(BaseModel):
    """Address trait in the shape Segment expects."""

    model_config = ConfigDict(frozen=True)

    street: Optional[str] = None
    city: Optional[str] = None
    postalCode: Optional[str] = None
    country: Optional[str] = None


class Traits(BaseModel):
    """User traits attached to an identify call.

    `email` is always set (possibly empty). `name` and `address` are left as
    `None` when there is nothing to send and are dropped on serialization,
    so the wire payload never carries a null.
    """

    model_config = ConfigDict(frozen=True)

    email: str
    name: Optional[str] = None
    address: Optional[TraitAddress] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class IdentityPayload(BaseModel):
    """Destination payload produced by the customer transformer.

    Attributes:
        userId: Customer email, trimmed. Empty when the customer has none.
        traits: Email, optional name and optional address.

    Example:
        >>> IdentityPayload(userId="a@b.com", traits=Traits(email="a@b.com", name="A B")).to_dict()
        {'userId': 'a@b.com', 'traits': {'email': 'a@b.com', 'name': 'A B'}}
    """

    model_config = ConfigDict(frozen=True)

    userId: str
    traits: Traits

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
