from __future__ import annotations

from typing import Protocol

from .identity import Traits


class IdentityClient(Protocol):
    """Protocol for destination identity APIs.

    The delivery service only ever needs these three calls, which keeps the
    production Segment client and the in-memory test double interchangeable.

    Responsibilities:
        - Queue an identify call for a user id and its traits
        - Push anything queued to the destination on `flush`
        - Flush and release resources on `close_and_flush`

    Minimal example:
        >>> from customer_sync.types import IdentityClient, Traits
        >>> class PrintClient(IdentityClient):
        ...     async def identify(self, user_id: str, traits: Traits) -> None:
        ...         print(user_id, traits.to_dict())
        ...     async def flush(self) -> None:
        ...         return None
        ...     async def close_and_flush(self) -> None:
        ...         return None
    """

    async def identify(self, user_id: str, traits: Traits) -> None:
        """Queue an identify call. Must not wait for the destination to respond."""
        ...

    async def flush(self) -> None:
        """Send queued calls. Implementations raise on transport or API errors."""
        ...

    async def close_and_flush(self) -> None:
        """Flush and close the client; used on process shutdown."""
        ...
