from __future__ import annotations

import asyncio
from typing import List, Optional, Tuple

from customer_sync.types import IdentityClient, Traits


class InMemoryIdentityClient(IdentityClient):
    """Identity client that records calls instead of sending them.

    Used by tests in place of the Segment client. Failures can be
    injected per call; `hang_flush` makes `flush` wait forever so callers can
    exercise their timeout handling.

    Example:
        >>> client = InMemoryIdentityClient()
        >>> asyncio.run(client.identify("a@b.com", Traits(email="a@b.com")))
        >>> client.identified[0][0]
        'a@b.com'
    """

    def __init__(
        self,
        write_key: str = "",
        identify_error: Optional[BaseException] = None,
        flush_error: Optional[BaseException] = None,
        hang_flush: bool = False,
    ) -> None:
        self.write_key = write_key
        self.identify_error = identify_error
        self.flush_error = flush_error
        self.hang_flush = hang_flush
        self.identified: List[Tuple[str, Traits]] = []
        self.flushed: List[Tuple[str, Traits]] = []
        self.flush_calls = 0
        self.closed = False

    async def identify(self, user_id: str, traits: Traits) -> None:  # type: ignore[override]
        if self.identify_error is not None:
            raise self.identify_error
        self.identified.append((user_id, traits))

    async def flush(self) -> None:  # type: ignore[override]
        self.flush_calls += 1
        if self.hang_flush:
            await asyncio.Event().wait()
        if self.flush_error is not None:
            raise self.flush_error
        self.flushed.extend(self.identified[len(self.flushed):])

    async def close_and_flush(self) -> None:  # type: ignore[override]
        await self.flush()
        self.closed = True
