from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

import httpx

from customer_sync.config import DEFAULT_SEGMENT_API_HOST
from customer_sync.exceptions import ConfigurationError
from customer_sync.types import IdentityClient, Traits

logger = logging.getLogger(__name__)

LIBRARY_NAME = "commercetools-segment-sync"
LIBRARY_VERSION = "0.1.0"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SegmentClient(IdentityClient):
    """Segment adapter implementing the IdentityClient protocol.

    Talks to the Segment HTTP Tracking API directly. `identify` only queues a
    message locally; `flush` sends the queue in one request to `/v1/batch`,
    authenticated with the write key as the basic-auth username.

    See: https://segment.com/docs/connections/sources/catalog/libraries/server/http-api/
    """

    def __init__(
        self,
        write_key: str,
        api_host: str = DEFAULT_SEGMENT_API_HOST,
        timeout: float = 15.0,
    ) -> None:
        write_key = (write_key or "").strip()
        if not write_key:
            raise ConfigurationError("Segment write key is required")
        self.write_key = write_key
        self.batch_url = f"{api_host.rstrip('/')}/v1/batch"
        self.timeout = timeout
        self._queue: List[Dict[str, Any]] = []
        self._closed = False

    def send_endpoint(self) -> str:
        return self.batch_url

    @property
    def pending(self) -> int:
        return len(self._queue)

    def _build_message(self, user_id: str, traits: Traits) -> Dict[str, Any]:
        return {
            "type": "identify",
            "userId": user_id,
            "traits": traits.to_dict(),
            "messageId": str(uuid4()),
            "timestamp": _now_iso(),
            "context": {"library": {"name": LIBRARY_NAME, "version": LIBRARY_VERSION}},
        }

    async def identify(self, user_id: str, traits: Traits) -> None:  # type: ignore[override]
        if self._closed:
            raise RuntimeError("Segment client is closed")
        self._queue.append(self._build_message(user_id, traits))

    async def flush(self) -> None:  # type: ignore[override]
        """Send queued messages. Raises httpx errors on transport or non-2xx responses."""
        if not self._queue:
            return

        batch, self._queue = self._queue, []
        payload = {"batch": batch, "sentAt": _now_iso()}

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(self.send_endpoint(), json=payload, auth=(self.write_key, ""))
            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                try:
                    error_detail: Optional[Any] = e.response.json()
                except ValueError:
                    error_detail = e.response.text
                logger.error(
                    "Segment API error",
                    extra={"status": e.response.status_code, "detail": error_detail},
                )
                raise

    async def close_and_flush(self) -> None:  # type: ignore[override]
        try:
            await self.flush()
        finally:
            self._closed = True
