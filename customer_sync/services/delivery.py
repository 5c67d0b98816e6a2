"""Delivery of identify payloads to the destination API.

Both entry points return a `DeliveryResult` and never raise: client errors,
transport errors, the flush timeout and configuration problems all come back
as a `DeliveryFailure`. There is exactly one attempt per call.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

from customer_sync.adapters.registry import ClientFactory
from customer_sync.config import get_flush_timeout
from customer_sync.types import (
    DeliveryFailure,
    DeliveryResult,
    DeliverySuccess,
    IdentityClient,
    IdentityPayload,
)

logger = logging.getLogger(__name__)


class FlushTimeoutError(TimeoutError):
    """Flush did not finish within the configured window."""


def _error_message(error: BaseException) -> str:
    return str(error) or error.__class__.__name__


def _error_code(error: BaseException) -> Optional[str]:
    if isinstance(error, httpx.HTTPStatusError):
        return str(error.response.status_code)
    code = getattr(error, "code", None)
    return str(code) if code is not None else None


async def _flush_with_timeout(client: IdentityClient, timeout: float) -> None:
    try:
        await asyncio.wait_for(client.flush(), timeout=timeout)
    except asyncio.TimeoutError:
        raise FlushTimeoutError(f"Flush operation timed out after {timeout:g} seconds") from None


async def send_customer_with_client(
    client: IdentityClient,
    payload: IdentityPayload,
    flush_timeout: Optional[float] = None,
) -> DeliveryResult:
    """Identify the customer with `client` and flush, bounded by `flush_timeout` seconds."""
    timeout = flush_timeout if flush_timeout is not None else get_flush_timeout()
    try:
        logger.debug("Calling identify", extra={"userId": payload.userId})
        await client.identify(payload.userId, payload.traits)
        logger.debug("identify queued, flushing", extra={"userId": payload.userId})
        await _flush_with_timeout(client, timeout)
    except Exception as e:
        logger.error(
            "Error sending identify call",
            extra={"userId": payload.userId, "error": _error_message(e)},
        )
        return DeliveryFailure(message=_error_message(e), code=_error_code(e))

    logger.debug("flush completed", extra={"userId": payload.userId})
    return DeliverySuccess()


async def send_customer(payload: IdentityPayload) -> DeliveryResult:
    """Resolve a fresh client from the environment, then send as above."""
    try:
        client = ClientFactory.from_environment()
    except Exception as e:
        logger.error("Could not create identity client", extra={"error": _error_message(e)})
        return DeliveryFailure(message=_error_message(e))
    return await send_customer_with_client(client, payload)
