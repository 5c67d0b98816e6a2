"""Shared notification pipeline used by the HTTP and SNS entry points.

validate -> extract -> transform -> email check -> deliver. Each step that can
fail maps to a `ProcessingResult` with an HTTP-style status: 400 for anything
wrong with the notification itself, 500 when delivery fails.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from customer_sync.services.delivery import send_customer, send_customer_with_client
from customer_sync.transformation import transform_customer
from customer_sync.types import DeliveryFailure, IdentityClient, InvalidPayload, ProcessingResult
from customer_sync.webhook import extract_customer, validate_payload

logger = logging.getLogger(__name__)

CUSTOMER_NOT_FOUND = "Customer data not found in payload"
EMAIL_REQUIRED = "Customer email is required"
DELIVERY_FAILED = "Failed to send customer data to Segment"


async def process_payload(
    payload: Any,
    client: Optional[IdentityClient] = None,
) -> ProcessingResult:
    """Run one decoded notification through the pipeline.

    When `client` is None a fresh client is resolved from the environment for
    this call; configuration problems then surface as a 500 delivery failure.
    """
    validation = validate_payload(payload)
    if isinstance(validation, InvalidPayload):
        logger.error("Payload validation failed", extra={"error": validation.error})
        return ProcessingResult(success=False, status_code=400, error=validation.error)

    event_kind = validation.event_kind
    customer = extract_customer(payload)
    if customer is None:
        logger.error(
            "Customer data not found in webhook payload",
            extra={"eventType": event_kind.value},
        )
        return ProcessingResult(
            success=False, status_code=400, error=CUSTOMER_NOT_FOUND, event_kind=event_kind
        )

    identity = transform_customer(customer)
    if not identity.userId.strip():
        logger.error("Customer email is required but missing", extra={"eventType": event_kind.value})
        return ProcessingResult(
            success=False, status_code=400, error=EMAIL_REQUIRED, event_kind=event_kind
        )

    logger.info(
        "Sending customer data to Segment",
        extra={"eventType": event_kind.value, "userId": identity.userId},
    )
    if client is None:
        result = await send_customer(identity)
    else:
        result = await send_customer_with_client(client, identity)

    if isinstance(result, DeliveryFailure):
        logger.error(
            "Failed to send customer data to Segment",
            extra={"eventType": event_kind.value, "userId": identity.userId, "error": result.message},
        )
        return ProcessingResult(
            success=False,
            status_code=500,
            error=DELIVERY_FAILED,
            details=result.message,
            event_kind=event_kind,
        )

    logger.info(
        "Successfully sent customer data to Segment",
        extra={"eventType": event_kind.value, "userId": identity.userId},
    )
    return ProcessingResult(success=True, status_code=200, event_kind=event_kind)
