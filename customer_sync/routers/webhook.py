from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from customer_sync.services.pipeline import process_payload
from customer_sync.types import IdentityClient
from customer_sync.webhook import parse_json, validate_method

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["webhook"])

METHOD_NOT_ALLOWED = "Method not allowed. Only POST is supported."


def get_identity_client() -> Optional[IdentityClient]:
    """Client used for delivery; None resolves a fresh one from the environment per request.

    Tests override this dependency to inject an in-memory client.
    """
    return None


@router.api_route("/webhook", methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
async def commercetools_webhook(
    request: Request,
    client: Optional[IdentityClient] = Depends(get_identity_client),
) -> JSONResponse:
    """Commercetools customer webhook.

    - Rejects anything but POST with 400 (not 405)
    - Parses the raw body as JSON
    - Runs validate, extract, transform and deliver
    - Maps the pipeline result to 200 / 400 / 500
    """
    if not validate_method(request.method):
        logger.warning("Rejected webhook request", extra={"method": request.method})
        return JSONResponse({"error": METHOD_NOT_ALLOWED}, status_code=400)

    ok, data = parse_json(await request.body())
    if not ok:
        logger.warning("Webhook body is not valid JSON", extra={"error": data})
        return JSONResponse({"error": data}, status_code=400)

    result = await process_payload(data, client)
    return JSONResponse(result.to_response(), status_code=result.status_code)
