"""AWS Lambda entry point for Commercetools notifications delivered over SNS.

Each SNS record either confirms the topic subscription (acknowledged, nothing
else happens) or wraps a Commercetools payload as a JSON string in
`Sns.Message`. Records are processed one after another; the invocation
succeeds only if every record does, otherwise it reports the first failing
record's status. Identities already sent are not rolled back.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from customer_sync.services.pipeline import process_payload
from customer_sync.types import IdentityClient, ProcessingResult, SnsMessageType
from server.logging_config import configure_logging

logger = logging.getLogger(__name__)

PARSE_FAILED = "Failed to parse SNS Message as Commercetools payload"


def _sns(record: Mapping[str, Any]) -> Mapping[str, Any]:
    sns = record.get("Sns") if isinstance(record, Mapping) else None
    return sns if isinstance(sns, Mapping) else {}


def is_subscription_confirmation(record: Mapping[str, Any]) -> bool:
    return _sns(record).get("Type") == SnsMessageType.SUBSCRIPTION_CONFIRMATION.value


def parse_sns_message(message: Any) -> Any:
    """Decode the JSON string carried in `Sns.Message`; None if it is empty or not JSON."""
    if not isinstance(message, str) or message == "":
        return None
    try:
        return json.loads(message)
    except ValueError:
        return None


def extract_commercetools_payload(record: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    """Return the decoded payload if it looks like a Commercetools notification."""
    parsed = parse_sns_message(_sns(record).get("Message"))
    if not isinstance(parsed, dict):
        return None
    if not all(key in parsed for key in ("notificationType", "type", "resource")):
        return None
    return parsed


async def process_record(
    record: Mapping[str, Any], client: Optional[IdentityClient] = None
) -> ProcessingResult:
    sns = _sns(record)
    if is_subscription_confirmation(record):
        logger.info(
            "Handling SNS subscription confirmation",
            extra={"messageId": sns.get("MessageId"), "topicArn": sns.get("TopicArn")},
        )
        return ProcessingResult(success=True, status_code=200)

    payload = extract_commercetools_payload(record)
    if payload is None:
        logger.error(
            "Failed to extract Commercetools payload from SNS Message",
            extra={"messageId": sns.get("MessageId")},
        )
        return ProcessingResult(success=False, status_code=400, error=PARSE_FAILED)

    return await process_payload(payload, client)


def _response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {"statusCode": status_code, "body": json.dumps(body)}


async def handle_event(
    event: Mapping[str, Any], client: Optional[IdentityClient] = None
) -> Dict[str, Any]:
    """Process every record in an SNS event and build the Lambda response."""
    try:
        records = event.get("Records") or []
        results: List[ProcessingResult] = []
        for record in records:
            try:
                results.append(await process_record(record, client))
            except Exception as e:
                logger.exception("Unexpected error processing SNS record")
                results.append(
                    ProcessingResult(success=False, status_code=500, error=str(e) or "Processing failed")
                )

        first_failure = next((r for r in results if not r.success), None)
        if first_failure is None:
            return _response(200, {"success": True, "processed": len(results)})

        return _response(
            first_failure.status_code,
            {
                "success": False,
                "error": first_failure.error or "Processing failed",
                "processed": len(results),
            },
        )
    except Exception as e:
        logger.exception("Unexpected error in Lambda handler")
        return _response(500, {"success": False, "error": str(e) or "Internal server error"})


def handler(event: Mapping[str, Any], context: Any = None) -> Dict[str, Any]:
    """Lambda entry point: `customer_sync.handlers.sns.handler`."""
    configure_logging()
    return asyncio.run(handle_event(event))
