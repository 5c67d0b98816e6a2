"""Validation of Commercetools webhook requests.

Checks run in a fixed order and stop at the first failure so every invalid
payload maps to exactly one, predictable error message.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Tuple, Union

from customer_sync.types import (
    EventKind,
    InvalidPayload,
    ValidationResult,
    ValidPayload,
    WebhookEvent,
    WebhookResource,
)

_EVENT_KINDS: Dict[str, EventKind] = {
    "CustomerCreated": EventKind.CUSTOMER_CREATED,
    "CustomerUpdated": EventKind.CUSTOMER_UPDATED,
}

# (field, expected type) in the order they are checked
_STRING = "string"
_NUMBER = "number"
_REQUIRED_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("projectKey", _STRING),
    ("id", _STRING),
    ("version", _NUMBER),
    ("sequenceNumber", _NUMBER),
    ("resourceVersion", _NUMBER),
    ("createdAt", _STRING),
    ("lastModifiedAt", _STRING),
)


def validate_method(method: Optional[str]) -> bool:
    """Only POST is accepted by the webhook endpoint."""
    return method == "POST"


def parse_json(body: Union[str, bytes, None]) -> Tuple[bool, Any]:
    """Decode a request body.

    Returns `(True, data)` on success or `(False, error_message)` when the body
    is missing or is not valid JSON.
    """
    if body is None or len(body) == 0:
        return False, "Request body is required"
    try:
        return True, json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        return False, str(e) or "Invalid JSON format"


def _is_number(value: Any) -> bool:
    # bool is an int subclass but not a JSON number
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _matches(value: Any, expected: str) -> bool:
    if expected == _NUMBER:
        return _is_number(value)
    return isinstance(value, str)


def identify_event_type(event: WebhookEvent) -> Optional[EventKind]:
    """Map the Commercetools `type` field to an `EventKind`, if recognized."""
    return _EVENT_KINDS.get(event.type)


def validate_payload(payload: Any) -> ValidationResult:
    """Validate a decoded webhook payload and classify its event type.

    Extra keys (such as `customer`) are ignored here; the extractor reads them.
    """
    if payload is None:
        return InvalidPayload(error="Payload is required")
    if not isinstance(payload, dict):
        return InvalidPayload(error="Payload must be an object")

    if payload.get("notificationType") != "Message":
        return InvalidPayload(error='Invalid notificationType: must be "Message"')

    event_type = payload.get("type")
    if not isinstance(event_type, str) or event_type == "":
        return InvalidPayload(error="Missing or invalid type field")

    resource = payload.get("resource")
    if not isinstance(resource, dict):
        return InvalidPayload(error="Missing or invalid resource field")
    if not isinstance(resource.get("typeId"), str) or not isinstance(resource.get("id"), str):
        return InvalidPayload(error="Resource must have typeId and id fields")

    for name, expected in _REQUIRED_FIELDS:
        if not _matches(payload.get(name), expected):
            return InvalidPayload(error=f"Missing or invalid {name} field")

    # already type-checked; no re-validation so numbers keep their exact value
    event = WebhookEvent.model_construct(
        notificationType="Message",
        type=event_type,
        resource=WebhookResource.model_construct(typeId=resource["typeId"], id=resource["id"]),
        **{name: payload[name] for name, _ in _REQUIRED_FIELDS},
    )

    event_kind = identify_event_type(event)
    if event_kind is None:
        return InvalidPayload(error=f"Unrecognized event type: {event_type}")

    return ValidPayload(event_kind=event_kind, event=event)


def parse_webhook_event(payload: Any) -> Optional[WebhookEvent]:
    """Return the validated `WebhookEvent`, or None when the payload is invalid."""
    result = validate_payload(payload)
    return result.event if isinstance(result, ValidPayload) else None
