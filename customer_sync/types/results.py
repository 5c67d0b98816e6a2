from __future__ import annotations

from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel

from .enums import EventKind
from .webhook import WebhookEvent


class ValidPayload(BaseModel):
    """Successful validation: the payload is a recognized customer event."""

    is_valid: Literal[True] = True
    event_kind: EventKind
    event: WebhookEvent


class InvalidPayload(BaseModel):
    """Failed validation carrying the first error found."""

    is_valid: Literal[False] = False
    error: str


ValidationResult = Union[ValidPayload, InvalidPayload]


class DeliverySuccess(BaseModel):
    """The identify call was queued and flushed to the destination."""

    success: Literal[True] = True


class DeliveryFailure(BaseModel):
    """Delivery failed; never raised, always returned.

    Attributes:
        message: Human readable error from the client, transport or timeout.
        code: Provider status code when one is known (e.g. "401").
    """

    success: Literal[False] = False
    message: str
    code: Optional[str] = None


DeliveryResult = Union[DeliverySuccess, DeliveryFailure]


class ProcessingResult(BaseModel):
    """Outcome of running one notification through the pipeline.

    Entry adapters map this straight to their own response format; the
    status code is HTTP-flavoured (200/400/500) because both adapters speak it.
    """

    success: bool
    status_code: int
    error: Optional[str] = None
    details: Optional[str] = None
    event_kind: Optional[EventKind] = None

    def to_response(self) -> Dict[str, Any]:
        if self.success:
            return {
                "eventType": self.event_kind.value if self.event_kind else None,
                "success": True,
            }
        body: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body
