from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict


class WebhookResource(BaseModel):
    """Reference to the Commercetools resource a notification is about."""

    model_config = ConfigDict(frozen=True)

    typeId: str
    id: str


class WebhookEvent(BaseModel):
    """Validated Commercetools notification.

    Built only by the payload validator once every required field has been
    checked, so consumers can rely on the types below without re-checking.
    Timestamps are kept as the opaque strings Commercetools sent.

    Example:
        >>> from customer_sync.webhook.validator import parse_webhook_event
        >>> event = parse_webhook_event(payload)  # doctest: +SKIP
        >>> event.resource.id  # doctest: +SKIP
        'customer-123'
    """

    model_config = ConfigDict(frozen=True)

    notificationType: Literal["Message"] = "Message"
    type: str
    resource: WebhookResource
    projectKey: str
    id: str
    version: Union[int, float]
    sequenceNumber: Union[int, float]
    resourceVersion: Union[int, float]
    createdAt: str
    lastModifiedAt: str
