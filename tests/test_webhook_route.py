from __future__ import annotations

import json

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from customer_sync.adapters.memory import InMemoryIdentityClient
from customer_sync.types import Traits
from tests.conftest import SEGMENT_BATCH_URL
from tests.fixtures.payloads import customer_notification

WEBHOOK = "/api/v1/webhook"


def post(client: TestClient, payload) -> httpx.Response:
    return client.post(WEBHOOK, content=json.dumps(payload), headers={"Content-Type": "application/json"})


def test_end_to_end_customer_created(client: TestClient, memory_client: InMemoryIdentityClient) -> None:
    payload = customer_notification(customer={"email": "a@b.com", "firstName": "A", "lastName": "B"})

    r = post(client, payload)

    assert r.status_code == 200
    assert r.json() == {"eventType": "customer.created", "success": True}
    assert memory_client.flushed == [("a@b.com", Traits(email="a@b.com", name="A B"))]


def test_customer_updated(client: TestClient, memory_client: InMemoryIdentityClient) -> None:
    r = post(client, customer_notification(event_type="CustomerUpdated"))
    assert r.status_code == 200
    assert r.json()["eventType"] == "customer.updated"


@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE", "OPTIONS"])
def test_non_post_is_rejected_with_400(client: TestClient, method: str) -> None:
    r = client.request(method, WEBHOOK)
    assert r.status_code == 400
    assert r.json() == {"error": "Method not allowed. Only POST is supported."}


def test_head_is_rejected_with_400(client: TestClient) -> None:
    r = client.head(WEBHOOK)
    assert r.status_code == 400


def test_empty_body(client: TestClient) -> None:
    r = client.post(WEBHOOK, content=b"")
    assert r.status_code == 400
    assert r.json() == {"error": "Request body is required"}


def test_invalid_json(client: TestClient) -> None:
    r = client.post(WEBHOOK, content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json()["error"]


def test_validation_error_is_returned(client: TestClient, memory_client: InMemoryIdentityClient) -> None:
    r = post(client, customer_notification(event_type="OrderCreated"))
    assert r.status_code == 400
    assert r.json() == {"error": "Unrecognized event type: OrderCreated"}
    assert memory_client.identified == []


def test_missing_customer(client: TestClient, memory_client: InMemoryIdentityClient) -> None:
    payload = customer_notification()
    del payload["customer"]
    r = post(client, payload)
    assert r.status_code == 400
    assert r.json() == {"error": "Customer data not found in payload"}


@pytest.mark.parametrize("email", [None, "", "   "])
def test_missing_email_skips_delivery(client: TestClient, memory_client: InMemoryIdentityClient, email) -> None:
    r = post(client, customer_notification(customer={"email": email, "firstName": "A"}))
    assert r.status_code == 400
    assert r.json() == {"error": "Customer email is required"}
    assert memory_client.identified == []
    assert memory_client.flush_calls == 0


def test_delivery_failure_is_500(client: TestClient, memory_client: InMemoryIdentityClient) -> None:
    memory_client.flush_error = RuntimeError("segment unavailable")
    r = post(client, customer_notification())
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to send customer data to Segment", "details": "segment unavailable"}


@respx.mock
def test_default_client_sends_to_segment(client: TestClient) -> None:
    route = respx.post(SEGMENT_BATCH_URL).mock(return_value=httpx.Response(200, json={"success": True}))

    r = post(client, customer_notification(customer={"email": "jane@example.com", "fullName": "Jane Doe"}))

    assert r.status_code == 200
    assert route.called
    (message,) = json.loads(route.calls.last.request.content.decode())["batch"]
    assert message["userId"] == "jane@example.com"
    assert message["traits"] == {"email": "jane@example.com", "name": "Jane Doe"}


def test_missing_write_key_is_500(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SEGMENT_WRITE_KEY")
    r = post(client, customer_notification())
    assert r.status_code == 500
    assert r.json()["details"] == "Missing required environment variable: SEGMENT_WRITE_KEY"
