from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from customer_sync.adapters.memory import InMemoryIdentityClient
from customer_sync.routers.webhook import get_identity_client
from main import app

SEGMENT_API_HOST = "https://api.segment.test"
SEGMENT_BATCH_URL = f"{SEGMENT_API_HOST}/v1/batch"


@pytest.fixture(autouse=True)
def test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENV", "test")
    # Safe defaults for the Segment client
    monkeypatch.setenv("SEGMENT_WRITE_KEY", "test-write-key")
    monkeypatch.setenv("SEGMENT_API_HOST", SEGMENT_API_HOST)
    monkeypatch.delenv("SEGMENT_FLUSH_TIMEOUT", raising=False)


@pytest.fixture()
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture()
def memory_client() -> Iterator[InMemoryIdentityClient]:
    """Route webhook deliveries to an in-memory identity client."""
    identity_client = InMemoryIdentityClient()
    app.dependency_overrides[get_identity_client] = lambda: identity_client
    try:
        yield identity_client
    finally:
        app.dependency_overrides.pop(get_identity_client, None)
