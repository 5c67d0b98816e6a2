from __future__ import annotations

import asyncio
import base64
import json

import httpx
import pytest
import respx

from customer_sync.adapters.memory import InMemoryIdentityClient
from customer_sync.adapters.registry import ClientFactory
from customer_sync.adapters.segment import SegmentClient
from customer_sync.exceptions import ConfigurationError
from customer_sync.types import TraitAddress, Traits
from tests.conftest import SEGMENT_API_HOST, SEGMENT_BATCH_URL


def test_identify_only_queues() -> None:
    client = SegmentClient("key", api_host=SEGMENT_API_HOST)
    asyncio.run(client.identify("a@b.com", Traits(email="a@b.com")))
    assert client.pending == 1


@respx.mock
def test_flush_posts_batch_with_basic_auth() -> None:
    route = respx.post(SEGMENT_BATCH_URL).mock(return_value=httpx.Response(200, json={"success": True}))
    client = SegmentClient(" test-write-key ", api_host=SEGMENT_API_HOST + "/")

    async def run() -> None:
        await client.identify(
            "a@b.com",
            Traits(email="a@b.com", name="A B", address=TraitAddress(city="Springfield")),
        )
        await client.flush()

    asyncio.run(run())

    assert route.called
    request = route.calls.last.request
    expected_auth = "Basic " + base64.b64encode(b"test-write-key:").decode()
    assert request.headers["authorization"] == expected_auth

    body = json.loads(request.content.decode())
    assert "sentAt" in body
    (message,) = body["batch"]
    assert message["type"] == "identify"
    assert message["userId"] == "a@b.com"
    assert message["traits"] == {"email": "a@b.com", "name": "A B", "address": {"city": "Springfield"}}
    assert message["messageId"]
    assert message["timestamp"].endswith("Z")
    assert client.pending == 0


@respx.mock
def test_flush_with_empty_queue_sends_nothing() -> None:
    route = respx.post(SEGMENT_BATCH_URL)
    asyncio.run(SegmentClient("key", api_host=SEGMENT_API_HOST).flush())
    assert not route.called


@respx.mock
def test_flush_raises_on_api_error() -> None:
    respx.post(SEGMENT_BATCH_URL).mock(return_value=httpx.Response(400, json={"error": "invalid"}))
    client = SegmentClient("key", api_host=SEGMENT_API_HOST)

    async def run() -> None:
        await client.identify("a@b.com", Traits(email="a@b.com"))
        await client.flush()

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(run())


@respx.mock
def test_close_and_flush_closes_client() -> None:
    route = respx.post(SEGMENT_BATCH_URL).mock(return_value=httpx.Response(200, json={}))
    client = SegmentClient("key", api_host=SEGMENT_API_HOST)

    async def run() -> None:
        await client.identify("a@b.com", Traits(email="a@b.com"))
        await client.close_and_flush()

    asyncio.run(run())
    assert route.call_count == 1
    with pytest.raises(RuntimeError):
        asyncio.run(client.identify("c@d.com", Traits(email="c@d.com")))


@pytest.mark.parametrize("write_key", ["", "   "])
def test_blank_write_key_is_rejected(write_key: str) -> None:
    with pytest.raises(ConfigurationError):
        SegmentClient(write_key)
    with pytest.raises(ConfigurationError):
        ClientFactory.create(write_key)


def test_factory_creates_segment_client_by_default() -> None:
    client = ClientFactory.create(" abc ")
    assert isinstance(client, SegmentClient)
    assert client.write_key == "abc"


def test_factory_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    client = ClientFactory.from_environment()
    assert isinstance(client, SegmentClient)
    assert client.write_key == "test-write-key"
    assert client.send_endpoint() == SEGMENT_BATCH_URL

    monkeypatch.delenv("SEGMENT_WRITE_KEY")
    with pytest.raises(ConfigurationError):
        ClientFactory.from_environment()


def test_factory_registry() -> None:
    client = ClientFactory.create("abc", name="memory")
    assert isinstance(client, InMemoryIdentityClient)
    assert client.write_key == "abc"

    ClientFactory.register("memory-failing", lambda key: InMemoryIdentityClient(key, flush_error=RuntimeError("x")))
    failing = ClientFactory.create("abc", name="memory-failing")
    assert isinstance(failing, InMemoryIdentityClient)
    assert failing.flush_error is not None

    with pytest.raises(KeyError):
        ClientFactory.create("abc", name="missing")


def test_memory_client_close_and_flush() -> None:
    client = InMemoryIdentityClient()

    async def run() -> None:
        await client.identify("a@b.com", Traits(email="a@b.com"))
        await client.close_and_flush()

    asyncio.run(run())
    assert client.closed is True
    assert [user_id for user_id, _ in client.flushed] == ["a@b.com"]
