from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from customer_sync.adapters.memory import InMemoryIdentityClient
from customer_sync.adapters.segment import SegmentClient
from customer_sync.config import get_environment_config
from customer_sync.exceptions import ConfigurationError
from customer_sync.types import IdentityClient

ClientBuilder = Callable[..., IdentityClient]


class ClientFactory:
    """Builds identity clients from a write key.

    Segment is the default destination. Other builders (test doubles, a
    different analytics vendor) can be registered by name without changing
    the delivery service. Every builder is called as `builder(write_key, **options)`.
    """

    default = "segment"

    _registry: Dict[str, ClientBuilder] = {
        "segment": SegmentClient,
        "memory": InMemoryIdentityClient,
    }

    @classmethod
    def create(cls, write_key: str, name: Optional[str] = None, **options: Any) -> IdentityClient:
        """Create a client for `write_key`. Raises ConfigurationError on a blank key."""
        write_key = (write_key or "").strip()
        if not write_key:
            raise ConfigurationError("Segment write key is required")
        builder = cls._registry.get(name or cls.default)
        if builder is None:
            raise KeyError(f"Unknown identity client: {name}")
        return builder(write_key, **options)

    @classmethod
    def from_environment(cls, name: Optional[str] = None) -> IdentityClient:
        """Create a client from SEGMENT_WRITE_KEY. Raises ConfigurationError if unset."""
        config = get_environment_config()
        options: Dict[str, Any] = {}
        if (name or cls.default) == "segment":
            options["api_host"] = config.segment_api_host
        return cls.create(config.segment_write_key, name=name, **options)

    @classmethod
    def register(cls, name: str, builder: ClientBuilder) -> None:
        cls._registry[name] = builder
