from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from customer_sync.exceptions import ConfigurationError

WRITE_KEY_VAR = "SEGMENT_WRITE_KEY"
DEFAULT_SEGMENT_API_HOST = "https://api.segment.io"
DEFAULT_FLUSH_TIMEOUT_SECONDS = 5.0


def _env_float(name: str, fallback: float) -> float:
    try:
        value = float(os.getenv(name, str(fallback)))
    except (TypeError, ValueError):
        return fallback
    return value if value > 0 else fallback


@dataclass(frozen=True)
class EnvironmentConfig:
    segment_write_key: str
    segment_api_host: str = DEFAULT_SEGMENT_API_HOST
    flush_timeout: float = DEFAULT_FLUSH_TIMEOUT_SECONDS


@dataclass(frozen=True)
class EnvironmentValidationResult:
    is_valid: bool
    missing_vars: List[str] = field(default_factory=list)
    config: Optional[EnvironmentConfig] = None


def validate_environment() -> EnvironmentValidationResult:
    """Check the process environment for the Segment write key.

    Read on every call (not cached) so each invocation sees the current
    environment.
    """
    write_key = (os.getenv(WRITE_KEY_VAR) or "").strip()
    if not write_key:
        return EnvironmentValidationResult(is_valid=False, missing_vars=[WRITE_KEY_VAR])

    return EnvironmentValidationResult(
        is_valid=True,
        config=EnvironmentConfig(
            segment_write_key=write_key,
            segment_api_host=os.getenv("SEGMENT_API_HOST", DEFAULT_SEGMENT_API_HOST),
            flush_timeout=_env_float("SEGMENT_FLUSH_TIMEOUT", DEFAULT_FLUSH_TIMEOUT_SECONDS),
        ),
    )


def get_environment_config() -> EnvironmentConfig:
    result = validate_environment()
    if not result.is_valid or result.config is None:
        raise ConfigurationError(
            f"Missing required environment variable: {', '.join(result.missing_vars)}"
        )
    return result.config


def get_flush_timeout() -> float:
    return _env_float("SEGMENT_FLUSH_TIMEOUT", DEFAULT_FLUSH_TIMEOUT_SECONDS)
