from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing or unusable.

    Only configuration loading and client construction raise this; the
    delivery service catches it and reports a `DeliveryFailure` instead.
    """
