"""
Sidekick Service - Custom Exceptions

Namespaced exceptions so handlers never shadow builtins like ConnectionError
or TimeoutError. Client-specific errors (content store, AI gateway) live next
to their clients and inherit from SidekickError.
"""


class SidekickError(Exception):
    """Base exception for Sidekick Service.

    All custom exceptions inherit from this base class.
    """
    pass


class ConfigurationError(SidekickError):
    """Raised when a required credential or endpoint is missing."""
    pass
