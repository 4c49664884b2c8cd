"""Configuration enums for type-safe settings.

They inherit from str to keep them usable as plain strings in URLs and
environment variables.
"""

from enum import Enum


class Environment(str, Enum):
    """E*Trade API environments.

    Controls which trading host and path layout requests are resolved to.
    """

    SANDBOX = "sandbox"
    PRODUCTION = "production"

    @classmethod
    def from_sandbox_flag(cls, use_sandbox: bool) -> "Environment":
        """Map the ``use_sandbox`` client option onto an environment."""
        return cls.SANDBOX if use_sandbox else cls.PRODUCTION


class ApiModule(str, Enum):
    """API namespaces exposed by the E*Trade REST API.

    OAUTH issues tokens and is served from the same host in every environment.
    """

    OAUTH = "oauth"
    ACCOUNTS = "accounts"
    MARKET = "market"
    ORDER = "order"
