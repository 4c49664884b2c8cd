"""Configuration module for the E*Trade client.

Usage:
    from etrade.core.config import settings, Environment

    if settings.USE_SANDBOX:
        ...
"""

from etrade.core.config.enums import ApiModule, Environment
from etrade.core.config.settings import Settings

__all__ = [
    "ApiModule",
    "Environment",
    "Settings",
    "settings",
]

# Singleton settings instance
settings = Settings()
