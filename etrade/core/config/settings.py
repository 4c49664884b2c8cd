"""Environment-backed settings for the E*Trade client."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings with automatic env var loading.

    Env vars use the ``ETRADE_`` prefix:
        ETRADE_CONSUMER_KEY=...
        ETRADE_USE_SANDBOX=false
    """

    model_config = SettingsConfigDict(
        env_prefix="ETRADE_",
        env_file=".env",
        extra="ignore",
    )

    CONSUMER_KEY: Optional[str] = Field(None, description="OAuth consumer key issued by E*Trade")
    CONSUMER_SECRET: Optional[str] = Field(
        None, description="OAuth consumer secret issued by E*Trade"
    )
    USE_SANDBOX: bool = Field(True, description="Route trading calls to the sandbox host")
    HTTP_TIMEOUT_SECONDS: float = Field(
        30.0, gt=0, description="Timeout applied by the HTTP transport"
    )
    LOG_LEVEL: str = Field("INFO", description="Level for the etrade logger")
