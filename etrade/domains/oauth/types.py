"""Value types for the OAuth domain.

These live in a separate module to avoid circular imports between
service implementations and protocol definitions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

from etrade.core.config.enums import Environment


class ClientConfig(BaseModel):
    """Credentials and environment a client is bound to for its lifetime."""

    model_config = ConfigDict(frozen=True)

    consumer_key: str = Field(min_length=1)
    consumer_secret: str = Field(min_length=1)
    environment: Environment = Environment.SANDBOX

    @property
    def use_sandbox(self) -> bool:
        return self.environment is Environment.SANDBOX


class ClientOptions(BaseModel):
    """Options accepted by the client constructor."""

    model_config = ConfigDict(extra="forbid")

    key: str = Field(min_length=1)
    secret: str = Field(min_length=1)
    use_sandbox: bool = True

    def to_config(self) -> ClientConfig:
        return ClientConfig(
            consumer_key=self.key,
            consumer_secret=self.secret,
            environment=Environment.from_sandbox_flag(self.use_sandbox),
        )


@dataclass(frozen=True, slots=True)
class EndpointDescriptor:
    """Concrete host and path for a (module, action, environment) triple."""

    host: str
    path: str

    @property
    def url(self) -> str:
        return f"https://{self.host}{self.path}"


@dataclass(frozen=True, slots=True)
class SignedRequest:
    """A request whose parameters carry a valid `oauth_signature`."""

    method: str
    url: str
    parameters: Dict[str, str]

    @property
    def signature(self) -> str:
        return self.parameters["oauth_signature"]

    def authorization_header(self) -> str:
        """Render the oauth_* parameters as an OAuth Authorization header.

        Format: OAuth oauth_consumer_key="...", oauth_nonce="...", ...
        """
        items = sorted((k, v) for k, v in self.parameters.items() if k.startswith("oauth_"))
        return "OAuth " + ", ".join(
            f'{quote(k, safe="~")}="{quote(v, safe="~")}"' for k, v in items
        )


@dataclass(slots=True)
class TransportResponse:
    """What the transport hands back for a completed round trip."""

    status_code: int
    content_type: Optional[str]
    body: str


@dataclass(frozen=True, slots=True)
class OAuthToken:
    """An OAuth token and its secret (request token or access token)."""

    token: str
    secret: str = ""


class FlowState(str, Enum):
    """Lifecycle of a single token flow."""

    PENDING = "pending"
    RESOLVED = "resolved"
    FAILED = "failed"


@dataclass(slots=True)
class TokenRequestResult:
    """Outcome of a request-token flow: an authorization URL or an error."""

    authorization_url: Optional[str] = None
    token: Optional[OAuthToken] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class TokenExchangeResult:
    """Outcome of an access-token exchange: the access token or an error."""

    token: Optional[OAuthToken] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None
