"""Token flows for the E*Trade OAuth 1.0a handshake.

Each flow performs one round trip and ends in exactly one terminal state:

    PENDING -> RESOLVED   result carries the token (and authorization URL)
    PENDING -> FAILED     result carries the error

Per-call errors never propagate out of ``run()``; they are returned in the
result. A flow object is single use.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional
from urllib.parse import urlencode

from etrade.core.config.enums import ApiModule
from etrade.core.exceptions import ETradeException, MalformedResponse, TransportError
from etrade.core.logging import ContextualLogger, logger
from etrade.core.protocols import BodyParser, Transport
from etrade.domains.oauth.endpoints import AUTHORIZE_URL
from etrade.domains.oauth.signer import RequestSigner
from etrade.domains.oauth.types import (
    ClientConfig,
    FlowState,
    OAuthToken,
    SignedRequest,
    TokenExchangeResult,
    TokenRequestResult,
)

# E*Trade requires the out-of-band marker whether or not a callback is configured.
CALLBACK_OOB = "oob"

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_authorization_url(consumer_key: str, oauth_token: str) -> str:
    """URL the user visits to approve the request token."""
    return f"{AUTHORIZE_URL}?{urlencode({'key': consumer_key, 'token': oauth_token})}"


async def dispatch_and_parse(
    transport: Transport, body_parser: BodyParser, request: SignedRequest
) -> Dict[str, Any]:
    """One round trip whose failures all surface as ETradeException subclasses.

    Raises:
        TransportError: If the transport fails, whatever it raised.
        UnsupportedContentType: If the response type has no parser.
        MalformedResponse: If the parser fails or does not return a mapping.
    """
    try:
        response = await transport.dispatch(request)
    except ETradeException:
        raise
    except Exception as exc:
        raise TransportError(f"Request to {request.url} failed: {exc!r}") from exc

    try:
        parsed = body_parser.parse(response.content_type, response.body)
    except ETradeException:
        raise
    except Exception as exc:
        raise MalformedResponse(f"Failed to parse response body: {exc!r}") from exc
    if not isinstance(parsed, Mapping):
        raise MalformedResponse(f"Parsed body is {type(parsed).__name__}, expected a mapping")
    return dict(parsed)


class _TokenFlow:
    """Shared sign -> dispatch -> parse pipeline for the oauth module."""

    action: str = ""

    def __init__(
        self,
        *,
        config: ClientConfig,
        signer: RequestSigner,
        transport: Transport,
        body_parser: BodyParser,
        clock: Clock = utc_now,
        flow_logger: Optional[ContextualLogger] = None,
    ) -> None:
        self._config = config
        self._signer = signer
        self._transport = transport
        self._body_parser = body_parser
        self._clock = clock
        self._logger = (flow_logger or logger).with_context(
            flow=self.action, environment=config.environment.value
        )
        self.state = FlowState.PENDING

    def _begin(self) -> None:
        if self.state is not FlowState.PENDING:
            raise RuntimeError(f"{type(self).__name__} already finished ({self.state.value})")

    def _sign(self, extra_params: Dict[str, str], token_secret: Optional[str]) -> SignedRequest:
        return self._signer.build_signed_request(
            "GET",
            self._clock(),
            ApiModule.OAUTH,
            self.action,
            extra_params,
            self._config.consumer_secret,
            token_secret,
        )

    async def _round_trip(self, request: SignedRequest) -> Dict[str, Any]:
        self._logger.info(f"Requesting {self.action} from {request.url}")
        return await dispatch_and_parse(self._transport, self._body_parser, request)

    @staticmethod
    def _token_from(response: Dict[str, Any]) -> OAuthToken:
        token = response.get("oauth_token")
        if not token:
            raise MalformedResponse(
                "Response does not contain oauth_token", missing_field="oauth_token"
            )
        return OAuthToken(token=str(token), secret=str(response.get("oauth_token_secret", "")))

    def _fail(self, error: Exception) -> None:
        self.state = FlowState.FAILED
        self._logger.error(f"{self.action} failed: {error}")


class TokenAcquisitionFlow(_TokenFlow):
    """Obtain a request token and derive the user-facing authorization URL."""

    action = "request_token"

    async def run(self) -> TokenRequestResult:
        """Execute the flow once.

        Returns:
            TokenRequestResult with ``authorization_url`` and ``token`` on
            success, or ``error`` on failure.
        """
        self._begin()
        try:
            request = self._sign({"oauth_callback": CALLBACK_OOB}, token_secret=None)
            token = self._token_from(await self._round_trip(request))
        except ETradeException as e:
            self._fail(e)
            return TokenRequestResult(error=e)

        self.state = FlowState.RESOLVED
        self._logger.info("Obtained request token")
        return TokenRequestResult(
            authorization_url=build_authorization_url(self._config.consumer_key, token.token),
            token=token,
        )


class AccessTokenFlow(_TokenFlow):
    """Exchange an authorized request token and verifier for an access token."""

    action = "access_token"

    def __init__(self, *, request_token: OAuthToken, verifier: str, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._request_token = request_token
        self._verifier = verifier

    async def run(self) -> TokenExchangeResult:
        """Execute the exchange once.

        Returns:
            TokenExchangeResult with the access token, or ``error`` on failure.
        """
        self._begin()
        try:
            request = self._sign(
                {"oauth_token": self._request_token.token, "oauth_verifier": self._verifier},
                token_secret=self._request_token.secret,
            )
            token = self._token_from(await self._round_trip(request))
        except ETradeException as e:
            self._fail(e)
            return TokenExchangeResult(error=e)

        self.state = FlowState.RESOLVED
        self._logger.info("Obtained access token")
        return TokenExchangeResult(token=token)
