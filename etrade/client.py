"""Client facade for the E*Trade OAuth handshake and signed API calls.

Usage:
    client = ETradeClient({"key": "...", "secret": "...", "use_sandbox": True})

    result = await client.fetch_request_token()
    if result.ok:
        print("Visit", result.authorization_url)

    # or, continuation style
    await client.request_token(on_success=print, on_failure=report)
"""

from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from etrade.adapters.body_parsers import default_registry
from etrade.adapters.transport import HttpxTransport
from etrade.core.config import Settings, settings
from etrade.core.config.enums import ApiModule
from etrade.core.exceptions import ConfigurationError
from etrade.core.logging import logger
from etrade.core.protocols import BodyParser, Transport
from etrade.domains.oauth.endpoints import EndpointResolver
from etrade.domains.oauth.flow_service import (
    AccessTokenFlow,
    Clock,
    TokenAcquisitionFlow,
    dispatch_and_parse,
    utc_now,
)
from etrade.domains.oauth.signer import RequestSigner
from etrade.domains.oauth.types import (
    ClientConfig,
    ClientOptions,
    OAuthToken,
    SignedRequest,
    TokenExchangeResult,
    TokenRequestResult,
)


def _config_from_options(options: Any) -> ClientConfig:
    if not isinstance(options, Mapping):
        raise ConfigurationError(
            "The etrade client requires an options mapping with 'key' and 'secret'"
        )
    for required in ("key", "secret"):
        if not options.get(required):
            raise ConfigurationError(f"The etrade client requires an API {required}")
    try:
        return ClientOptions(**options).to_config()
    except (TypeError, ValidationError) as e:
        raise ConfigurationError(f"Invalid etrade client options: {e}") from e


class ETradeClient:
    """OAuth 1.0a client bound to one consumer key and environment.

    The configuration is validated once here and never changes afterwards,
    so a single client can run any number of concurrent flows.
    """

    def __init__(
        self,
        options: Mapping[str, Any],
        *,
        transport: Optional[Transport] = None,
        body_parser: Optional[BodyParser] = None,
        clock: Clock = utc_now,
    ) -> None:
        """Validate `options` and wire the collaborators.

        Args:
            options: ``{"key": str, "secret": str, "use_sandbox": bool = True}``.
            transport: Transport for the round trip; httpx by default.
            body_parser: Parser for response bodies; form and JSON by default.
            clock: Source of request timestamps.

        Raises:
            ConfigurationError: If options is not a mapping or lacks key/secret.
        """
        self.config = _config_from_options(options)
        self._resolver = EndpointResolver(self.config.environment)
        self._signer = RequestSigner(self.config.consumer_key, self._resolver)
        self._transport = transport or HttpxTransport(timeout=settings.HTTP_TIMEOUT_SECONDS)
        self._body_parser = body_parser or default_registry()
        self._clock = clock
        self._logger = logger.with_context(environment=self.config.environment.value)

    @classmethod
    def from_settings(
        cls, app_settings: Optional[Settings] = None, **kwargs: Any
    ) -> "ETradeClient":
        """Build a client from ``ETRADE_*`` environment settings."""
        s = app_settings or settings
        kwargs.setdefault("transport", HttpxTransport(timeout=s.HTTP_TIMEOUT_SECONDS))
        return cls(
            {"key": s.CONSUMER_KEY, "secret": s.CONSUMER_SECRET, "use_sandbox": s.USE_SANDBOX},
            **kwargs,
        )

    def _flow_kwargs(self) -> Dict[str, Any]:
        return dict(
            config=self.config,
            signer=self._signer,
            transport=self._transport,
            body_parser=self._body_parser,
            clock=self._clock,
            flow_logger=self._logger,
        )

    async def fetch_request_token(self) -> TokenRequestResult:
        """Obtain a request token; the result holds the authorization URL or the error."""
        return await TokenAcquisitionFlow(**self._flow_kwargs()).run()

    def request_token(
        self,
        on_success: Callable[[str], Any],
        on_failure: Callable[[Exception], Any],
    ) -> Awaitable[None]:
        """Continuation-style request token call.

        Exactly one of the callbacks is invoked exactly once when the returned
        awaitable completes: `on_success` with the authorization URL, or
        `on_failure` with the error.

        Raises:
            TypeError: Immediately, if either callback is not callable.
        """
        if not callable(on_success) or not callable(on_failure):
            raise TypeError(
                "request_token() requires callable on_success and on_failure arguments"
            )
        return self._deliver(on_success, on_failure)

    async def _deliver(
        self,
        on_success: Callable[[str], Any],
        on_failure: Callable[[Exception], Any],
    ) -> None:
        result = await self.fetch_request_token()
        if result.ok:
            on_success(result.authorization_url)
        else:
            on_failure(result.error)

    async def exchange_token(
        self, request_token: OAuthToken, verifier: str
    ) -> TokenExchangeResult:
        """Exchange an authorized request token and verifier for an access token."""
        flow = AccessTokenFlow(
            request_token=request_token, verifier=verifier, **self._flow_kwargs()
        )
        return await flow.run()

    def sign(
        self,
        module: Union[ApiModule, str],
        action: str,
        token: OAuthToken,
        method: str = "GET",
        params: Optional[Mapping[str, Any]] = None,
    ) -> SignedRequest:
        """Sign an authenticated API call with the access `token`."""
        extra = {k: str(v) for k, v in (params or {}).items()}
        extra["oauth_token"] = token.token
        return self._signer.build_signed_request(
            method,
            self._clock(),
            module,
            action,
            extra,
            self.config.consumer_secret,
            token.secret,
        )

    async def call(
        self,
        module: Union[ApiModule, str],
        action: str,
        token: OAuthToken,
        method: str = "GET",
        params: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Sign, dispatch and parse an authenticated API call.

        Raises:
            TransportError: If the round trip fails.
            UnsupportedContentType: If the response type has no parser.
            MalformedResponse: If the body cannot be decoded.
        """
        request = self.sign(module, action, token, method=method, params=params)
        self._logger.info(f"{request.method} {request.url}")
        return await dispatch_and_parse(self._transport, self._body_parser, request)
