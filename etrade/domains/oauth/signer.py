"""OAuth 1.0a request signing (HMAC-SHA1).

Reference: RFC 5849 - The OAuth 1.0 Protocol, section 3.4
"""

import base64
import hashlib
import hmac
import math
from datetime import datetime
from typing import Mapping, Optional, Union
from urllib.parse import quote

from etrade.core.config.enums import ApiModule
from etrade.domains.oauth.endpoints import EndpointResolver
from etrade.domains.oauth.nonce import NonceGenerator
from etrade.domains.oauth.types import SignedRequest

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"


def percent_encode(value: str) -> str:
    """RFC 3986 escaping; only letters, digits and ``-._~`` pass through."""
    return quote(str(value), safe="~")


def build_signature_base_string(method: str, url: str, params: Mapping[str, str]) -> str:
    """``METHOD&enc(url)&enc(k1=v1&k2=v2...)`` with pairs sorted after encoding."""
    pairs = sorted((percent_encode(k), percent_encode(v)) for k, v in params.items())
    normalized = "&".join(f"{k}={v}" for k, v in pairs)
    return f"{method.upper()}&{percent_encode(url)}&{percent_encode(normalized)}"


def sign_hmac_sha1(base_string: str, consumer_secret: str, token_secret: str = "") -> str:
    """Base64 HMAC-SHA1 digest of `base_string`.

    The key is the encoded consumer secret and token secret joined by ``&``;
    the token half is empty until a token has been issued.
    """
    key = f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"
    digest = hmac.new(key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii")


def compute_signature(
    method: str,
    url: str,
    parameters: Mapping[str, str],
    consumer_secret: str,
    token_secret: str = "",
) -> str:
    """Signature for `parameters`; any `oauth_signature` already present is excluded."""
    params = {k: v for k, v in parameters.items() if k != "oauth_signature"}
    base_string = build_signature_base_string(method, url, params)
    return sign_hmac_sha1(base_string, consumer_secret, token_secret)


class RequestSigner:
    """Builds the OAuth parameter set for a request and signs it.

    The signer is bound to a consumer key and an endpoint resolver; secrets
    are passed per call so the same signer serves both the request-token
    step (no token secret) and authenticated calls.
    """

    def __init__(
        self,
        consumer_key: str,
        resolver: EndpointResolver,
        nonce_generator: Optional[NonceGenerator] = None,
    ) -> None:
        self._consumer_key = consumer_key
        self._resolver = resolver
        self._nonces = nonce_generator or NonceGenerator()

    def base_parameters(self, timestamp: datetime) -> dict[str, str]:
        """Fresh oauth_* parameters for a request made at `timestamp`."""
        return {
            "oauth_consumer_key": self._consumer_key,
            "oauth_nonce": self._nonces.generate(timestamp),
            "oauth_signature_method": SIGNATURE_METHOD,
            "oauth_timestamp": str(math.floor(timestamp.timestamp())),
            "oauth_version": OAUTH_VERSION,
        }

    def build_signed_request(
        self,
        method: str,
        timestamp: datetime,
        module: Union[ApiModule, str],
        action: str,
        extra_params: Optional[Mapping[str, str]],
        consumer_secret: str,
        token_secret: Optional[str] = None,
    ) -> SignedRequest:
        """Resolve the endpoint, assemble the parameters and sign them.

        Args:
            method: HTTP method; normalised to upper case.
            timestamp: Time of the request, used for the nonce and oauth_timestamp.
            module: API module the action belongs to.
            action: Operation name within the module.
            extra_params: Call-specific parameters, e.g. ``oauth_callback``.
            consumer_secret: Shared consumer secret.
            token_secret: Secret of the current token; None before one is issued.

        Returns:
            SignedRequest whose parameters are exactly what was signed plus
            ``oauth_signature``.
        """
        method = method.upper()
        url = self._resolver.resolve(module, action).url

        params = self.base_parameters(timestamp)
        params.update({k: str(v) for k, v in (extra_params or {}).items()})
        params["oauth_signature"] = compute_signature(
            method, url, params, consumer_secret, token_secret or ""
        )

        return SignedRequest(method=method, url=url, parameters=params)
