"""httpx-backed transport.

Sends the signed OAuth parameters as the query string, the way E*Trade
expects them on its v0 endpoints. Implements the Transport protocol.
"""

import httpx

from etrade.core.exceptions import TransportError
from etrade.core.logging import logger
from etrade.core.protocols.transport import Transport
from etrade.domains.oauth.types import SignedRequest, TransportResponse


class HttpxTransport(Transport):
    """Dispatch signed requests with a short-lived httpx.AsyncClient.

    One attempt per call. Non-2xx responses are reported as TransportError
    with the status code attached.
    """

    DEFAULT_TIMEOUT_SECONDS = 30.0

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        """Initialize the transport.

        Args:
            timeout: Seconds to wait for the server before giving up.
        """
        self._timeout = timeout

    async def dispatch(self, request: SignedRequest) -> TransportResponse:
        """Send the request and return its response.

        Raises:
            TransportError: On timeouts, connection failures and non-2xx statuses.
        """
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            try:
                response = await client.request(
                    request.method, request.url, params=request.parameters
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                logger.warning(
                    f"[HttpxTransport] {request.method} {request.url} returned "
                    f"{exc.response.status_code}"
                )
                raise TransportError(
                    f"HTTP {exc.response.status_code}: {exc.response.text}",
                    status_code=exc.response.status_code,
                ) from exc
            except httpx.TimeoutException as exc:
                raise TransportError(
                    f"Request to {request.url} timed out after {self._timeout:.0f}s"
                ) from exc
            except httpx.HTTPError as exc:
                raise TransportError(f"Request to {request.url} failed: {exc}") from exc

        return TransportResponse(
            status_code=response.status_code,
            content_type=response.headers.get("content-type"),
            body=response.text,
        )
