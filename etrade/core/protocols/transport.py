"""Transport protocol for dispatching signed requests.

The transport owns the network round trip: connection handling, timeouts
and TLS. It performs a single attempt and never retries.

Usage:
    response = await transport.dispatch(signed_request)
    parsed = body_parser.parse(response.content_type, response.body)
"""

from typing import Protocol, runtime_checkable

from etrade.domains.oauth.types import SignedRequest, TransportResponse


@runtime_checkable
class Transport(Protocol):
    """Protocol for sending a SignedRequest over HTTP."""

    async def dispatch(self, request: SignedRequest) -> TransportResponse:
        """Send `request` and return the server's response.

        Args:
            request: The signed request. Its parameters are sent verbatim.

        Returns:
            The status, declared content type and body of the response.

        Raises:
            TransportError: If the request could not be completed or the
                server answered with a non-success status.
        """
        ...
