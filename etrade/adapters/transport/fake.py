"""Fake transport for testing.

Records dispatched requests and replays seeded responses without touching
the network.
"""

from typing import List, Optional

from etrade.domains.oauth.types import SignedRequest, TransportResponse


class FakeTransport:
    """Test implementation of the Transport protocol.

    Usage:
        fake = FakeTransport()
        fake.seed_response("application/json", '{"oauth_token": "T123"}')
        result = await client.fetch_request_token()

        assert fake.requests[0].url.endswith("/oauth/request_token")
    """

    def __init__(self) -> None:
        """Initialize with no seeded response."""
        self.requests: List[SignedRequest] = []
        self._responses: List[TransportResponse] = []
        self._error: Optional[Exception] = None

    # -- seeding helpers --

    def seed_response(
        self, content_type: Optional[str], body: str, status_code: int = 200
    ) -> None:
        """Queue a response; the last one is repeated once the queue drains."""
        self._responses.append(
            TransportResponse(status_code=status_code, content_type=content_type, body=body)
        )

    def set_error(self, error: Exception) -> None:
        self._error = error

    def clear_error(self) -> None:
        self._error = None

    # -- Transport --

    async def dispatch(self, request: SignedRequest) -> TransportResponse:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        if not self._responses:
            raise AssertionError("FakeTransport has no seeded response")
        if len(self._responses) > 1:
            return self._responses.pop(0)
        return self._responses[0]

    # Test helpers

    @property
    def dispatch_count(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> SignedRequest:
        return self.requests[-1]
