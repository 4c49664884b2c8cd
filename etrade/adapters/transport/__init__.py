"""Transport adapters."""

from etrade.adapters.transport.fake import FakeTransport
from etrade.adapters.transport.httpx_transport import HttpxTransport

__all__ = ["HttpxTransport", "FakeTransport"]
