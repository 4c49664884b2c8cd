"""Core protocols for dependency injection.

Adapters in etrade/adapters implement these; tests swap in fakes.
"""

from etrade.core.protocols.body_parser import BodyParser
from etrade.core.protocols.transport import Transport

__all__ = [
    "BodyParser",
    "Transport",
]
