"""Fake nonce generator for testing."""

from datetime import datetime
from typing import List


class FakeNonceGenerator:
    """Returns a fixed nonce and records the timestamps it was asked for.

    Usage:
        signer = RequestSigner("K", resolver, nonce_generator=FakeNonceGenerator("abc"))
    """

    def __init__(self, nonce: str = "fixed-nonce") -> None:
        self.nonce = nonce
        self.timestamps: List[datetime] = []

    def generate(self, timestamp: datetime) -> str:
        self.timestamps.append(timestamp)
        return self.nonce
