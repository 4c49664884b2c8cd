"""Per-request nonce generation.

The nonce mirrors PHP's ``microtime() . rand()``: the fractional second,
a space, the whole seconds and a random integer, hashed to a fixed-length
hex string. MD5 is only a mixing function here; OAuth needs the nonce to be
unique per timestamp, not unpredictable.
"""

import hashlib
import math
import secrets
from datetime import datetime

RAND_MAX = 2**31 - 1


class NonceGenerator:
    """Produces a fresh `oauth_nonce` for each outbound request."""

    def generate(self, timestamp: datetime) -> str:
        """Return a hex nonce for a request made at `timestamp`.

        Args:
            timestamp: Time of the request. Naive datetimes are taken as local time.

        Returns:
            A 32-character lowercase hex digest.
        """
        epoch = timestamp.timestamp()
        seconds = math.floor(epoch)
        fraction = (timestamp.microsecond // 1000) / 1000.0
        rand = secrets.randbelow(RAND_MAX + 1)

        microtime = f"{fraction:.8f} {seconds}"
        digest = hashlib.md5(f"{microtime}{rand}".encode("utf-8"), usedforsecurity=False)
        return digest.hexdigest()
