"""Logging for the E*Trade client.

Loggers carry a set of dimensions (request id, module, action, ...) that are
rendered with every record. Use ``with_context`` to derive a child logger
with extra dimensions instead of mutating a shared one.

Usage:
    from etrade.core.logging import logger

    flow_logger = logger.with_context(flow="request_token")
    flow_logger.info("Requesting token")
"""

import logging
import sys
from typing import Any, Dict, MutableMapping, Optional, Tuple

from etrade.core.config import settings

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s%(dimensions)s"


class _DimensionsFormatter(logging.Formatter):
    """Append `key=value` dimensions to each formatted record."""

    def format(self, record: logging.LogRecord) -> str:
        dims = getattr(record, "dimensions", None) or {}
        record.dimensions = "".join(f" {k}={v}" for k, v in sorted(dims.items()))
        return super().format(record)


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter that attaches dimensions to every record."""

    def __init__(self, logger: logging.Logger, dimensions: Optional[Dict[str, Any]] = None):
        """Wrap `logger` with a fixed set of dimensions."""
        super().__init__(logger, {})
        self.dimensions: Dict[str, Any] = dict(dimensions or {})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["dimensions"] = {**self.dimensions, **extra.get("dimensions", {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a new logger carrying the current dimensions plus `dimensions`."""
        return ContextualLogger(self.logger, {**self.dimensions, **dimensions})


class LoggerConfigurator:
    """Creates consistently configured loggers."""

    _configured = False

    @classmethod
    def _configure_root(cls) -> None:
        if cls._configured:
            return
        root = logging.getLogger("etrade")
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(_DimensionsFormatter(_FORMAT))
        root.addHandler(handler)
        root.setLevel(settings.LOG_LEVEL.upper())
        root.propagate = False
        cls._configured = True

    @classmethod
    def configure_logger(
        cls, name: str, dimensions: Optional[Dict[str, Any]] = None
    ) -> ContextualLogger:
        """Return a ContextualLogger for `name` with the given dimensions.

        Args:
            name: Logger name, normally under the ``etrade`` namespace.
            dimensions: Key/value pairs rendered with every record.

        Returns:
            The configured logger.
        """
        cls._configure_root()
        return ContextualLogger(logging.getLogger(name), dimensions)


logger = LoggerConfigurator.configure_logger("etrade")
