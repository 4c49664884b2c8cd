"""E*Trade OAuth 1.0a signing and dispatch client."""

from etrade.client import ETradeClient

__all__ = ["ETradeClient"]
