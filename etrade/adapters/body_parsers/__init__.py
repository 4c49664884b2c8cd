"""Response body parsers keyed by content type."""

from etrade.adapters.body_parsers.registry import (
    BodyParserRegistry,
    default_registry,
    parse_form,
    parse_json,
)

__all__ = ["BodyParserRegistry", "default_registry", "parse_form", "parse_json"]
