"""Content-type dispatch for response bodies.

Each registry instance owns its own table, so adding a parser for one
client never changes what another client accepts.
"""

import json
from typing import Any, Callable, Dict, Mapping, Optional
from urllib.parse import parse_qsl

from etrade.core.exceptions import MalformedResponse, UnsupportedContentType
from etrade.core.protocols.body_parser import BodyParser

ParseFn = Callable[[str], Dict[str, Any]]

FORM_URLENCODED = "application/x-www-form-urlencoded"
JSON = "application/json"


def parse_form(body: str) -> Dict[str, Any]:
    return dict(parse_qsl(body, keep_blank_values=True))


def parse_json(body: str) -> Dict[str, Any]:
    try:
        value = json.loads(body)
    except json.JSONDecodeError as exc:
        raise MalformedResponse(f"Response body is not valid JSON: {exc}") from exc
    if not isinstance(value, dict):
        raise MalformedResponse(f"Expected a JSON object, got {type(value).__name__}")
    return value


def _media_type(content_type: Optional[str]) -> str:
    """Strip parameters: 'application/json; charset=UTF-8' -> 'application/json'."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


class BodyParserRegistry(BodyParser):
    """BodyParser backed by a media-type -> parse function table."""

    def __init__(self, parsers: Optional[Dict[str, ParseFn]] = None) -> None:
        self._parsers: Dict[str, ParseFn] = {}
        for content_type, fn in (parsers or {}).items():
            self.register(content_type, fn)

    def register(self, content_type: str, fn: ParseFn) -> None:
        """Register `fn` for `content_type`, replacing any existing parser."""
        self._parsers[_media_type(content_type)] = fn

    def supports(self, content_type: Optional[str]) -> bool:
        return _media_type(content_type) in self._parsers

    @property
    def content_types(self) -> list[str]:
        return sorted(self._parsers)

    def parse(self, content_type: Optional[str], body: str) -> Dict[str, Any]:
        """Parse `body` with the parser registered for its media type.

        Raises:
            UnsupportedContentType: If nothing is registered for the media type.
            MalformedResponse: If the parser fails or does not return a mapping.
        """
        media_type = _media_type(content_type)
        fn = self._parsers.get(media_type)
        if fn is None:
            raise UnsupportedContentType(content_type)
        try:
            value = fn(body)
        except MalformedResponse:
            raise
        except Exception as exc:
            raise MalformedResponse(f"Failed to parse {media_type} body: {exc}") from exc
        if not isinstance(value, Mapping):
            raise MalformedResponse(
                f"Parser for {media_type} returned {type(value).__name__}, expected a mapping"
            )
        return dict(value)


def default_registry() -> BodyParserRegistry:
    """Registry with the form-encoded and JSON parsers E*Trade responds with."""
    return BodyParserRegistry({FORM_URLENCODED: parse_form, JSON: parse_json})
