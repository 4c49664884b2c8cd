"""BodyParser protocol for decoding response bodies by content type."""

from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class BodyParser(Protocol):
    """Protocol for turning a response body into a structured value."""

    def parse(self, content_type: Optional[str], body: str) -> Dict[str, Any]:
        """Parse `body` according to `content_type`.

        Media-type parameters such as ``charset`` are ignored.

        Raises:
            UnsupportedContentType: If no parser handles the content type.
            MalformedResponse: If the body cannot be decoded.
        """
        ...
