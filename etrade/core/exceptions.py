"""Shared exceptions module."""

from typing import Optional


class ETradeException(Exception):
    """Base exception for the E*Trade client."""

    def __init__(self, message: str):
        """Create a new ETradeException instance.

        Args:
        ----
            message (str): The error message.

        """
        self.message = message
        super().__init__(self.message)


class ConfigurationError(ETradeException):
    """Exception raised when client construction options are missing or invalid."""

    pass


class TransportError(ETradeException):
    """Exception raised when the HTTP round trip fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        """Create a new TransportError instance.

        Args:
        ----
            message (str): The error message.
            status_code (int, optional): HTTP status, when the server answered.

        """
        self.status_code = status_code
        super().__init__(message)


class UnsupportedContentType(ETradeException):
    """Exception raised when a response declares a content type with no registered parser."""

    def __init__(self, content_type: Optional[str]):
        """Create a new UnsupportedContentType instance.

        Args:
        ----
            content_type (str, optional): The declared content type.

        """
        self.content_type = content_type
        super().__init__(f"Unrecognized content type: {content_type}")


class MalformedResponse(ETradeException):
    """Exception raised when a response body is unreadable or lacks an expected field."""

    def __init__(self, message: str, missing_field: Optional[str] = None):
        """Create a new MalformedResponse instance.

        Args:
        ----
            message (str): The error message.
            missing_field (str, optional): The expected field that was absent.

        """
        self.missing_field = missing_field
        super().__init__(message)
