"""
HTML parsing exceptions.
"""
from ..errors import ParseException


class HTMLParseException(ParseException):
    """Base class for all HTML parsing exceptions."""


class EmptyHtmlException(HTMLParseException):
    """Raised when attempting to parse blank HTML content."""

    def __init__(self):
        super().__init__("HTML content cannot be empty")


class HtmlParsingException(HTMLParseException):
    """Raised when the underlying parser fails."""

    def __init__(self, cause: BaseException):
        super().__init__("Error parsing HTML content")
        self.__cause__ = cause
