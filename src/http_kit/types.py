"""
Type definitions for http_kit.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Protocol, Tuple


class Method(str, Enum):
    """HTTP methods supported for requests."""

    HEAD = "HEAD"
    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    PUT = "PUT"
    DELETE = "DELETE"


class MessageKind(str, Enum):
    """Runtime tag used to dispatch listeners to messages."""

    REQUEST = "request"
    RESPONSE = "response"


class ContentType:
    """Common HTTP content/mime type strings."""

    TEXT_PLAIN = "text/plain"
    TEXT_HTML = "text/html"
    APPLICATION_XHTML = "application/xhtml+xml"
    APPLICATION_XML = "application/xml"
    APPLICATION_JSON = "application/json"
    APPLICATION_JAVASCRIPT = "application/javascript"
    APPLICATION_FORM_URLENCODED = "application/x-www-form-urlencoded"
    APPLICATION_OCTET_STREAM = "application/octet-stream"
    APPLICATION_PDF = "application/pdf"
    APPLICATION_ZIP = "application/zip"
    APPLICATION_GZIP = "application/gzip"
    IMAGE_JPEG = "image/jpeg"
    IMAGE_PNG = "image/png"
    IMAGE_GIF = "image/gif"
    IMAGE_SVG = "image/svg+xml"
    AUDIO_MPEG = "audio/mpeg"
    VIDEO_MPEG = "video/mpeg"
    MULTIPART_FORM_DATA = "multipart/form-data"

    @staticmethod
    def form_data_with_boundary(boundary: str) -> str:
        """Multipart form data content type with the given boundary."""
        return f"multipart/form-data; boundary={boundary}"


# Header multimap as carried by messages
Headers = Dict[str, List[str]]
Cookies = Dict[str, str]


@dataclass
class WireRequest:
    """Fully prepared request handed to a transport."""

    method: str
    url: str
    headers: List[Tuple[str, str]] = field(default_factory=list)
    content: Optional[bytes] = None
    connect_timeout: Optional[float] = None


@dataclass
class RawResponse:
    """Raw exchange result reported by a transport."""

    status: int
    url: str
    headers: List[Tuple[str, str]] = field(default_factory=list)
    content: bytes = b""
    charset: Optional[str] = None


class Transport(Protocol):
    """Transport adapter interface."""

    def send(self, request: WireRequest) -> RawResponse:
        """Perform one blocking round trip."""
        ...

    def close(self) -> None:
        """Release transport resources."""
        ...
