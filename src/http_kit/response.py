"""
HTTP response model.
"""
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Dict, List, Optional

from .html import HTMLDocument, parse_html
from .json_parser import parse_json_to_list, parse_json_to_map
from .types import ContentType, Headers, MessageKind


class ResponseBody:
    """
    Body of an HTTP response.

    ``text`` is decoded lazily with ``encoding`` on first access.
    """

    def __init__(
        self,
        content: bytes = b"",
        content_type: str = ContentType.APPLICATION_OCTET_STREAM,
        encoding: str = "utf-8",
    ):
        self.content = content
        self.content_type = content_type
        self.encoding = encoding

    @cached_property
    def text(self) -> str:
        return self.content.decode(self.encoding, errors="replace")

    @property
    def size(self) -> int:
        return len(self.content)

    def to_html_document(self) -> HTMLDocument:
        """Parse the body as an HTML document."""
        return parse_html(self.text)

    def to_json_map(self) -> Dict[str, Any]:
        """Parse the body as a JSON object."""
        return parse_json_to_map(self.text)

    def to_json_list(self) -> List[Any]:
        """Parse the body as a JSON array."""
        return parse_json_to_list(self.text)

    def __repr__(self) -> str:
        return (
            f"ResponseBody(size={self.size}, content_type={self.content_type!r}, "
            f"encoding={self.encoding!r})"
        )


@dataclass
class HTTPResponse:
    """An HTTP response. Header names are lower-cased."""

    status: int
    url: str
    headers: Headers = field(default_factory=dict)
    cookies: Dict[str, str] = field(default_factory=dict)
    body: ResponseBody = field(default_factory=ResponseBody)

    kind = MessageKind.RESPONSE

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status <= 399

    def get_header(self, name: str) -> Optional[List[str]]:
        return self.headers.get(name.lower())

    def first_header(self, name: str) -> Optional[str]:
        values = self.get_header(name)
        return values[0] if values else None

    def snapshot(self) -> Dict[str, object]:
        """Diagnostic summary used in cancellation reports."""
        return {
            "url": self.url,
            "status": self.status,
            "header_names": list(self.headers.keys()),
            "cookie_names": list(self.cookies.keys()),
            "content_type": self.body.content_type,
            "encoding": self.body.encoding,
            "body_size": self.body.size,
        }
