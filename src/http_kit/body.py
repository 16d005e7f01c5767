"""
Request body value object and builder.

Example:
    body = BodyBuilder().json({"name": "test"}).build()
    form = BodyBuilder().add_field("q", "search").add_field("page", 2).build()
"""
import json
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Tuple, Union
from urllib.parse import urlencode

from .types import ContentType

MULTIPART_BOUNDARY = "----HttpKitFormBoundary"

FormFields = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


@dataclass
class RequestBody:
    """Body of an HTTP request."""

    content: bytes = b""
    content_type: str = ""
    encoding: str = "utf-8"

    @property
    def is_empty(self) -> bool:
        return len(self.content) == 0

    @property
    def size(self) -> int:
        return len(self.content)


class BodyBuilder:
    """
    Builder for ``RequestBody``.

    Each content method replaces the content. The content type is only
    filled in when none has been set yet; ``multipart`` always sets its own.
    Call ``build()`` to obtain the body.
    """

    def __init__(self, encoding: str = "utf-8"):
        self._encoding = encoding
        self._content = b""
        self._content_type = ""
        self._fields: dict = {}

    def _default_type(self, content_type: str) -> None:
        if not self._content_type.strip():
            self._content_type = content_type

    def content_type(self, value: str) -> "BodyBuilder":
        """Set an explicit content type."""
        self._content_type = value
        return self

    def nothing(self) -> "BodyBuilder":
        """Empty content."""
        self._content = b""
        return self

    def string(self, value: str) -> "BodyBuilder":
        """Plain text content."""
        self._content = value.encode(self._encoding)
        self._default_type(ContentType.TEXT_PLAIN)
        return self

    text = string

    def json(self, value: Any) -> "BodyBuilder":
        """JSON content; non-string values are serialized."""
        if not isinstance(value, str):
            value = json.dumps(value)
        self._content = value.encode(self._encoding)
        self._default_type(ContentType.APPLICATION_JSON)
        return self

    def xml(self, value: str) -> "BodyBuilder":
        """XML content."""
        self._content = value.encode(self._encoding)
        self._default_type(ContentType.APPLICATION_XML)
        return self

    def add_field(self, name: str, value: Any) -> "BodyBuilder":
        """Add one form field and re-encode the form content."""
        self._fields[name] = str(value)
        return self.form(self._fields)

    def form(self, fields: FormFields) -> "BodyBuilder":
        """URL-encoded form content."""
        items = fields.items() if isinstance(fields, Mapping) else fields
        pairs = [(str(name), str(value)) for name, value in items]
        self._fields = dict(pairs)
        self._content = urlencode(pairs).encode(self._encoding)
        self._default_type(ContentType.APPLICATION_FORM_URLENCODED)
        return self

    def file(self, value: bytes) -> "BodyBuilder":
        """Raw file bytes."""
        self._content = bytes(value)
        self._default_type(ContentType.APPLICATION_OCTET_STREAM)
        return self

    def multipart(self, parts: Mapping[str, RequestBody]) -> "BodyBuilder":
        """
        Multipart form content with the fixed ``----HttpKitFormBoundary``.

        Parts carry no per-part Content-Type, and each part body is decoded
        as UTF-8 text.
        """
        boundary = MULTIPART_BOUNDARY
        self._content_type = ContentType.form_data_with_boundary(boundary)

        rendered = f"--{boundary}\r\n".join(
            f'Content-Disposition: form-data;name="{name}"\r\n\r\n'
            f"{part.content.decode('utf-8', errors='replace')}\r\n"
            for name, part in parts.items()
        )
        payload = f"--{boundary}\r\n{rendered}--{boundary}\r\n--"
        self._content = payload.encode(self._encoding)
        return self

    def build(self) -> RequestBody:
        return RequestBody(
            content=self._content,
            content_type=self._content_type,
            encoding=self._encoding,
        )


def text_body(value: str) -> RequestBody:
    return BodyBuilder().string(value).build()


def json_body(value: Any) -> RequestBody:
    return BodyBuilder().json(value).build()


def form_body(fields: FormFields) -> RequestBody:
    return BodyBuilder().form(fields).build()
