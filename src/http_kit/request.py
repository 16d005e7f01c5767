"""
HTTP request model.
"""
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from .body import RequestBody
from .types import Headers, MessageKind, Method

DEFAULT_TIMEOUT_MS = 30000


@dataclass
class HTTPRequest:
    """
    An HTTP request to send.

    ``cookies`` is overwritten on every send with the cookie manager's state
    for the target site merged with the values supplied here. ``timeout`` is
    in milliseconds and bounds connection establishment only.
    """

    url: str
    headers: Headers = field(default_factory=dict)
    cookies: Dict[str, str] = field(default_factory=dict)
    body: RequestBody = field(default_factory=RequestBody)
    query: Dict[str, str] = field(default_factory=dict)
    method: Method = Method.GET
    redirects: bool = True
    timeout: int = DEFAULT_TIMEOUT_MS

    kind = MessageKind.REQUEST

    def __post_init__(self):
        if isinstance(self.method, str) and not isinstance(self.method, Method):
            self.method = Method(self.method.upper())
        self.headers = {
            name: [values] if isinstance(values, str) else list(values)
            for name, values in self.headers.items()
        }

    def get_header(self, name: str) -> Optional[List[str]]:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, values in self.headers.items():
            if key.lower() == wanted:
                return values
        return None

    def add_header(self, name: str, value: str) -> "HTTPRequest":
        self.headers.setdefault(name, []).append(value)
        return self

    def copy(self) -> "HTTPRequest":
        return replace(
            self,
            headers={k: list(v) for k, v in self.headers.items()},
            cookies=dict(self.cookies),
            query=dict(self.query),
        )

    def snapshot(self) -> Dict[str, object]:
        """Diagnostic summary used in cancellation reports."""
        return {
            "url": self.url,
            "header_names": list(self.headers.keys()),
            "cookie_names": list(self.cookies.keys()),
            "method": self.method.value,
            "content_type": self.body.content_type,
            "body_size": self.body.size,
            "redirects": self.redirects,
            "timeout_ms": self.timeout,
        }
