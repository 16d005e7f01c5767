"""
Request assembly: HTTPRequest to WireRequest.
"""
import logging
from typing import Dict, List, Mapping, Optional, Tuple
from urllib.parse import urlsplit

from ..errors import MalformedHTTPURLException
from ..request import HTTPRequest
from ..types import Method, WireRequest

logger = logging.getLogger("http_kit.request_builder")


def site_of(url: str) -> str:
    """Host component of ``url``; the cookie partition key."""
    try:
        host = urlsplit(url).hostname
    except ValueError as e:
        raise MalformedHTTPURLException(f"Invalid URL: {url}", e) from e
    if not host:
        raise MalformedHTTPURLException(f"Invalid URL: {url}")
    return host


def build_url(url: str, query: Optional[Mapping[str, str]] = None) -> str:
    """Append query parameters as ``k=v`` pairs joined by ``&``."""
    if not query:
        return url
    query_str = "&".join(f"{name}={value}" for name, value in query.items())
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query_str}"


def build_cookie_header(cookies: Mapping[str, str]) -> Optional[str]:
    if not cookies:
        return None
    return "; ".join(f"{name}={value}" for name, value in cookies.items())


def build_headers(request: HTTPRequest, user_agent: str) -> List[Tuple[str, str]]:
    """
    Wire headers: defaults first, replaced by any request header with the
    same (case-insensitive) name, then every request header value, then the
    Cookie header.
    """
    defaults: Dict[str, Tuple[str, str]] = {
        "user-agent": ("User-Agent", user_agent),
        "accept": ("Accept", "*/*"),
    }
    supplied = {name.lower() for name in request.headers}

    result = [pair for key, pair in defaults.items() if key not in supplied]
    for name, values in request.headers.items():
        for value in values:
            result.append((name, value))

    cookie_header = build_cookie_header(request.cookies)
    if cookie_header:
        result.append(("Cookie", cookie_header))
    return result


def build_body(request: HTTPRequest) -> Optional[bytes]:
    """Body bytes, or None for an empty body or a HEAD request."""
    if request.method == Method.HEAD or request.body.is_empty:
        return None
    return request.body.content


def build_wire_request(request: HTTPRequest, user_agent: str) -> WireRequest:
    headers = build_headers(request, user_agent)
    content = build_body(request)
    if content is not None and request.body.content_type:
        if not any(name.lower() == "content-type" for name, _ in headers):
            headers.append(("Content-Type", request.body.content_type))

    wire = WireRequest(
        method=request.method.value,
        url=build_url(request.url, request.query),
        headers=headers,
        content=content,
        connect_timeout=request.timeout / 1000 if request.timeout else None,
    )
    logger.debug(
        f"build_wire_request: method={wire.method}, url={wire.url}, "
        f"headers={[name for name, _ in wire.headers]}, "
        f"body_size={len(content) if content else 0}"
    )
    return wire
