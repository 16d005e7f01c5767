"""
Response assembly: RawResponse to HTTPResponse.
"""
import codecs
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from ..response import HTTPResponse, ResponseBody
from ..types import ContentType, Headers, RawResponse

logger = logging.getLogger("http_kit.response_builder")

DEFAULT_ENCODING = "utf-8"


def build_headers(pairs: Iterable[Tuple[str, str]]) -> Headers:
    """Group header pairs into a multimap with lower-cased names."""
    headers: Dict[str, List[str]] = {}
    for name, value in pairs:
        headers.setdefault(name.lower(), []).append(value)
    return headers


def parse_set_cookies(headers: Headers) -> Dict[str, str]:
    """
    Extract cookies from ``set-cookie`` values.

    Only the leading ``name=value`` segment of each entry is used. Entries
    that do not split into exactly two parts on ``=`` are skipped. An empty
    value is kept; it marks the cookie for removal.
    """
    cookies: Dict[str, str] = {}
    for entry in headers.get("set-cookie", []):
        pair = entry.split(";")[0].strip()
        parts = pair.split("=")
        if len(parts) != 2:
            continue
        name, value = parts
        cookies[name.strip()] = value.strip()
    return cookies


def resolve_encoding(charset: Optional[str]) -> str:
    """The reported charset if Python knows it, otherwise UTF-8."""
    if not charset:
        return DEFAULT_ENCODING
    try:
        return codecs.lookup(charset.strip().strip('"')).name
    except LookupError:
        logger.warning(f"resolve_encoding: unknown charset {charset!r}, using {DEFAULT_ENCODING}")
        return DEFAULT_ENCODING


def build_response(raw: RawResponse) -> HTTPResponse:
    headers = build_headers(raw.headers)
    content_type = headers.get("content-type", [ContentType.APPLICATION_OCTET_STREAM])[0]
    body = ResponseBody(
        content=raw.content,
        content_type=content_type,
        encoding=resolve_encoding(raw.charset),
    )
    return HTTPResponse(
        status=raw.status,
        url=raw.url.lower(),
        headers=headers,
        cookies=parse_set_cookies(headers),
        body=body,
    )
