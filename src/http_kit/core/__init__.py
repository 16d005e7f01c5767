"""
Core pipeline and message assembly for http_kit.
"""
from .client import HTTPClient, SendOutcome, redirect_request, resolve_location
from .request_builder import build_url, build_headers, build_body, build_wire_request, site_of
from .response_builder import build_response, parse_set_cookies, resolve_encoding

__all__ = [
    "HTTPClient",
    "SendOutcome",
    "redirect_request",
    "resolve_location",
    "build_url",
    "build_headers",
    "build_body",
    "build_wire_request",
    "site_of",
    "build_response",
    "parse_set_cookies",
    "resolve_encoding",
]
