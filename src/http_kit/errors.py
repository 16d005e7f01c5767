"""
Exception taxonomy for http_kit.

Every failure surfaced by ``HTTPClient.send`` derives from ``HTTPException``.
Transport failures are translated by ``map_transport_error`` and always keep
the original exception as ``cause``.
"""
import socket
from typing import Any, Optional

import httpx


class HTTPException(Exception):
    """Base class for all HTTP-related exceptions raised by http_kit."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class HTTPRequestCancelledException(HTTPException):
    """Raised when a request or response listener cancels the exchange."""

    def __init__(self, message: str, outcome: Any = None):
        super().__init__(message)
        self.outcome = outcome


class MalformedHTTPURLException(HTTPException):
    """The request URL is not properly formed."""


class HTTPTimeoutException(HTTPException):
    """Connecting to the server or reading the response timed out."""


class HTTPSocketException(HTTPException):
    """A socket-level error occurred during the exchange."""


class HTTPConnectionException(HTTPSocketException):
    """The connection to the server could not be established."""


class HTTPProtocolException(HTTPException):
    """The HTTP exchange itself was malformed."""


class HTTPHostException(HTTPException):
    """The host of the request URL could not be resolved."""


class HTTPIOException(HTTPException):
    """A generic I/O error occurred during the exchange."""


class HTTPUnknownException(HTTPException):
    """A transport failure outside the known categories."""


class TooManyRedirectsException(HTTPException):
    """The configured redirect cap was exceeded."""


class TooManyRetriesException(HTTPException):
    """The configured listener retry cap was exceeded."""


class ParseException(Exception):
    """Base class for HTML and JSON parse failures."""


_DNS_FAILURE_HINTS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "temporary failure in name resolution",
    "no address associated with hostname",
)


def _is_host_resolution_failure(error: BaseException) -> bool:
    """Walk the cause chain looking for a DNS failure."""
    seen = set()
    current: Optional[BaseException] = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, socket.gaierror):
            return True
        if any(hint in str(current).lower() for hint in _DNS_FAILURE_HINTS):
            return True
        current = current.__cause__ or current.__context__
    return False


def map_transport_error(error: BaseException, url: str) -> HTTPException:
    """Translate a transport-level failure into an ``HTTPException``."""
    if isinstance(error, HTTPException):
        return error
    if isinstance(error, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return MalformedHTTPURLException(f"Invalid URL: {url}", error)
    if isinstance(error, (httpx.TimeoutException, socket.timeout, TimeoutError)):
        return HTTPTimeoutException("Request timed out", error)
    if isinstance(error, (httpx.ConnectError, ConnectionError, socket.gaierror)):
        if _is_host_resolution_failure(error):
            return HTTPHostException(f"Host not found: {url}", error)
        return HTTPConnectionException(f"Connection failed: {error}", error)
    if isinstance(error, httpx.ProtocolError):
        return HTTPProtocolException(f"Protocol error: {error}", error)
    if isinstance(error, httpx.NetworkError):
        return HTTPSocketException(f"Socket error: {error}", error)
    if isinstance(error, (httpx.TransportError, OSError)):
        return HTTPIOException(f"IO error during request: {error}", error)
    return HTTPUnknownException(f"Unexpected transport failure: {error!r}", error)
