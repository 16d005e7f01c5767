"""
HTTP client pipeline.

One ``execute`` call runs, per pass:

    cookie merge -> request listeners -> transport (+ cookie persistence)
    -> response listeners -> retry? -> redirect? -> result

Retries restart the pass with the same request. Redirects start a new pass
with a fresh GET request. Both are plain loops.
"""
import logging
from typing import List, Optional, Union
from urllib.parse import urlsplit

import httpx

from ..adapters.httpx_transport import HttpxTransport
from ..config import ClientConfig, ResolvedConfig, resolve_config
from ..console import print_raw_response, print_wire_request
from ..cookies import CookieManager, apply_response_cookies
from ..errors import (
    HTTPException,
    TooManyRedirectsException,
    TooManyRetriesException,
    map_transport_error,
)
from ..listeners import Cancelled, Listener, intercept
from ..request import HTTPRequest
from ..response import HTTPResponse
from ..types import Method, Transport
from .request_builder import build_wire_request, site_of
from .response_builder import build_response

logger = logging.getLogger("http_kit.client")

SendOutcome = Union[HTTPResponse, Cancelled]


def resolve_location(sent_url: str, location: str) -> str:
    """
    Resolve a redirect ``Location`` against the URL that produced it.

    A value starting with ``/`` is appended to the sent URL's path prefix,
    everything before the last ``/``; anything else is used as-is.
    """
    if not location.startswith("/"):
        return location
    parts = urlsplit(sent_url)
    prefix = parts.path.rsplit("/", 1)[0] if "/" in parts.path else ""
    return f"{parts.scheme}://{parts.netloc}{prefix}{location}"


def redirect_request(sent: HTTPRequest, response: HTTPResponse) -> Optional[HTTPRequest]:
    """The follow-up GET for a 3xx response, or None when there is nothing to follow."""
    if not (sent.redirects and response.is_redirect):
        return None
    location = response.first_header("location")
    if location is None or not location.strip():
        return None
    return HTTPRequest(
        url=resolve_location(sent.url, location.strip()),
        cookies=dict(sent.cookies),
        method=Method.GET,
        redirects=True,
    )


class HTTPClient:
    """Synchronous HTTP client with cookies, redirects and listeners."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[Transport] = None,
        httpx_client: Optional[httpx.Client] = None,
    ):
        self._config: ResolvedConfig = resolve_config(config)
        self.user_agent: str = self._config.user_agent
        self.cookie_manager: CookieManager = self._config.cookie_manager
        self.listeners: List[Listener] = self._config.listeners
        if transport is not None:
            self._transport = transport
        else:
            self._transport = HttpxTransport(httpx_client=httpx_client)
        self._closed = False

    @property
    def config(self) -> ResolvedConfig:
        return self._config

    def add_listener(self, listener: Listener) -> Listener:
        self.listeners.append(listener)
        return listener

    def remove_listener(self, listener: Listener) -> None:
        if listener in self.listeners:
            self.listeners.remove(listener)

    def send(self, request: HTTPRequest) -> HTTPResponse:
        """
        Send ``request`` and return the final response.

        Raises:
            HTTPRequestCancelledException: a listener cancelled the exchange.
            HTTPException: the transport failed, or a configured cap was hit.
        """
        outcome = self.execute(request)
        if isinstance(outcome, Cancelled):
            raise outcome.to_exception()
        return outcome

    def execute(self, request: HTTPRequest) -> SendOutcome:
        """Like ``send`` but returns a ``Cancelled`` outcome instead of raising."""
        if self._closed:
            raise RuntimeError("Client has been closed")

        hops = 0
        while True:
            outcome = self._exchange(request)
            if isinstance(outcome, Cancelled):
                return outcome

            next_request = redirect_request(request, outcome)
            if next_request is None:
                return outcome

            hops += 1
            max_redirects = self._config.max_redirects
            if max_redirects is not None and hops > max_redirects:
                raise TooManyRedirectsException(
                    f"Exceeded {max_redirects} redirects (last: {next_request.url})"
                )
            logger.info(f"Redirecting to {next_request.url} (hop {hops}, status {outcome.status})")
            request = next_request

    def _exchange(self, request: HTTPRequest) -> SendOutcome:
        """One request/response cycle, repeated while listeners ask for a retry."""
        retries = 0
        while True:
            site = site_of(request.url)
            cookies = dict(self.cookie_manager.get(site))
            cookies.update(request.cookies)
            request.cookies = cookies

            result = intercept(self.listeners, request)
            if result.cancelled is not None:
                return result.cancelled

            response = self._transmit(request, site)

            result = intercept(self.listeners, response)
            if result.cancelled is not None:
                return result.cancelled
            if not result.retry:
                return response

            retries += 1
            max_retries = self._config.max_retries
            if max_retries is not None and retries > max_retries:
                raise TooManyRetriesException(
                    f"Exceeded {max_retries} listener retries for {request.url}"
                )
            logger.info(f"Retrying {request.method.value} {request.url} (retry {retries})")

    def _transmit(self, request: HTTPRequest, site: str) -> HTTPResponse:
        """Send over the transport, assemble the response and persist its cookies."""
        wire = build_wire_request(request, self.user_agent)
        if self._config.debug:
            print_wire_request(wire)

        try:
            raw = self._transport.send(wire)
        except HTTPException:
            raise
        except Exception as e:
            raise map_transport_error(e, wire.url) from e

        if self._config.debug:
            print_raw_response(raw)

        response = build_response(raw)
        if response.cookies:
            # cookies belong to the host that actually answered
            response_site = urlsplit(raw.url).hostname or site
            apply_response_cookies(self.cookie_manager, response_site, response.cookies)
        return response

    def request(self, method: Union[Method, str], url: str, **kwargs) -> HTTPResponse:
        """Build an ``HTTPRequest`` from keyword fields and send it."""
        return self.send(HTTPRequest(url=url, method=method, **kwargs))

    def get(self, url: str, **kwargs) -> HTTPResponse:
        return self.request(Method.GET, url, **kwargs)

    def head(self, url: str, **kwargs) -> HTTPResponse:
        return self.request(Method.HEAD, url, **kwargs)

    def post(self, url: str, **kwargs) -> HTTPResponse:
        return self.request(Method.POST, url, **kwargs)

    def put(self, url: str, **kwargs) -> HTTPResponse:
        return self.request(Method.PUT, url, **kwargs)

    def patch(self, url: str, **kwargs) -> HTTPResponse:
        return self.request(Method.PATCH, url, **kwargs)

    def delete(self, url: str, **kwargs) -> HTTPResponse:
        return self.request(Method.DELETE, url, **kwargs)

    def close(self) -> None:
        """Close the client."""
        self._closed = True
        self._transport.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
