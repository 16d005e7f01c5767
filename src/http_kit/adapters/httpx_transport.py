"""
Transport adapter built on httpx.
"""
import logging
from typing import Optional

import httpx

from ..types import RawResponse, WireRequest

logger = logging.getLogger("http_kit.httpx_transport")


class HttpxTransport:
    """
    Synchronous transport performing one blocking round trip per send.

    Without an injected ``httpx_client`` every send opens and closes its own
    client. Redirects are never followed here; the pipeline handles them.
    """

    def __init__(self, httpx_client: Optional[httpx.Client] = None):
        self._client = httpx_client
        self._closed = False

    def send(self, request: WireRequest) -> RawResponse:
        if self._closed:
            raise RuntimeError("Transport has been closed")

        timeout = httpx.Timeout(None, connect=request.connect_timeout)
        if self._client is not None:
            return self._exchange(self._client, request, timeout)

        with httpx.Client(follow_redirects=False) as client:
            return self._exchange(client, request, timeout)

    def _exchange(
        self,
        client: httpx.Client,
        request: WireRequest,
        timeout: httpx.Timeout,
    ) -> RawResponse:
        # httpx.Request directly: the client cookie jar is never merged in
        httpx_request = httpx.Request(
            method=request.method,
            url=request.url,
            headers=request.headers,
            content=request.content,
            extensions={"timeout": timeout.as_dict()},
        )
        try:
            response = client.send(httpx_request, stream=True, follow_redirects=False)
            try:
                try:
                    content = response.read()
                except (httpx.HTTPError, httpx.StreamError, OSError) as e:
                    # an unreadable body is reported as an empty one
                    logger.debug(f"_exchange: body read failed for {request.url}: {e!r}")
                    content = b""
            finally:
                response.close()
        finally:
            # the cookie manager is the only cookie store
            client.cookies.clear()

        return RawResponse(
            status=response.status_code,
            url=str(response.url),
            headers=list(response.headers.multi_items()),
            content=content,
            charset=response.charset_encoding,
        )

    def close(self) -> None:
        """Close the transport and any injected httpx client."""
        self._closed = True
        if self._client is not None:
            self._client.close()
