"""
Shared fixtures for http_kit tests.
"""
from typing import Callable, List, Optional, Union

import httpx
import pytest

from http_kit.config import ClientConfig
from http_kit.cookies import MemoryCookieManager, reset_default_cookie_manager
from http_kit.core.client import HTTPClient
from http_kit.types import RawResponse, WireRequest


class FakeTransport:
    """Transport returning queued raw responses and recording what was sent."""

    def __init__(self, responses: Optional[List[Union[RawResponse, Exception]]] = None):
        self.responses = list(responses or [])
        self.sent: List[WireRequest] = []
        self.closed = False
        self.fallback: Optional[Callable[[WireRequest], RawResponse]] = None

    def queue(self, *responses: Union[RawResponse, Exception]) -> "FakeTransport":
        self.responses.extend(responses)
        return self

    def send(self, request: WireRequest) -> RawResponse:
        self.sent.append(request)
        if self.responses:
            item = self.responses.pop(0)
        elif self.fallback is not None:
            item = self.fallback(request)
        else:
            item = RawResponse(status=200, url=request.url)
        if isinstance(item, Exception):
            raise item
        return item

    def close(self) -> None:
        self.closed = True

    def header_values(self, index: int, name: str) -> List[str]:
        return [v for k, v in self.sent[index].headers if k.lower() == name.lower()]


def raw(
    status: int = 200,
    url: str = "http://example.com/",
    headers: Optional[list] = None,
    content: bytes = b"",
    charset: Optional[str] = None,
) -> RawResponse:
    """Build a RawResponse for tests."""
    return RawResponse(status=status, url=url, headers=headers or [], content=content, charset=charset)


@pytest.fixture(autouse=True)
def _isolate_default_cookie_manager():
    """Each test gets a fresh process-wide cookie manager."""
    reset_default_cookie_manager()
    yield
    reset_default_cookie_manager()


@pytest.fixture
def cookie_manager():
    """Fresh in-memory cookie manager."""
    return MemoryCookieManager()


@pytest.fixture
def fake_transport():
    """Recording transport with no queued responses."""
    return FakeTransport()


@pytest.fixture
def make_client(cookie_manager, fake_transport):
    """Factory for clients wired to the fake transport and a fresh cookie manager."""

    def _make(**config_kwargs) -> HTTPClient:
        config_kwargs.setdefault("cookie_manager", cookie_manager)
        return HTTPClient(ClientConfig(**config_kwargs), transport=fake_transport)

    return _make


@pytest.fixture
def mock_httpx_client():
    """Factory for httpx.Client instances backed by httpx.MockTransport."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(handler))

    return _make
