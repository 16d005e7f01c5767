"""
Factory functions for creating clients and listeners.
"""
from typing import Any, Callable, List, Optional

import httpx

from .config import DEFAULT_USER_AGENT, ClientConfig
from .cookies import CookieManager
from .core.client import HTTPClient
from .listeners import Listener, RequestListener, ResponseListener
from .request import HTTPRequest
from .response import HTTPResponse
from .types import Transport


def create_client(
    user_agent: str = DEFAULT_USER_AGENT,
    cookie_manager: Optional[CookieManager] = None,
    listeners: Optional[List[Listener]] = None,
    max_redirects: Optional[int] = None,
    max_retries: Optional[int] = None,
    debug: bool = False,
    transport: Optional[Transport] = None,
    httpx_client: Optional[httpx.Client] = None,
) -> HTTPClient:
    """
    Create an HTTP client.

    Example:
        client = create_client(
            user_agent="my-crawler/1.0",
            cookie_manager=no_cookie_manager,
        )
        response = client.get("https://example.com")
    """
    config = ClientConfig(
        user_agent=user_agent,
        cookie_manager=cookie_manager,
        listeners=listeners if listeners is not None else [],
        max_redirects=max_redirects,
        max_retries=max_retries,
        debug=debug,
    )
    return HTTPClient(config, transport=transport, httpx_client=httpx_client)


def create_request_listener(
    condition: Callable[[HTTPRequest], bool],
    action: Optional[Callable[[HTTPRequest], Any]] = None,
    **kwargs: Any,
) -> RequestListener:
    """Create a request listener; extra keyword arguments set cancel, tag, id, ..."""
    if action is not None:
        kwargs["action"] = action
    return RequestListener(condition=condition, **kwargs)


def create_response_listener(
    condition: Callable[[HTTPResponse], bool],
    action: Optional[Callable[[HTTPResponse], Any]] = None,
    **kwargs: Any,
) -> ResponseListener:
    """Create a response listener; extra keyword arguments set cancel, retry_after_action, ..."""
    if action is not None:
        kwargs["action"] = action
    return ResponseListener(condition=condition, **kwargs)
