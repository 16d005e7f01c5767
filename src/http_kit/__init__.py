"""
Synchronous HTTP client for Python.

Sends requests over httpx, keeps per-site cookies, follows redirects, and
lets request/response listeners observe, cancel or retry exchanges. Bundles
small HTML (BeautifulSoup) and JSON parsing facades.
"""
from .types import (
    Method,
    MessageKind,
    ContentType,
    WireRequest,
    RawResponse,
    Transport,
)
from .errors import (
    HTTPException,
    HTTPRequestCancelledException,
    MalformedHTTPURLException,
    HTTPTimeoutException,
    HTTPSocketException,
    HTTPConnectionException,
    HTTPProtocolException,
    HTTPHostException,
    HTTPIOException,
    HTTPUnknownException,
    TooManyRedirectsException,
    TooManyRetriesException,
    ParseException,
    map_transport_error,
)
from .cookies import (
    CookieManager,
    MemoryCookieManager,
    NoCookieManager,
    default_cookie_manager,
    reset_default_cookie_manager,
    no_cookie_manager,
)
from .body import BodyBuilder, RequestBody, text_body, json_body, form_body
from .request import HTTPRequest
from .response import HTTPResponse, ResponseBody
from .listeners import (
    Listener,
    RequestListener,
    ResponseListener,
    Cancelled,
    InterceptResult,
    intercept,
    qualifying,
)
from .config import ClientConfig, ResolvedConfig, resolve_config
from .adapters.httpx_transport import HttpxTransport
from .core.client import HTTPClient, SendOutcome
from .html import (
    HTMLDocument,
    HTMLElement,
    HTMLElements,
    HTMLParseException,
    EmptyHtmlException,
    HtmlParsingException,
    parse_html,
)
from .json_parser import JSONParseException, parse_json_to_map, parse_json_to_list
from .factory import create_client, create_request_listener, create_response_listener

__all__ = [
    # Types
    "Method",
    "MessageKind",
    "ContentType",
    "WireRequest",
    "RawResponse",
    "Transport",
    # Errors
    "HTTPException",
    "HTTPRequestCancelledException",
    "MalformedHTTPURLException",
    "HTTPTimeoutException",
    "HTTPSocketException",
    "HTTPConnectionException",
    "HTTPProtocolException",
    "HTTPHostException",
    "HTTPIOException",
    "HTTPUnknownException",
    "TooManyRedirectsException",
    "TooManyRetriesException",
    "ParseException",
    "map_transport_error",
    # Cookies
    "CookieManager",
    "MemoryCookieManager",
    "NoCookieManager",
    "default_cookie_manager",
    "reset_default_cookie_manager",
    "no_cookie_manager",
    # Messages
    "BodyBuilder",
    "RequestBody",
    "text_body",
    "json_body",
    "form_body",
    "HTTPRequest",
    "HTTPResponse",
    "ResponseBody",
    # Listeners
    "Listener",
    "RequestListener",
    "ResponseListener",
    "Cancelled",
    "InterceptResult",
    "intercept",
    "qualifying",
    # Config
    "ClientConfig",
    "ResolvedConfig",
    "resolve_config",
    # Client
    "HttpxTransport",
    "HTTPClient",
    "SendOutcome",
    # Parsers
    "HTMLDocument",
    "HTMLElement",
    "HTMLElements",
    "HTMLParseException",
    "EmptyHtmlException",
    "HtmlParsingException",
    "parse_html",
    "JSONParseException",
    "parse_json_to_map",
    "parse_json_to_list",
    # Factory
    "create_client",
    "create_request_listener",
    "create_response_listener",
]

__version__ = "0.1.0"
