"""
DOM-like HTML facade over BeautifulSoup.
"""
from .elements import HTMLDocument, HTMLElement, HTMLElements, HTMLParentElement
from .exceptions import EmptyHtmlException, HTMLParseException, HtmlParsingException
from .parser import parse_html

__all__ = [
    "HTMLDocument",
    "HTMLElement",
    "HTMLElements",
    "HTMLParentElement",
    "HTMLParseException",
    "EmptyHtmlException",
    "HtmlParsingException",
    "parse_html",
]
