"""
HTML parser entry point.
"""
from bs4 import BeautifulSoup

from .elements import HTMLDocument
from .exceptions import EmptyHtmlException, HtmlParsingException


def parse_html(html: str) -> HTMLDocument:
    """Parse an HTML string. Blank input raises ``EmptyHtmlException``."""
    if html is None or not html.strip():
        raise EmptyHtmlException()
    try:
        soup = BeautifulSoup(html, "html.parser")
    except Exception as e:
        raise HtmlParsingException(e) from e
    return HTMLDocument(soup)
