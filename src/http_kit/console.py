"""
Rich debug panels for wire requests and raw responses.
"""
from typing import Iterable, Optional, Tuple

from rich.console import Console as RichConsole
from rich.panel import Panel as RichPanel
from rich.table import Table as RichTable

from .types import RawResponse, WireRequest

SENSITIVE_HEADERS = ("authorization", "cookie", "set-cookie", "x-api-key", "proxy-authorization")


def mask_sensitive(value: Optional[str], show_chars: int = 4) -> str:
    """
    Mask sensitive values for logging.

    Values of ``show_chars`` characters or fewer are fully masked.
    """
    if not value:
        return "<none>"
    if len(value) <= show_chars:
        return "*" * len(value)
    return value[:show_chars] + "***"


def mask_headers(headers: Iterable[Tuple[str, str]]) -> list:
    return [
        (name, mask_sensitive(value) if name.lower() in SENSITIVE_HEADERS else value)
        for name, value in headers
    ]


def _header_table(headers: Iterable[Tuple[str, str]]) -> RichTable:
    table = RichTable(show_header=True, header_style="bold")
    table.add_column("Header")
    table.add_column("Value")
    for name, value in mask_headers(headers):
        table.add_row(name, value)
    return table


def print_panel(content, title: Optional[str] = None) -> None:
    """Print content in a rich panel."""
    console = RichConsole()
    console.print(RichPanel(content, title=title))


def print_wire_request(request: WireRequest) -> None:
    print_panel(
        f"[bold cyan]{request.method}[/bold cyan] {request.url}",
        title="[bold blue]Request[/bold blue]",
    )
    RichConsole().print(_header_table(request.headers))


def print_raw_response(response: RawResponse) -> None:
    status_color = "green" if 200 <= response.status < 300 else "yellow" if response.status < 400 else "red"
    print_panel(
        f"[bold {status_color}]{response.status}[/bold {status_color}] "
        f"({len(response.content)} bytes)",
        title=f"[bold blue]Response[/bold blue] ({response.url})",
    )
    RichConsole().print(_header_table(response.headers))
