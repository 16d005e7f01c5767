"""
Cookie managers for http_kit.
"""
import logging
import threading
from typing import Mapping, Optional

from .base import CookieManager
from .memory import MemoryCookieManager, create_memory_cookie_manager
from .noop import NoCookieManager, no_cookie_manager

logger = logging.getLogger("http_kit.cookies")

_default_manager: Optional[MemoryCookieManager] = None
_default_lock = threading.Lock()


def default_cookie_manager() -> MemoryCookieManager:
    """Return the process-wide memory cookie manager, creating it on first use."""
    global _default_manager
    if _default_manager is None:
        with _default_lock:
            if _default_manager is None:
                _default_manager = MemoryCookieManager()
    return _default_manager


def reset_default_cookie_manager() -> None:
    """Forget the process-wide manager; the next call creates a fresh one."""
    global _default_manager
    with _default_lock:
        _default_manager = None


def apply_response_cookies(
    manager: CookieManager,
    site: str,
    cookies: Mapping[str, str],
) -> None:
    """Persist response cookies: empty values delete, everything else is set."""
    to_remove = [name for name, value in cookies.items() if value == ""]
    to_set = {name: value for name, value in cookies.items() if value != ""}
    logger.debug(f"apply_response_cookies: site={site}, set={list(to_set)}, remove={to_remove}")
    if to_remove:
        manager.remove(site, to_remove)
    if to_set:
        manager.set(site, to_set)


__all__ = [
    "CookieManager",
    "MemoryCookieManager",
    "NoCookieManager",
    "create_memory_cookie_manager",
    "no_cookie_manager",
    "default_cookie_manager",
    "reset_default_cookie_manager",
    "apply_response_cookies",
]
