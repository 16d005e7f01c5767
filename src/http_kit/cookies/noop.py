"""
Cookie manager that stores nothing.
"""
from typing import Dict, Iterable, Mapping

from .base import CookieManager


class NoCookieManager(CookieManager):
    """Ignores writes and always reports an empty bucket."""

    def set(self, site: str, cookies: Mapping[str, str]) -> None:
        pass

    def get(self, site: str) -> Dict[str, str]:
        return {}

    def remove(self, site: str, names: Iterable[str]) -> None:
        pass


no_cookie_manager = NoCookieManager()
