"""
In-memory cookie manager.
"""
import threading
from typing import Dict, Iterable, List, Mapping

from .base import CookieManager


class MemoryCookieManager(CookieManager):
    """
    Cookie manager keeping one dict per site.

    Each operation holds an internal lock. A full send (read, exchange,
    write back) is still not atomic across concurrent callers.
    """

    def __init__(self) -> None:
        self._store: Dict[str, Dict[str, str]] = {}
        self._lock = threading.Lock()

    def set(self, site: str, cookies: Mapping[str, str]) -> None:
        with self._lock:
            bucket = self._store.setdefault(site, {})
            bucket.update(cookies)

    def get(self, site: str) -> Dict[str, str]:
        with self._lock:
            return dict(self._store.get(site, {}))

    def remove(self, site: str, names: Iterable[str]) -> None:
        excluded = set(names)
        with self._lock:
            bucket = self._store.get(site)
            if bucket is None:
                return
            self._store[site] = {
                name: value for name, value in bucket.items() if name not in excluded
            }

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def sites(self) -> List[str]:
        """Sites that currently have a bucket."""
        with self._lock:
            return list(self._store.keys())


def create_memory_cookie_manager() -> MemoryCookieManager:
    """Create a new, empty memory cookie manager."""
    return MemoryCookieManager()
