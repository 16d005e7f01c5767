"""
Cookie manager interface.
"""
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Mapping


class CookieManager(ABC):
    """Per-site cookie storage. A site is the host component of a URL."""

    @abstractmethod
    def set(self, site: str, cookies: Mapping[str, str]) -> None:
        """Merge cookies into the bucket for ``site``."""

    @abstractmethod
    def get(self, site: str) -> Dict[str, str]:
        """Return the cookies stored for ``site`` (empty if none)."""

    @abstractmethod
    def remove(self, site: str, names: Iterable[str]) -> None:
        """Remove the named cookies from the bucket for ``site``."""

    def clear(self) -> None:
        """Drop every stored cookie."""

    def __getitem__(self, site: str) -> Dict[str, str]:
        return self.get(site)

    def __setitem__(self, site: str, cookies: Mapping[str, str]) -> None:
        self.set(site, cookies)
