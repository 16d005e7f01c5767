"""
DOM-like wrappers over BeautifulSoup nodes.
"""
from abc import ABC, abstractmethod
from functools import cached_property
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, overload

from bs4 import BeautifulSoup, Tag


def _attribute_value(value) -> str:
    # multi-valued attributes (class, rel) come back as lists
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)


class HTMLElements(Sequence["HTMLElement"]):
    """Ordered collection of elements."""

    def __init__(self, tags: Iterable[Tag]):
        self._tags: List[Tag] = list(tags)

    @overload
    def __getitem__(self, index: int) -> "HTMLElement": ...

    @overload
    def __getitem__(self, index: slice) -> "HTMLElements": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return HTMLElements(self._tags[index])
        return HTMLElement(self._tags[index])

    def __len__(self) -> int:
        return len(self._tags)

    def __iter__(self) -> Iterator["HTMLElement"]:
        return (HTMLElement(tag) for tag in self._tags)

    def __repr__(self) -> str:
        return f"HTMLElements({[tag.name for tag in self._tags]!r})"

    def select(self, selector: str) -> "HTMLElements":
        """
        Select elements matching a CSS selector, searching each element and
        its descendants. Results keep document order without duplicates.
        """
        found: List[Tag] = []
        seen = set()
        for tag in self._tags:
            candidates = [tag] if tag.css.match(selector) else []
            candidates.extend(tag.select(selector))
            for candidate in candidates:
                if id(candidate) not in seen:
                    seen.add(id(candidate))
                    found.append(candidate)
        return HTMLElements(found)

    def first(self) -> Optional["HTMLElement"]:
        return HTMLElement(self._tags[0]) if self._tags else None


class HTMLParentElement(ABC):
    """Traversal helpers shared by documents and elements."""

    @property
    @abstractmethod
    def children(self) -> HTMLElements:
        """Direct child elements."""

    def find_first(self, selector: str) -> Optional["HTMLElement"]:
        return self.children.select(selector).first()

    def child_at(self, index: int) -> Optional["HTMLElement"]:
        children = self.children
        if 0 <= index < len(children):
            return children[index]
        return None

    def find_element_by_id(self, element_id: str) -> Optional["HTMLElement"]:
        """First element, in document order, whose id equals ``element_id``."""
        for child in self.children:
            if child.get_attribute("id") == element_id:
                return child
            tag = child._tag.find(attrs={"id": element_id})
            if tag is not None:
                return HTMLElement(tag)
        return None

    def find_elements_by_tag(self, name: str) -> List["HTMLElement"]:
        """Direct children with the given tag name (case-insensitive)."""
        return [child for child in self.children if child.tag.lower() == name.lower()]

    def find_elements_with_attribute(
        self, name: str, value: Optional[str] = None
    ) -> List["HTMLElement"]:
        """Direct children carrying the attribute, optionally with a given value."""
        if value is None:
            return [child for child in self.children if name in child.attributes]
        return [child for child in self.children if child.attributes.get(name) == value]

    def select(self, selector: str) -> HTMLElements:
        return self.children.select(selector)


class HTMLElement(HTMLParentElement):
    """A single HTML element."""

    def __init__(self, tag: Tag):
        self._tag = tag

    @property
    def tag(self) -> str:
        return self._tag.name

    @cached_property
    def text(self) -> str:
        """Text of this element and its descendants, whitespace-normalized."""
        return " ".join(self._tag.get_text(" ").split())

    @cached_property
    def html(self) -> str:
        """Inner HTML."""
        return self._tag.decode_contents()

    @cached_property
    def attributes(self) -> Dict[str, str]:
        return {key: _attribute_value(value) for key, value in self._tag.attrs.items()}

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    @cached_property
    def parent(self) -> Optional["HTMLElement"]:
        parent = self._tag.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return HTMLElement(parent)

    @cached_property
    def siblings(self) -> HTMLElements:
        parent = self._tag.parent
        if parent is None:
            return HTMLElements([])
        return HTMLElements(
            tag for tag in parent.find_all(recursive=False) if tag is not self._tag
        )

    @cached_property
    def previous_sibling(self) -> Optional["HTMLElement"]:
        tag = self._tag.find_previous_sibling()
        return HTMLElement(tag) if tag is not None else None

    @cached_property
    def next_sibling(self) -> Optional["HTMLElement"]:
        tag = self._tag.find_next_sibling()
        return HTMLElement(tag) if tag is not None else None

    @property
    def children(self) -> HTMLElements:
        return HTMLElements(self._tag.find_all(recursive=False))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, HTMLElement) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)

    def __repr__(self) -> str:
        return f"HTMLElement(<{self.tag}>)"


class HTMLDocument(HTMLParentElement):
    """A parsed HTML document."""

    def __init__(self, soup: BeautifulSoup):
        self._soup = soup

    @property
    def title(self) -> Optional[str]:
        if self._soup.title is None:
            return None
        return self._soup.title.get_text().strip()

    @property
    def children(self) -> HTMLElements:
        return HTMLElements(self._soup.find_all(recursive=False))
