"""
Span mapping for Wordtap.

Flattens a tree of text fragments into one logical string plus an ordered
boundary index, so click positions inside a single fragment can be converted
to offsets in the full text and back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from bs4 import BeautifulSoup, NavigableString
from bs4.element import PreformattedString


@dataclass(eq=False)
class TextLeaf:
    """A run of text. Leaves are compared by identity, never by content."""

    text: str


@dataclass(eq=False)
class Element:
    """A non-text node; only its children contribute text."""

    children: List[Any] = field(default_factory=list)


@dataclass(frozen=True, eq=False)
class Fragment:
    node: Any
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass
class FlatText:
    text: str
    fragments: List[Fragment]

    def __post_init__(self):
        self._by_node: Dict[int, Fragment] = {id(f.node): f for f in self.fragments}

    def fragment_for(self, node: Any) -> Optional[Fragment]:
        return self._by_node.get(id(node))

    def fragment_at(self, index: int) -> Optional[Fragment]:
        if 0 <= index < len(self.fragments):
            return self.fragments[index]
        return None


def _leaf_text(node: Any) -> Optional[str]:
    if isinstance(node, TextLeaf):
        return node.text
    # Comments, doctypes and CDATA are NavigableStrings but not document text.
    if isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
        return str(node)
    return None


def _children(node: Any) -> Iterable[Any]:
    if isinstance(node, Element):
        return node.children
    return getattr(node, "contents", ())


def flatten(root: Any) -> FlatText:
    """Concatenate the text leaves under `root` in document order."""
    fragments: List[Fragment] = []
    parts: List[str] = []
    offset = 0

    def walk(node: Any):
        nonlocal offset
        text = _leaf_text(node)
        if text is not None:
            fragments.append(Fragment(node=node, start=offset, end=offset + len(text)))
            parts.append(text)
            offset += len(text)
        else:
            for child in _children(node):
                walk(child)

    if root is not None:
        walk(root)

    return FlatText(text="".join(parts), fragments=fragments)


def parse_html(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser")


def flatten_html(markup: str) -> FlatText:
    return flatten(parse_html(markup))


def flatten_fragments(texts: Iterable[str]) -> FlatText:
    """Build a flat tree from pre-split fragment strings."""
    return flatten(Element(children=[TextLeaf(text) for text in texts]))


def logical_offset_of(fragment: Fragment, local_offset: int) -> int:
    return fragment.start + local_offset
