"""
Selector resolver — ordered CSS-selector fallback chains over a parsed document.

Target markup drifts between layouts and over time, so each field is described
by a tuple of candidate selectors tried in order. Nothing here mutates the tree.
"""
from typing import Iterator, Optional, Sequence, Union

from bs4 import Tag

from .normalizers import clean_text

Candidates = Union[str, Sequence[str]]

# Elements whose value lives in attributes rather than text
_VOID_TAGS = {"img", "meta", "link", "source", "input"}


def _as_candidates(candidates: Candidates) -> tuple[str, ...]:
    if isinstance(candidates, str):
        return (candidates,)
    return tuple(candidates)


def node_text(node: Optional[Tag]) -> str:
    """Whitespace-normalized text of a node; meta tags yield their content."""
    if node is None:
        return ""
    if node.name == "meta":
        return clean_text(str(node.get("content") or ""))
    return clean_text(node.get_text(" ", strip=True))


def _is_non_empty(node: Tag) -> bool:
    if node.name in _VOID_TAGS:
        return bool(node.attrs)
    return bool(node_text(node))


def resolve(document: Tag, candidates: Candidates) -> Optional[Tag]:
    """Return the first non-empty node matched by any candidate, in order."""
    for selector in _as_candidates(candidates):
        for node in document.css.iselect(selector):
            if _is_non_empty(node):
                return node
    return None


def resolve_text(document: Tag, candidates: Candidates) -> Optional[str]:
    """Text of the first candidate match that has any text."""
    for selector in _as_candidates(candidates):
        for node in document.css.iselect(selector):
            text = node_text(node)
            if text:
                return text
    return None


def resolve_attr(document: Tag, candidates: Candidates, attr: str) -> Optional[str]:
    """First non-empty value of `attr` among candidate matches."""
    for selector in _as_candidates(candidates):
        for node in document.css.iselect(selector):
            value = node.get(attr)
            if isinstance(value, list):
                value = " ".join(value)
            if value and value.strip():
                return value.strip()
    return None


def is_present(document: Tag, candidates: Candidates) -> bool:
    """True if any candidate matches at least one node."""
    return any(
        document.css.select_one(selector) is not None
        for selector in _as_candidates(candidates)
    )


class NodeSequence:
    """
    Lazy, finite, restartable sequence of nodes for repeated structures.

    Yields every match of the first candidate that matches anything. Each
    iteration walks the document again; nothing is cached.
    """

    def __init__(self, document: Tag, candidates: Candidates):
        self._document = document
        self._candidates = _as_candidates(candidates)

    def __iter__(self) -> Iterator[Tag]:
        for selector in self._candidates:
            matched = False
            for node in self._document.css.iselect(selector):
                matched = True
                yield node
            if matched:
                return

    def count(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"NodeSequence({list(self._candidates)!r})"


def resolve_all(document: Tag, candidates: Candidates) -> NodeSequence:
    """All nodes of a repeated structure (cards, rows, thumbnails)."""
    return NodeSequence(document, candidates)
