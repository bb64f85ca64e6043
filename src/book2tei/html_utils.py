"""Shared markup-tree utilities: parsing, attribute access and traversal."""

from __future__ import annotations

import warnings
from typing import Iterator

from book2tei.exceptions import ParseError

try:
    from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning
    from bs4.element import NavigableString, PageElement, PreformattedString, Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise ParseError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc


BLOCK_TAGS = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "dd",
        "div",
        "dl",
        "dt",
        "figure",
        "footer",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "li",
        "ol",
        "p",
        "section",
        "table",
        "td",
        "th",
        "tr",
        "ul",
    }
)


def parse_html(html: str | bytes) -> BeautifulSoup:
    """Parse an HTML or XHTML document into a BeautifulSoup tree.

    Raises:
        ParseError: If the input is empty.
    """
    if not html or not html.strip():
        raise ParseError("Source document is empty.")
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", XMLParsedAsHTMLWarning)
        return BeautifulSoup(html, "lxml")


def find_document_root(soup: BeautifulSoup) -> Tag:
    """Return the ``<body>`` element, or the soup itself when there is none."""
    if soup.body:
        return soup.body
    return soup


def attr(tag: Tag, name: str) -> str:
    """Attribute value as a string; missing attributes read as ``""``."""
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(part) for part in value)
    return str(value)


def has_class(tag: Tag, class_name: str) -> bool:
    return class_name in attr(tag, "class").split()


def is_text(node: PageElement) -> bool:
    """True for character data, False for comments, doctypes and the like."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def is_block(node: PageElement) -> bool:
    return isinstance(node, Tag) and node.name in BLOCK_TAGS


def has_block_descendant(tag: Tag) -> bool:
    return tag.find(lambda descendant: descendant.name in BLOCK_TAGS) is not None


def next_node(
    node: PageElement,
    *,
    skip_children: bool = False,
    within: Tag | None = None,
) -> PageElement | None:
    """Next node in document order.

    Descends into ``node``'s children unless ``skip_children`` is set, then
    falls back to the next sibling of the nearest ancestor that has one.
    With ``within``, the walk never leaves that subtree.
    """
    if not skip_children and isinstance(node, Tag) and node.contents:
        return node.contents[0]
    while node is not None and node is not within:
        if node.next_sibling is not None:
            return node.next_sibling
        node = node.parent
    return None


def iter_document_order(root: Tag) -> Iterator[PageElement]:
    """Yield ``root`` and all its descendants in document order."""
    node: PageElement | None = root
    while node is not None:
        yield node
        node = next_node(node, within=root)


def ancestor_ids(node: PageElement) -> frozenset[int]:
    """Identities of ``node`` and all its ancestors, for containment checks."""
    ids = {id(node)}
    ids.update(id(parent) for parent in node.parents)
    return frozenset(ids)
