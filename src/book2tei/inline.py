"""Extract rich text with inline formatting spans from a markup subtree."""

from __future__ import annotations

import re

from book2tei.html_utils import attr, is_block, is_text
from book2tei.normalize import normalize_fragment
from book2tei.schemas import RichText, RichTextBuilder

try:
    from bs4.element import PageElement, Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc


_SPAN_KINDS = {
    "i": "italic",
    "em": "italic",
    "b": "bold",
    "strong": "bold",
    "u": "underline",
    "sup": "superscript",
    "sub": "subscript",
}
_IGNORED_TAGS = frozenset({"script", "style", "noscript", "template"})
_EXTERNAL_HREF_RE = re.compile(r"^[a-z][a-z0-9+.\-]*://", re.IGNORECASE)


def extract_rich_text(node: PageElement) -> RichText:
    """Rich text of ``node`` and everything below it."""
    builder = RichTextBuilder()
    append_inline(builder, node)
    return builder.build()


def append_inline(builder: RichTextBuilder, node: PageElement) -> None:
    """Append the formatted content of ``node`` to ``builder``."""
    if is_text(node):
        builder.text(normalize_fragment(str(node)))
        return
    if not isinstance(node, Tag) or node.name in _IGNORED_TAGS:
        return

    if node.name == "br":
        builder.newline()
        return

    if node.name == "a":
        href = attr(node, "href").strip()
        if is_external_href(href):
            builder.open("reference", href)
            _append_children(builder, node)
            builder.close()
        else:
            _append_children(builder, node)
        return

    kind = _SPAN_KINDS.get(node.name)
    if kind:
        builder.open(kind)
        _append_children(builder, node)
        builder.close()
        return

    if is_block(node):
        builder.space()
        _append_children(builder, node)
        builder.space()
        return

    _append_children(builder, node)


def is_external_href(href: str) -> bool:
    """Check if a link points outside the document (absolute ``scheme://`` URL)."""
    return bool(_EXTERNAL_HREF_RE.match(href))


def _append_children(builder: RichTextBuilder, tag: Tag) -> None:
    for child in tag.children:
        append_inline(builder, child)
