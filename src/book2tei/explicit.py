"""Strategy A: slice the document between consecutive explicit markers."""

from __future__ import annotations

import logging
from typing import Iterator

from book2tei.anchors import INTRODUCTION, MARKER_FAMILIES, AnchorCatalog, MarkerFamily
from book2tei.html_utils import is_block, is_text, next_node
from book2tei.inline import append_inline
from book2tei.normalize import leading_label_length, normalize_fragment
from book2tei.schemas import Item, RichText, RichTextBuilder, SectionModel, SectionName

try:
    from bs4.element import PageElement, Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)


class ExplicitMarkerStrategy:
    """Segment documents carrying legacy sequential markers (``par1``, ``intro5b``...)."""

    name = "explicit-marker"

    def segment(self, root: Tag, catalog: AnchorCatalog) -> SectionModel:
        sections: dict[SectionName, list[Item]] = {}
        for family in MARKER_FAMILIES:
            items = list(segment_family(family, catalog))
            if items:
                logger.info("%s: %d items from explicit markers", family.section.value, len(items))
            sections[family.section] = items
        return SectionModel.build(self.name, sections)


def segment_family(family: MarkerFamily, catalog: AnchorCatalog) -> Iterator[Item]:
    """Yield the items of one family, stopping at the first missing ordinal."""
    for ordinal in range(1, family.ceiling + 1):
        present = [
            suffix for suffix in family.suffixes if family.name(ordinal, suffix) in catalog
        ]
        if not present:
            logger.debug("No %s marker for ordinal %d, stopping", family.prefix, ordinal)
            return
        for suffix in present:
            start = catalog[family.name(ordinal, suffix)]
            end_name = _boundary_name(family, ordinal, suffix, catalog)
            text = collect_between(start, catalog.get(end_name), catalog)
            if family.strip_label:
                text = text.drop_leading(leading_label_length(text.text))
            if text.is_empty:
                continue
            yield Item(ordinal=f"{ordinal}{suffix}", text=text)


def _boundary_name(
    family: MarkerFamily, ordinal: int, suffix: str, catalog: AnchorCatalog
) -> str:
    """Name of the marker that ends the item ``ordinal``+``suffix``."""
    if family is INTRODUCTION and suffix in ("", "b"):
        following = "b" if suffix == "" else "c"
        candidate = family.name(ordinal, following)
        if candidate in catalog:
            return candidate
    return family.name(ordinal + 1)


def collect_between(
    start: Tag, end: Tag | None, catalog: AnchorCatalog
) -> RichText:
    """Formatted text from ``start`` up to ``end`` or the next marker.

    Elements holding a marker are descended into; all other elements are
    taken whole so their inline formatting survives.
    """
    builder = RichTextBuilder()
    node: PageElement | None = next_node(start)
    while node is not None and node is not end:
        if isinstance(node, Tag):
            if catalog.is_marker(node):
                break
            if catalog.contains_marker(node):
                if is_block(node):
                    builder.space()
                node = next_node(node)
                continue
            append_inline(builder, node)
            node = next_node(node, skip_children=True)
            continue
        if is_text(node):
            builder.text(normalize_fragment(str(node)))
        node = next_node(node)
    return builder.build()
