"""Choose a segmentation strategy for a document and run it."""

from __future__ import annotations

import logging
from typing import Union

from book2tei.anchors import AnchorCatalog, build_catalog
from book2tei.explicit import ExplicitMarkerStrategy
from book2tei.html_utils import parse_html
from book2tei.navigation import NavigationRangeStrategy
from book2tei.schemas import SectionModel

try:
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)

Strategy = Union[ExplicitMarkerStrategy, NavigationRangeStrategy]


def select_strategy(catalog: AnchorCatalog) -> Strategy:
    """Explicit markers govern the whole document when a trigger anchor exists."""
    if catalog.has_legacy_trigger:
        return ExplicitMarkerStrategy()
    return NavigationRangeStrategy()


def segment_document(document: str | bytes | Tag) -> SectionModel:
    """Build the section model of an HTML document or an already parsed tree."""
    root = document if isinstance(document, Tag) else parse_html(document)
    catalog = build_catalog(root)
    strategy = select_strategy(catalog)
    logger.info("Using %s segmentation (%d markers catalogued)", strategy.name, len(catalog))
    model = strategy.segment(root, catalog)
    if model.is_empty:
        logger.warning("No sections were extracted")
    return model

