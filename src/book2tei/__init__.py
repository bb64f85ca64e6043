"""book2tei: convert marked-up books into TEI section models."""

from book2tei.anchors import AnchorCatalog, build_catalog
from book2tei.conversion import ConversionOptions, convert_html, convert_source
from book2tei.exceptions import (
    Book2teiError,
    ConversionError,
    FetchError,
    ParseError,
    SourceNotAvailableError,
)
from book2tei.schemas import (
    BookMetadata,
    ConversionResult,
    Item,
    RichText,
    SectionModel,
    SectionName,
    Span,
)
from book2tei.segmenter import segment_document, select_strategy
from book2tei.tei import render_tei

__all__ = [
    "AnchorCatalog",
    "Book2teiError",
    "BookMetadata",
    "ConversionError",
    "ConversionOptions",
    "ConversionResult",
    "FetchError",
    "Item",
    "ParseError",
    "RichText",
    "SectionModel",
    "SectionName",
    "SourceNotAvailableError",
    "Span",
    "build_catalog",
    "convert_html",
    "convert_source",
    "render_tei",
    "segment_document",
    "select_strategy",
]
