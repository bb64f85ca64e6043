"""Shared schemas for book2tei."""

from book2tei.schemas.conversion import ConversionResult
from book2tei.schemas.metadata import BookMetadata
from book2tei.schemas.richtext import Inline, RichText, RichTextBuilder, Span, SpanKind
from book2tei.schemas.sections import Item, SectionModel, SectionName

__all__ = [
    "BookMetadata",
    "ConversionResult",
    "Inline",
    "Item",
    "RichText",
    "RichTextBuilder",
    "SectionModel",
    "SectionName",
    "Span",
    "SpanKind",
]
