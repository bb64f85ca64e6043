"""Conversion pipeline for HTML/XHTML books -> TEI."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from book2tei.fetch import load_source
from book2tei.report import format_summary
from book2tei.schemas import BookMetadata, ConversionResult
from book2tei.sections import filter_sections
from book2tei.segmenter import segment_document
from book2tei.tei import render_tei

logger = logging.getLogger(__name__)


@dataclass
class ConversionOptions:
    """Options for book conversion.

    Attributes:
        section_filter_mode: Mode for section filtering ("include" or "exclude").
        sections: List of section names to include or exclude.
        stylesheet: Optional XSL stylesheet href referenced from the output.
        metadata: Bibliographic metadata for the TEI header.
        use_cache: If True, reuse a fresh cached download of URL sources.
    """

    section_filter_mode: Literal["include", "exclude"] = "exclude"
    sections: list[str] = field(default_factory=list)
    stylesheet: str | None = None
    metadata: BookMetadata = field(default_factory=BookMetadata)
    use_cache: bool = True


def convert_html(
    html: str | bytes,
    *,
    options: ConversionOptions | None = None,
    source_name: str | None = None,
    converted_at: datetime | None = None,
) -> ConversionResult:
    """Segment a document and serialize it to TEI.

    Raises:
        ParseError: If the document is empty.
        ValueError: If a filtered section name is unknown.
        ConversionError: If the TEI document cannot be serialized.
    """
    opts = options or ConversionOptions()
    metadata = opts.metadata
    if source_name and not metadata.source_name:
        metadata = metadata.model_copy(update={"source_name": source_name})

    model = segment_document(html)
    model = filter_sections(model, mode=opts.section_filter_mode, selected=opts.sections)

    tei = render_tei(
        model,
        metadata=metadata,
        stylesheet=opts.stylesheet,
        converted_at=converted_at,
    )
    summary = format_summary(
        model,
        title=metadata.title,
        source=metadata.source_name,
        output_size=len(tei.encode("utf-8")),
    )
    return ConversionResult(summary=summary, model=model, tei=tei)


async def convert_source(
    source: str,
    *,
    options: ConversionOptions | None = None,
) -> ConversionResult:
    """Load ``source`` (a path or URL) and convert it.

    Raises:
        SourceNotAvailableError: If the source does not exist.
        FetchError: If the source cannot be downloaded.
        ParseError: If the document is empty.
        ConversionError: If the TEI document cannot be serialized.
    """
    opts = options or ConversionOptions()
    html = await load_source(source, use_cache=opts.use_cache)
    logger.info("Loaded %d bytes from %s", len(html), source)
    return convert_html(html, options=opts, source_name=source)
