"""Command-line entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from book2tei.config import BOOK2TEI_LOG_LEVEL
from book2tei.conversion import ConversionOptions, convert_source
from book2tei.exceptions import Book2teiError
from book2tei.schemas import BookMetadata

logger = logging.getLogger("book2tei")

DEFAULT_OUTPUT = "output.tei.xml"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="book2tei",
        description="Convert a marked-up HTML/XHTML book into TEI P5 XML.",
    )
    parser.add_argument("source", help="Local HTML/XHTML file or http(s) URL")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT, help="Output TEI file path")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--include", nargs="+", metavar="SECTION", help="Only keep these sections")
    group.add_argument("--exclude", nargs="+", metavar="SECTION", help="Drop these sections")
    parser.add_argument("--stylesheet", help="XSL stylesheet href to reference from the output")
    parser.add_argument("--title", help="Title written into the TEI header")
    parser.add_argument("--no-cache", action="store_true", help="Always download URL sources")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase logging verbosity"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    metadata = BookMetadata()
    if args.title:
        metadata = metadata.model_copy(update={"title": args.title})
    options = ConversionOptions(
        section_filter_mode="include" if args.include else "exclude",
        sections=args.include or args.exclude or [],
        stylesheet=args.stylesheet,
        metadata=metadata,
        use_cache=not args.no_cache,
    )

    try:
        result = asyncio.run(convert_source(args.source, options=options))
    except (Book2teiError, ValueError) as exc:
        logger.error("Conversion failed: %s", exc)
        return 1

    output = Path(args.output)
    try:
        output.write_text(result.tei, encoding="utf-8")
    except OSError as exc:
        logger.error("Conversion failed: cannot write %s: %s", output, exc)
        return 1
    print(result.summary)
    print(f"Output saved to: {output}")
    return 0


def _configure_logging(verbosity: int) -> None:
    level = BOOK2TEI_LOG_LEVEL
    if verbosity == 1:
        level = "INFO"
    elif verbosity > 1:
        level = "DEBUG"
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


if __name__ == "__main__":
    sys.exit(main())
