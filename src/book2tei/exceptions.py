"""Custom exceptions for book2tei."""


class Book2teiError(Exception):
    """Base exception for book2tei operations."""


class FetchError(Book2teiError):
    """Error while loading the source document."""


class SourceNotAvailableError(FetchError):
    """Source document does not exist (HTTP 404 or missing local file)."""


class ParseError(Book2teiError):
    """Error while turning the source into a markup tree."""


class ConversionError(Book2teiError):
    """Error during TEI serialization."""
