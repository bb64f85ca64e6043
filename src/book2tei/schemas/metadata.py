"""Bibliographic metadata for the TEI header."""

from __future__ import annotations

from pydantic import BaseModel, Field


class BookMetadata(BaseModel):
    """Descriptive metadata written into the TEI header.

    Defaults describe The Kitáb-i-Aqdas as published by the Bahá'í World
    Centre; override them for other books following the same conventions.

    Attributes:
        title: Full title of the work.
        main_text_head: Heading used for the main text division.
        author: Author of the work.
        responsibility: Kind of responsibility of ``responsible_party``.
        responsible_party: Translator or editor.
        publisher: Publisher of the edition.
        date: Publication date.
        availability: Availability statement.
        language: ISO language code of the text.
        language_name: Human-readable language name.
        keywords: Classification terms.
        source_name: File name or URL of the converted source.
    """

    title: str = "The Kitáb-i-Aqdas: The Most Holy Book"
    main_text_head: str = "The Kitáb-i-Aqdas"
    author: str = "Bahá'u'lláh"
    responsibility: str = "Translated by"
    responsible_party: str = "Universal House of Justice"
    publisher: str = "Bahá'í World Centre"
    date: str = "1992"
    availability: str = "Published by the Bahá'í World Centre"
    language: str = "en"
    language_name: str = "English"
    keywords: list[str] = Field(
        default_factory=lambda: ["Religious text", "Bahá'í Faith", "Sacred scripture"]
    )
    source_name: str | None = None
