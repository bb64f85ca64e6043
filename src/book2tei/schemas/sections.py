"""Section model produced by the segmenters."""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from book2tei.schemas.richtext import RichText


class SectionName(str, Enum):
    """Sections of the book, in output order."""

    PREFACE = "preface"
    INTRODUCTION = "introduction"
    DESCRIPTION = "description"
    MAIN_TEXT = "mainText"
    SUPPLEMENTARY = "supplementary"
    QUESTIONS = "questions"
    SYNOPSIS = "synopsis"
    NOTES = "notes"
    GLOSSARY = "glossary"
    KEY_PASSAGES = "keyPassages"


class Item(BaseModel):
    """A numbered content item within a section."""

    model_config = ConfigDict(frozen=True)

    ordinal: str
    text: RichText = Field(default_factory=RichText)


class SectionModel(BaseModel):
    """Ordered items per section plus the strategy that produced them."""

    model_config = ConfigDict(frozen=True)

    strategy: str | None = None
    sections: dict[SectionName, tuple[Item, ...]] = Field(default_factory=dict)

    @classmethod
    def build(
        cls,
        strategy: str | None,
        sections: dict[SectionName, Iterable[Item]],
    ) -> SectionModel:
        """Create a model holding every section, in enum order."""
        return cls(
            strategy=strategy,
            sections={name: tuple(sections.get(name, ())) for name in SectionName},
        )

    def items(self, name: SectionName) -> tuple[Item, ...]:
        return self.sections.get(name, ())

    def populated(self) -> list[tuple[SectionName, tuple[Item, ...]]]:
        """Non-empty sections in enum order."""
        return [(name, self.items(name)) for name in SectionName if self.items(name)]

    @property
    def is_empty(self) -> bool:
        return not self.populated()
