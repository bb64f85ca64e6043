"""Conversion output model."""

from __future__ import annotations

from pydantic import BaseModel

from book2tei.schemas.sections import SectionModel


class ConversionResult(BaseModel):
    """Final conversion output."""

    summary: str
    model: SectionModel
    tei: str
