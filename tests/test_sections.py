"""Tests for section name resolution and filtering."""

from __future__ import annotations

import pytest

from book2tei.schemas import Item, RichText, SectionModel, SectionName
from book2tei.sections import filter_sections, resolve_section_name


def _model() -> SectionModel:
    item = Item(ordinal="1", text=RichText.plain("text"))
    return SectionModel.build(
        "explicit-marker",
        {
            SectionName.PREFACE: [item],
            SectionName.MAIN_TEXT: [item],
            SectionName.NOTES: [item],
        },
    )


class TestResolveSectionName:
    """Tests for resolve_section_name function."""

    @pytest.mark.parametrize("value", ["mainText", "main-text", "Main Text", "MAIN_TEXT", " maintext "])
    def test_spellings(self, value: str) -> None:
        assert resolve_section_name(value) is SectionName.MAIN_TEXT

    def test_key_passages(self) -> None:
        assert resolve_section_name("key-passages") is SectionName.KEY_PASSAGES

    def test_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown section"):
            resolve_section_name("appendix")


class TestFilterSections:
    """Tests for filter_sections function."""

    def test_exclude(self) -> None:
        model = filter_sections(_model(), mode="exclude", selected=["notes"])
        assert [name for name, _ in model.populated()] == [
            SectionName.PREFACE,
            SectionName.MAIN_TEXT,
        ]

    def test_include(self) -> None:
        model = filter_sections(_model(), mode="include", selected=["main-text", "glossary"])
        assert [name for name, _ in model.populated()] == [SectionName.MAIN_TEXT]

    def test_no_selection_keeps_model(self) -> None:
        original = _model()
        assert filter_sections(original, mode="include", selected=[]) is original
        assert filter_sections(original, selected=None) is original
        assert filter_sections(original, selected=["  "]) is original

    def test_keeps_strategy(self) -> None:
        model = filter_sections(_model(), mode="exclude", selected=["preface"])
        assert model.strategy == "explicit-marker"

    def test_unknown_name(self) -> None:
        with pytest.raises(ValueError):
            filter_sections(_model(), selected=["appendix"])
