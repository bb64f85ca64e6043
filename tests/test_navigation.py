"""Tests for navigation-range segmentation."""

from __future__ import annotations

import logging

import pytest
from bs4 import BeautifulSoup

from book2tei.anchors import build_catalog
from book2tei.navigation import (
    NavigationRangeStrategy,
    collect_section_nodes,
    contested_containers,
    extract_notes,
    extract_paragraphs,
    find_navigation_block,
    map_label,
    read_navigation_entries,
)
from book2tei.schemas import SectionModel, SectionName


def _segment(html: str) -> SectionModel:
    soup = BeautifulSoup(html, "lxml")
    return NavigationRangeStrategy().segment(soup, build_catalog(soup))


def _texts(model: SectionModel, name: SectionName) -> list[tuple[str, str]]:
    return [(item.ordinal, item.text.text) for item in model.items(name)]


class TestMapLabel:
    """Tests for map_label function."""

    @pytest.mark.parametrize(
        ("label", "section"),
        [
            ("Preface", SectionName.PREFACE),
            ("Introduction to the Book", SectionName.INTRODUCTION),
            ("A Description of the Kitáb-i-Aqdas", SectionName.DESCRIPTION),
            ("The Kitáb-i-Aqdas", SectionName.MAIN_TEXT),
            ("  the  KITAB-I-AQDAS ", SectionName.MAIN_TEXT),
            ("Some Supplementary Texts", SectionName.SUPPLEMENTARY),
            ("Questions and Answers", SectionName.QUESTIONS),
            ("A Synopsis and Codification", SectionName.SYNOPSIS),
            ("Notes", SectionName.NOTES),
            ("Glossary", SectionName.GLOSSARY),
            ("Key to Passages Translated by Shoghi Effendi", SectionName.KEY_PASSAGES),
        ],
    )
    def test_recognized(self, label: str, section: SectionName) -> None:
        assert map_label(label) is section

    @pytest.mark.parametrize("label", ["Index", "Notes and references", "The Kitáb-i-Aqdas Part 2", ""])
    def test_unrecognized(self, label: str) -> None:
        assert map_label(label) is None


class TestNavigationBlock:
    """Tests for navigation block discovery."""

    def test_prefers_marked_nav(self) -> None:
        soup = BeautifulSoup(
            '<nav><a href="#x">Preface</a></nav><nav class="toc gc"><a href="#y">Notes</a></nav>',
            "lxml",
        )
        assert find_navigation_block(soup) is soup.find_all("nav")[1]

    def test_falls_back_to_recognized_nav(self) -> None:
        soup = BeautifulSoup(
            '<nav><a href="#top">Home</a></nav><nav><a href="#n">Notes</a></nav>', "lxml"
        )
        assert find_navigation_block(soup) is soup.find_all("nav")[1]

    def test_none_without_nav(self) -> None:
        assert find_navigation_block(BeautifulSoup("<p>text</p>", "lxml")) is None

    def test_reads_only_fragment_links(self) -> None:
        nav = BeautifulSoup(
            '<nav><a href="#a">Preface</a><a href="other.html">Glossary</a>'
            '<a href="#">Empty</a><a href="#b">Index</a></nav>',
            "lxml",
        ).nav
        entries = read_navigation_entries(nav)
        assert [(entry.target, entry.section) for entry in entries] == [
            ("a", SectionName.PREFACE),
            ("b", None),
        ]


class TestNavigationRangeStrategy:
    """Tests for NavigationRangeStrategy.segment."""

    def test_general_sections(self, navigation_html: str) -> None:
        """Paragraphs are numbered sequentially; short blocks are dropped."""
        model = _segment(navigation_html)

        assert model.strategy == "navigation-range"
        assert _texts(model, SectionName.PREFACE) == [
            ("1", "The preface text."),
            ("2", "More preface text."),
        ]

    def test_main_text_skips_invocation_and_labels(self, navigation_html: str) -> None:
        model = _segment(navigation_html)
        assert _texts(model, SectionName.MAIN_TEXT) == [
            ("1", "Praise be to God."),
            ("2", "Say: O people."),
        ]

    def test_questions(self, navigation_html: str) -> None:
        model = _segment(navigation_html)
        assert _texts(model, SectionName.QUESTIONS) == [
            ("1", "What is fasting? Abstention from food."),
            ("7", "Second question? Second answer."),
        ]

    def test_notes(self, navigation_html: str) -> None:
        """One item per note container, numbered from its label."""
        model = _segment(navigation_html)
        assert _texts(model, SectionName.NOTES) == [
            ("1", "1. Most Great Name The Greatest Name. Second para."),
            ("2", "2. Ancient Beauty A title."),
        ]

    def test_unrecognized_labels_are_ignored(self, navigation_html: str) -> None:
        model = _segment(navigation_html)
        assert [name for name, _ in model.populated()] == [
            SectionName.PREFACE,
            SectionName.MAIN_TEXT,
            SectionName.QUESTIONS,
            SectionName.NOTES,
        ]

    def test_without_navigation(self, caplog: pytest.LogCaptureFixture) -> None:
        """No navigation block yields an empty model, not an error."""
        with caplog.at_level(logging.WARNING, logger="book2tei.navigation"):
            model = _segment("<html><body><p>Just text</p></body></html>")

        assert model.is_empty
        assert "No navigation block" in caplog.text

    def test_repeated_label_continues_numbering(self) -> None:
        model = _segment(
            '<nav class="gc"><a href="#a">Preface</a><a href="#b">Preface (continued)</a></nav>'
            '<div id="a"><p>First part.</p></div>'
            '<div id="b"><p>Second part.</p></div>'
        )
        assert _texts(model, SectionName.PREFACE) == [("1", "First part."), ("2", "Second part.")]

    def test_shared_wrapper_is_not_a_range(self) -> None:
        """Sections sharing one wrapper element do not swallow each other."""
        model = _segment(
            '<nav class="gc"><a href="#s1">Preface</a><a href="#s2">Glossary</a></nav>'
            '<div id="wrapper">'
            '<h2 id="s1">Preface</h2><p>Preface body.</p>'
            '<h2 id="s2">Glossary</h2><p>Glossary body.</p>'
            "</div>"
        )
        assert _texts(model, SectionName.PREFACE) == [("1", "Preface body.")]
        assert _texts(model, SectionName.GLOSSARY) == [("1", "Glossary body.")]

    def test_missing_target(self) -> None:
        model = _segment(
            '<nav class="gc"><a href="#gone">Preface</a><a href="#g">Glossary</a></nav>'
            '<div id="g"><p>Glossary body.</p></div>'
        )
        assert model.items(SectionName.PREFACE) == ()
        assert _texts(model, SectionName.GLOSSARY) == [("1", "Glossary body.")]


class TestRangeHelpers:
    """Tests for range collection and per-mode extraction."""

    def test_collect_section_nodes(self) -> None:
        soup = BeautifulSoup(
            '<div id="a"><p>A</p></div><div><p>A2</p></div><div><h2 id="b">B</h2></div>',
            "lxml",
        )
        nodes = collect_section_nodes(soup, "a", "b")
        assert [node.get_text() for node in nodes] == ["A", "A2"]

    def test_contested_containers(self) -> None:
        soup = BeautifulSoup('<div id="w"><p id="a">A</p><p id="b">B</p></div>', "lxml")
        contested = contested_containers(soup, ["a", "b"])
        assert id(soup.find("div")) in contested
        assert id(soup.find(id="a")) not in contested

    def test_note_without_number_follows_previous(self) -> None:
        soup = BeautifulSoup(
            '<div class="dd"><p><span class="jb">*</span> Unnumbered.</p></div>'
            '<div class="dd"><p>No label.</p></div>',
            "lxml",
        )
        items = extract_notes([soup.body], previous_ordinal=4)
        assert [(item.ordinal, item.text.text) for item in items] == [("5", "* Unnumbered.")]

    def test_invocation_only_skipped_first(self) -> None:
        soup = BeautifulSoup(
            "<p>In the Name of God</p><p>1 Text.</p><p>In the name of truth, speak.</p>", "lxml"
        )
        items = extract_paragraphs([soup.body], SectionName.MAIN_TEXT)
        assert [item.text.text for item in items] == ["Text.", "In the name of truth, speak."]

    def test_main_text_keeps_number_after_label(self) -> None:
        soup = BeautifulSoup("<p>1 19 days are set aside.</p>", "lxml")
        items = extract_paragraphs([soup.body], SectionName.MAIN_TEXT)
        assert [item.text.text for item in items] == ["19 days are set aside."]

    def test_paragraph_numbering_start(self) -> None:
        soup = BeautifulSoup("<p>Entry one.</p>", "lxml")
        items = extract_paragraphs([soup.body], SectionName.GLOSSARY, start=4)
        assert [item.ordinal for item in items] == ["4"]
