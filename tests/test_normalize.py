"""Tests for text normalization."""

from __future__ import annotations

import pytest

from book2tei.normalize import (
    canonicalize_characters,
    leading_label_length,
    leading_number,
    normalize_fragment,
    normalize_text,
    strip_leading_label,
)


class TestCanonicalizeCharacters:
    """Tests for canonicalize_characters function."""

    def test_replaces_literal_entities(self) -> None:
        """Decodes entity references left in the text."""
        text = "Bah&aacute;&rsquo;u&rsquo;ll&aacute;h"
        a_acute = "\N{LATIN SMALL LETTER A WITH ACUTE}"
        apostrophe = "\N{RIGHT SINGLE QUOTATION MARK}"
        expected = f"Bah{a_acute}{apostrophe}u{apostrophe}ll{a_acute}h"
        assert canonicalize_characters(text) == expected

    def test_maps_space_variants_to_plain_space(self) -> None:
        """No-break and thin spaces become ordinary spaces."""
        text = "a\N{NO-BREAK SPACE}b\N{THIN SPACE}c"
        assert canonicalize_characters(text) == "a b c"

    def test_drops_invisible_characters(self) -> None:
        """Zero width spaces and soft hyphens are removed."""
        text = "Kit\N{SOFT HYPHEN}\N{ZERO WIDTH SPACE}\N{LATIN SMALL LETTER A WITH ACUTE}b"
        assert canonicalize_characters(text) == "Kit\N{LATIN SMALL LETTER A WITH ACUTE}b"

    def test_maps_horizontal_bar_to_em_dash(self) -> None:
        """Dash variants collapse to the usual dashes."""
        assert canonicalize_characters("a\N{HORIZONTAL BAR}b") == "a\N{EM DASH}b"

    def test_composes_combining_marks(self) -> None:
        """Decomposed accents are composed (NFC)."""
        decomposed = "a\N{COMBINING ACUTE ACCENT}"
        assert canonicalize_characters(decomposed) == "\N{LATIN SMALL LETTER A WITH ACUTE}"

    def test_removes_control_characters(self) -> None:
        """Control characters other than whitespace are dropped."""
        assert canonicalize_characters("a\x00b\x07c") == "abc"

    def test_empty(self) -> None:
        """Empty input stays empty."""
        assert canonicalize_characters("") == ""


class TestNormalizeText:
    """Tests for normalize_text and normalize_fragment."""

    def test_collapses_and_trims_whitespace(self) -> None:
        """Whitespace runs become single spaces and edges are trimmed."""
        assert normalize_text("  a \n\t b  ") == "a b"

    def test_none_is_empty(self) -> None:
        """None normalizes to an empty string."""
        assert normalize_text(None) == ""

    def test_fragment_keeps_edges(self) -> None:
        """normalize_fragment collapses but does not trim."""
        assert normalize_fragment("  a \n b ") == " a b "

    def test_is_idempotent(self) -> None:
        """Normalizing twice changes nothing."""
        once = normalize_text(" Bah&aacute;\N{NO-BREAK SPACE} text ")
        assert normalize_text(once) == once


class TestLeadingLabels:
    """Tests for leading numeric label handling."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("12. Text", "Text"),
            ("12 Text", "Text"),
            ("5b) Sub", "Sub"),
            ("3: Colon", "Colon"),
            ("12. 19 days of fasting", "19 days of fasting"),
            ("3", ""),
        ],
    )
    def test_strips_label(self, text: str, expected: str) -> None:
        """Removes numeric labels with optional suffix and punctuation."""
        assert strip_leading_label(text) == expected

    @pytest.mark.parametrize("text", ["In 1873 the", "12th day", "Text 12."])
    def test_leaves_text_without_label(self, text: str) -> None:
        """Text that does not open with a standalone number is untouched."""
        assert strip_leading_label(text) == text
        assert leading_label_length(text) == 0

    def test_stripping_is_idempotent(self) -> None:
        """Stripping an already stripped text is a no-op."""
        once = strip_leading_label("12. Text")
        assert strip_leading_label(once) == once

    def test_leading_number(self) -> None:
        """Returns the leading number without suffix or punctuation."""
        assert leading_number("7. Foo") == "7"
        assert leading_number("7b) Foo") == "7"
        assert leading_number("Foo 7") is None
