"""Text normalization shared by every extraction step."""

from __future__ import annotations

import re
import unicodedata

# Literal entity references that survive parsing (double-escaped sources).
_NAMED_ENTITIES = {
    "&nbsp;": " ",
    "&aacute;": "á",
    "&Aacute;": "Á",
    "&eacute;": "é",
    "&Eacute;": "É",
    "&iacute;": "í",
    "&Iacute;": "Í",
    "&oacute;": "ó",
    "&Oacute;": "Ó",
    "&uacute;": "ú",
    "&Uacute;": "Ú",
    "&lsquo;": "‘",
    "&rsquo;": "’",
    "&ldquo;": "“",
    "&rdquo;": "”",
    "&mdash;": "—",
    "&ndash;": "–",
    "&hellip;": "…",
}
_ENTITY_RE = re.compile("|".join(re.escape(name) for name in _NAMED_ENTITIES))

_CHARACTER_VARIANTS = str.maketrans(
    {
        "\u00a0": " ",  # no-break space
        "\u2007": " ",  # figure space
        "\u2009": " ",  # thin space
        "\u200a": " ",  # hair space
        "\u202f": " ",  # narrow no-break space
        "\u200b": None,  # zero width space
        "\ufeff": None,  # byte order mark
        "\u00ad": None,  # soft hyphen
        "\u2010": "-",
        "\u2011": "-",
        "\u2012": "\u2013",  # figure dash
        "\u2015": "\u2014",  # horizontal bar
        "\u201b": "\u2018",
        "\u201f": "\u201c",
        "\u02bc": "\u2019",  # modifier letter apostrophe
        "\u2032": "\u2019",  # prime used as apostrophe
    }
)
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_WHITESPACE_RE = re.compile(r"\s+")

# A numeric label is a number (with an optional a-c suffix and closing
# punctuation) followed by whitespace or the end of the text. Only one label
# is redundant; a number after it is content.
_LEADING_LABEL_RE = re.compile(r"^\s*\d+[a-c]?[.):]?(?:\s+|$)")
_LEADING_NUMBER_RE = re.compile(r"^\s*(\d+)[a-c]?[.):]?(?:\s+|$)")


def canonicalize_characters(text: str) -> str:
    """Replace literal entities and ambiguous variants with canonical code points."""
    if not text:
        return ""
    text = _ENTITY_RE.sub(lambda match: _NAMED_ENTITIES[match.group(0)], text)
    text = text.translate(_CHARACTER_VARIANTS)
    text = _CONTROL_RE.sub("", text)
    return unicodedata.normalize("NFC", text)


def normalize_fragment(text: str) -> str:
    """Canonicalize and collapse whitespace without trimming the edges."""
    return _WHITESPACE_RE.sub(" ", canonicalize_characters(text))


def normalize_text(text: str | None) -> str:
    """Canonicalize characters, collapse whitespace runs and trim."""
    if not text:
        return ""
    return normalize_fragment(text).strip()


def leading_label_length(text: str) -> int:
    """Length of the leading numeric label of ``text``, 0 when absent."""
    match = _LEADING_LABEL_RE.match(text)
    return match.end() if match else 0


def strip_leading_label(text: str) -> str:
    """Remove a redundant leading numeric label such as ``12.`` or ``5b)``."""
    return text[leading_label_length(text):]


def leading_number(text: str) -> str | None:
    """Return the number a text starts with, if it starts with a numeric label."""
    match = _LEADING_NUMBER_RE.match(text)
    return match.group(1) if match else None
