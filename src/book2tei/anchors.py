"""Marker grammar and the ordered anchor catalog."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator, Mapping

from book2tei.html_utils import ancestor_ids, attr, iter_document_order
from book2tei.schemas import SectionName

try:
    from bs4.element import PageElement, Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkerFamily:
    """Section-specific marker grammar.

    Attributes:
        section: Section populated from this family's markers.
        prefix: Canonical name prefix (``mainText`` in ``mainText-47``).
        aliases: Legacy prefixes accepted without a hyphen (``par47``).
        ceiling: Highest ordinal probed by the explicit-marker segmenter.
        suffixes: Letter suffixes probed per ordinal, ``""`` first.
        strip_label: Whether item text repeats the ordinal as a leading label.
    """

    section: SectionName
    prefix: str
    aliases: tuple[str, ...]
    ceiling: int
    suffixes: tuple[str, ...] = ("",)
    strip_label: bool = False

    def name(self, ordinal: int | str, suffix: str = "") -> str:
        return f"{self.prefix}-{ordinal}{suffix}"


PREFACE = MarkerFamily(SectionName.PREFACE, "preface", ("pref",), 50)
INTRODUCTION = MarkerFamily(
    SectionName.INTRODUCTION, "introduction", ("intro",), 300, suffixes=("", "b", "c")
)
DESCRIPTION = MarkerFamily(SectionName.DESCRIPTION, "description", ("description",), 100)
MAIN_TEXT = MarkerFamily(SectionName.MAIN_TEXT, "mainText", ("par",), 1000, strip_label=True)
QUESTIONS = MarkerFamily(SectionName.QUESTIONS, "question", ("q",), 500, strip_label=True)
NOTES = MarkerFamily(SectionName.NOTES, "note", ("note",), 1000)

MARKER_FAMILIES: tuple[MarkerFamily, ...] = (
    PREFACE,
    INTRODUCTION,
    DESCRIPTION,
    MAIN_TEXT,
    QUESTIONS,
    NOTES,
)

# Any of these marks a document using the legacy explicit-marker convention.
TRIGGER_ANCHORS = (PREFACE.name(1), INTRODUCTION.name(1), MAIN_TEXT.name(1))

_PREFIX_LOOKUP: dict[str, MarkerFamily] = {}
for _family in MARKER_FAMILIES:
    _PREFIX_LOOKUP[f"{_family.prefix.lower()}-"] = _family
    for _alias in _family.aliases:
        _PREFIX_LOOKUP[_alias.lower()] = _family

_MARKER_RE = re.compile(
    r"^(?P<prefix>"
    + "|".join(re.escape(prefix) for prefix in sorted(_PREFIX_LOOKUP, key=len, reverse=True))
    + r")(?P<ordinal>\d+)(?P<suffix>[a-c]?)$",
    re.IGNORECASE,
)


def parse_marker(value: str) -> tuple[MarkerFamily, str] | None:
    """Return the family and canonical name for a marker, or None."""
    match = _MARKER_RE.match(value.strip())
    if not match:
        return None
    family = _PREFIX_LOOKUP[match.group("prefix").lower()]
    suffix = match.group("suffix").lower()
    if suffix and suffix not in family.suffixes:
        return None
    return family, family.name(int(match.group("ordinal")), suffix)


def marker_name(tag: Tag) -> str | None:
    """Canonical marker name carried by ``tag`` (``name`` first, then ``id``)."""
    for attribute in ("name", "id"):
        parsed = parse_marker(attr(tag, attribute))
        if parsed:
            return parsed[1]
    return None


class AnchorCatalog(Mapping[str, Tag]):
    """Ordered, de-duplicated index of marker name to node.

    Besides the first node for each name, the catalog remembers every
    marker-bearing node (duplicates included) and all of their ancestors, so
    document walks can stop at markers and descend into subtrees holding one.
    """

    def __init__(
        self,
        anchors: dict[str, Tag],
        marker_ids: frozenset[int],
        container_ids: frozenset[int],
    ) -> None:
        self._anchors = anchors
        self._marker_ids = marker_ids
        self._container_ids = container_ids

    def __getitem__(self, name: str) -> Tag:
        return self._anchors[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._anchors)

    def __len__(self) -> int:
        return len(self._anchors)

    def is_marker(self, node: PageElement) -> bool:
        return id(node) in self._marker_ids

    def contains_marker(self, node: PageElement) -> bool:
        """True if a marker sits strictly inside ``node``."""
        return id(node) in self._container_ids

    @property
    def has_legacy_trigger(self) -> bool:
        return any(name in self._anchors for name in TRIGGER_ANCHORS)

    def family_counts(self) -> dict[SectionName, int]:
        counts = {family.section: 0 for family in MARKER_FAMILIES}
        for name in self._anchors:
            parsed = parse_marker(name)
            if parsed:
                counts[parsed[0].section] += 1
        return counts


def build_catalog(root: Tag) -> AnchorCatalog:
    """Scan ``root`` once, in document order, for marker-bearing nodes."""
    anchors: dict[str, Tag] = {}
    marker_ids: set[int] = set()
    container_ids: set[int] = set()

    for node in iter_document_order(root):
        if not isinstance(node, Tag):
            continue
        name = marker_name(node)
        if name is None:
            continue
        marker_ids.add(id(node))
        container_ids.update(ancestor_ids(node) - {id(node)})
        if name in anchors:
            logger.debug("Ignoring duplicate marker %s", name)
            continue
        anchors[name] = node

    logger.debug("Catalogued %d markers", len(anchors))
    return AnchorCatalog(anchors, frozenset(marker_ids), frozenset(container_ids))
