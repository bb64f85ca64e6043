"""Strategy B: segment sections from a table-of-contents navigation block."""

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Iterator

from book2tei.anchors import AnchorCatalog
from book2tei.html_utils import (
    ancestor_ids,
    attr,
    has_block_descendant,
    has_class,
)
from book2tei.inline import extract_rich_text
from book2tei.normalize import leading_label_length, normalize_text
from book2tei.questions import is_bare_number, ordinal_value, segment_questions
from book2tei.schemas import Item, RichText, SectionModel, SectionName

try:
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)

NAVIGATION_CLASS = "gc"
NOTE_CONTAINER_CLASS = "dd"
NOTE_LABEL_CLASS = "jb"
INVOCATION_PREFIX = "in the name of"
MIN_BLOCK_LENGTH = 3

# (match, label text, section) with match "prefix" or "equals"; labels are
# compared lower-cased after normalization.
LABEL_RULES: tuple[tuple[str, str, SectionName], ...] = (
    ("prefix", "preface", SectionName.PREFACE),
    ("prefix", "introduction", SectionName.INTRODUCTION),
    ("prefix", "a description", SectionName.DESCRIPTION),
    ("equals", "the kitáb-i-aqdas", SectionName.MAIN_TEXT),
    ("equals", "the kitab-i-aqdas", SectionName.MAIN_TEXT),
    ("prefix", "some supplementary", SectionName.SUPPLEMENTARY),
    ("prefix", "questions and answers", SectionName.QUESTIONS),
    ("prefix", "a synopsis", SectionName.SYNOPSIS),
    ("equals", "notes", SectionName.NOTES),
    ("prefix", "glossary", SectionName.GLOSSARY),
    ("prefix", "key to passages", SectionName.KEY_PASSAGES),
)

_NOTE_NUMBER_RE = re.compile(r"^\s*(\d+)\.")
_CONTAINER_TAGS = ("div", "section")
_TOP_LEVEL_TAGS = ("body", "html", "[document]")
_LOOSE_BLOCK_TAGS = ("li", "div")


@dataclass(frozen=True)
class NavEntry:
    """A navigation link: in-document target id and its visible label."""

    target: str
    label: str
    section: SectionName | None


def map_label(label: str) -> SectionName | None:
    """Map a navigation label to a section, or None when unrecognized."""
    text = normalize_text(label).lower()
    for match, expected, section in LABEL_RULES:
        if match == "prefix" and text.startswith(expected):
            return section
        if match == "equals" and text == expected:
            return section
    return None


def find_navigation_block(root: Tag) -> Tag | None:
    """The ``nav.gc`` block, else the first ``nav`` with a recognized label."""
    for nav in root.find_all("nav"):
        if has_class(nav, NAVIGATION_CLASS):
            return nav
    for nav in root.find_all("nav"):
        if any(entry.section for entry in read_navigation_entries(nav)):
            return nav
    return None


def read_navigation_entries(nav: Tag) -> list[NavEntry]:
    entries = []
    for link in nav.find_all("a"):
        href = attr(link, "href").strip()
        if not href.startswith("#") or len(href) < 2:
            continue
        label = normalize_text(link.get_text(" "))
        entries.append(NavEntry(target=href[1:], label=label, section=map_label(label)))
    return entries


class NavigationRangeStrategy:
    """Segment documents whose sections are reachable from a navigation block."""

    name = "navigation-range"

    def segment(self, root: Tag, catalog: AnchorCatalog) -> SectionModel:
        nav = find_navigation_block(root)
        if nav is None:
            logger.warning("No navigation block found; the document has no recognizable structure")
            return SectionModel.build(self.name, {})

        entries = _recognized_entries(read_navigation_entries(nav))
        contested = contested_containers(root, [entry.target for entry in entries])
        sections: dict[SectionName, list[Item]] = {}
        for index, entry in enumerate(entries):
            next_target = entries[index + 1].target if index + 1 < len(entries) else None
            nodes = collect_section_nodes(root, entry.target, next_target, contested)
            items = sections.setdefault(entry.section, [])
            if entry.section is SectionName.NOTES:
                new_items = extract_notes(nodes, previous_ordinal=_last_value(items))
            elif entry.section is SectionName.QUESTIONS:
                new_items = segment_questions(
                    _question_blocks(nodes), previous_ordinal=_last_value(items)
                )
            else:
                new_items = extract_paragraphs(nodes, entry.section, start=len(items) + 1)
            logger.info("%s: %d items from %r", entry.section.value, len(new_items), entry.label)
            items.extend(new_items)
        return SectionModel.build(self.name, sections)


def _recognized_entries(entries: Iterable[NavEntry]) -> list[NavEntry]:
    recognized: list[NavEntry] = []
    seen: set[str] = set()
    for entry in entries:
        if entry.section is None:
            logger.debug("Ignoring navigation label %r", entry.label)
            continue
        if entry.target in seen:
            continue
        seen.add(entry.target)
        recognized.append(entry)
    return recognized


def _last_value(items: list[Item]) -> int:
    return ordinal_value(items[-1].ordinal) if items else 0


def _find_anchor(root: Tag, target: str) -> Tag | None:
    anchor = root.find(attrs={"id": target})
    if anchor is None:
        anchor = root.find(attrs={"name": target})
    return anchor


def contested_containers(root: Tag, targets: Iterable[str]) -> frozenset[int]:
    """Identities of elements holding two or more navigation targets."""
    counts: Counter[int] = Counter()
    for target in targets:
        anchor = _find_anchor(root, target)
        if anchor is not None:
            counts.update(ancestor_ids(anchor))
    return frozenset(node_id for node_id, count in counts.items() if count > 1)


def collect_section_nodes(
    root: Tag,
    start_id: str,
    end_id: str | None,
    contested: frozenset[int] = frozenset(),
) -> list[Tag]:
    """Container of the start anchor plus following siblings up to the end anchor.

    The container is the nearest ``div``/``section`` ancestor-or-self of the
    anchor, but never an element in ``contested`` (one that also holds
    another section's anchor) nor the document body.
    """
    anchor = _find_anchor(root, start_id)
    if anchor is None:
        logger.warning("Navigation target #%s not found", start_id)
        return []

    container = anchor
    while container.name not in _CONTAINER_TAGS:
        parent = container.parent
        if parent is None or parent.name in _TOP_LEVEL_TAGS or id(parent) in contested:
            break
        container = parent

    end_anchor = _find_anchor(root, end_id) if end_id else None
    end_ids = ancestor_ids(end_anchor) if end_anchor is not None else frozenset()

    nodes = [container]
    if id(container) in end_ids:
        return nodes
    for sibling in container.next_siblings:
        if not isinstance(sibling, Tag):
            continue
        if id(sibling) in end_ids:
            break
        nodes.append(sibling)
    return nodes


def extract_notes(nodes: Iterable[Tag], previous_ordinal: int = 0) -> list[Item]:
    """One item per note container, numbered from its label element."""
    items: list[Item] = []
    for container in _outermost(nodes, lambda tag: has_class(tag, NOTE_CONTAINER_CLASS)):
        label = container.find(
            lambda tag: tag.name == "span" and has_class(tag, NOTE_LABEL_CLASS)
        )
        if label is None:
            continue
        match = _NOTE_NUMBER_RE.match(normalize_text(label.get_text()))
        if match:
            ordinal = match.group(1)
        else:
            ordinal = str(previous_ordinal + 1)
            logger.debug("Note label %r has no number, using %s", label.get_text(), ordinal)
        text = RichText.concat(extract_rich_text(p) for p in container.find_all("p"))
        if text.is_empty:
            continue
        items.append(Item(ordinal=ordinal, text=text))
        previous_ordinal = ordinal_value(ordinal, previous_ordinal)
    return items


def extract_paragraphs(nodes: Iterable[Tag], section: SectionName, start: int = 1) -> list[Item]:
    """Sequentially numbered paragraph blocks of a general section."""
    items: list[Item] = []
    counter = start
    first = True
    for block in _outermost(nodes, _is_paragraph):
        text = extract_rich_text(block)
        if len(text.text) < MIN_BLOCK_LENGTH:
            continue
        if section is SectionName.MAIN_TEXT:
            if first and text.text.lower().startswith(INVOCATION_PREFIX):
                first = False
                logger.debug("Skipping invocation %r", text.text)
                continue
            text = text.drop_leading(leading_label_length(text.text))
            if text.is_empty:
                continue
        first = False
        items.append(Item(ordinal=str(counter), text=text))
        counter += 1
    return items


def _question_blocks(nodes: Iterable[Tag]) -> Iterator[RichText]:
    for block in _outermost(nodes, _is_question_block):
        text = extract_rich_text(block)
        if len(text.text) < MIN_BLOCK_LENGTH and not is_bare_number(text.text):
            continue
        yield text


def _is_paragraph(tag: Tag) -> bool:
    return tag.name == "p"


def _is_question_block(tag: Tag) -> bool:
    if tag.name == "p":
        return True
    return tag.name in _LOOSE_BLOCK_TAGS and not has_block_descendant(tag)


def _outermost(nodes: Iterable[Tag], predicate) -> Iterator[Tag]:
    """Matching elements in document order, never descending into a match."""
    for node in nodes:
        if node.name == "nav":
            continue
        if predicate(node):
            yield node
            continue
        yield from _outermost(
            (child for child in node.children if isinstance(child, Tag)), predicate
        )
