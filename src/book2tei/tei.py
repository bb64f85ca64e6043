"""Serialize a section model into a TEI P5 XML document."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

from book2tei.exceptions import ConversionError
from book2tei.schemas import BookMetadata, Inline, Item, RichText, SectionModel, SectionName

try:
    from lxml import etree
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise ConversionError("lxml is required for TEI output (pip install lxml).") from exc


TEI_NS = "http://www.tei-c.org/ns/1.0"

# Division type and heading per section; None means "use the book's main text heading".
DIVISIONS: dict[SectionName, tuple[str, str | None]] = {
    SectionName.PREFACE: ("preface", "Preface"),
    SectionName.INTRODUCTION: ("introduction", "Introduction"),
    SectionName.DESCRIPTION: ("description", "Description"),
    SectionName.MAIN_TEXT: ("main-text", None),
    SectionName.SUPPLEMENTARY: (
        "supplementary",
        "Some Texts Revealed by Bahá'u'lláh Supplementary to the Kitáb-i-Aqdas",
    ),
    SectionName.QUESTIONS: ("questions-answers", "Questions and Answers"),
    SectionName.SYNOPSIS: ("synopsis", "A Synopsis and Codification of the Kitáb-i-Aqdas"),
    SectionName.NOTES: ("notes", "Notes"),
    SectionName.GLOSSARY: ("glossary", "Glossary"),
    SectionName.KEY_PASSAGES: ("key-passages", "Key to Passages Translated by Shoghi Effendi"),
}


def _tei(tag: str) -> str:
    return f"{{{TEI_NS}}}{tag}"


def render_tei(
    model: SectionModel,
    *,
    metadata: BookMetadata | None = None,
    stylesheet: str | None = None,
    converted_at: datetime | None = None,
) -> str:
    """Render ``model`` as a TEI document string (with XML declaration).

    Raises:
        ConversionError: If the content cannot be represented as XML.
    """
    meta = metadata or BookMetadata()
    timestamp = converted_at or datetime.now(timezone.utc)

    try:
        root = etree.Element(_tei("TEI"), nsmap={None: TEI_NS})
        root.append(build_header(meta, timestamp))
        text = etree.SubElement(root, _tei("text"))
        body = etree.SubElement(text, _tei("body"))
        for name, items in model.populated():
            body.append(build_division(name, items, meta))

        document = etree.ElementTree(root)
        if stylesheet:
            root.addprevious(
                etree.ProcessingInstruction("xml-stylesheet", f'type="text/xsl" href="{stylesheet}"')
            )
        output = etree.tostring(
            document, xml_declaration=True, encoding="UTF-8", pretty_print=True
        )
    except ValueError as exc:
        raise ConversionError(f"Cannot serialize TEI document: {exc}") from exc
    return output.decode("utf-8")


def build_header(meta: BookMetadata, timestamp: datetime) -> etree._Element:
    header = etree.Element(_tei("teiHeader"))

    file_desc = etree.SubElement(header, _tei("fileDesc"))
    title_stmt = etree.SubElement(file_desc, _tei("titleStmt"))
    _leaf(title_stmt, "title", meta.title)
    _leaf(title_stmt, "author", meta.author)
    if meta.responsible_party:
        resp_stmt = etree.SubElement(title_stmt, _tei("respStmt"))
        _leaf(resp_stmt, "resp", meta.responsibility)
        _leaf(resp_stmt, "name", meta.responsible_party)

    publication = etree.SubElement(file_desc, _tei("publicationStmt"))
    _leaf(publication, "publisher", meta.publisher)
    _leaf(publication, "date", meta.date)
    availability = etree.SubElement(publication, _tei("availability"))
    _leaf(availability, "p", meta.availability)

    source_desc = etree.SubElement(file_desc, _tei("sourceDesc"))
    _leaf(source_desc, "p", "Converted from HTML/XHTML source to TEI XML")
    if meta.source_name:
        _leaf(source_desc, "p", f"Original source: {meta.source_name}")
    _leaf(source_desc, "p", f"Conversion date: {timestamp.isoformat()}")

    encoding_desc = etree.SubElement(header, _tei("encodingDesc"))
    project_desc = etree.SubElement(encoding_desc, _tei("projectDesc"))
    _leaf(project_desc, "p", "This file was converted from HTML to TEI P5 XML format")

    profile_desc = etree.SubElement(header, _tei("profileDesc"))
    lang_usage = etree.SubElement(profile_desc, _tei("langUsage"))
    language = _leaf(lang_usage, "language", meta.language_name)
    language.set("ident", meta.language)
    if meta.keywords:
        text_class = etree.SubElement(profile_desc, _tei("textClass"))
        keywords = etree.SubElement(text_class, _tei("keywords"))
        for term in meta.keywords:
            _leaf(keywords, "term", term)

    revision_desc = etree.SubElement(header, _tei("revisionDesc"))
    change = _leaf(revision_desc, "change", "Initial conversion from HTML to TEI")
    change.set("when", timestamp.date().isoformat())
    return header


def build_division(
    name: SectionName, items: Iterable[Item], meta: BookMetadata
) -> etree._Element:
    div_type, head = DIVISIONS[name]
    division = etree.Element(_tei("div"))
    division.set("type", div_type)
    _leaf(division, "head", head or meta.main_text_head)
    item_tag = "note" if name is SectionName.NOTES else "p"
    for item in items:
        element = etree.SubElement(division, _tei(item_tag))
        element.set("n", item.ordinal)
        append_rich_text(element, item.text)
    return division


def append_rich_text(element: etree._Element, text: RichText) -> None:
    """Append rich text as mixed content: spans become ``hi``/``ref``, newlines ``lb``."""
    for part in text.parts:
        _append_inline(element, part)


def _append_inline(element: etree._Element, part: Inline) -> None:
    if isinstance(part, str):
        for index, line in enumerate(part.split("\n")):
            if index:
                etree.SubElement(element, _tei("lb"))
            _append_string(element, line)
        return

    if part.kind == "reference":
        child = etree.SubElement(element, _tei("ref"))
        child.set("target", part.target or "")
    else:
        child = etree.SubElement(element, _tei("hi"))
        child.set("rend", part.kind)
    for grandchild in part.children:
        _append_inline(child, grandchild)


def _append_string(element: etree._Element, value: str) -> None:
    if not value:
        return
    if len(element):
        last = element[-1]
        last.tail = (last.tail or "") + value
    else:
        element.text = (element.text or "") + value


def _leaf(parent: etree._Element, tag: str, text: str) -> etree._Element:
    element = etree.SubElement(parent, _tei(tag))
    element.text = text
    return element
