"""Human-readable summary of a conversion."""

from __future__ import annotations

from book2tei.schemas import SectionModel, SectionName

_SECTION_LABELS = {
    SectionName.PREFACE: ("Preface", "paragraphs"),
    SectionName.INTRODUCTION: ("Introduction", "paragraphs"),
    SectionName.DESCRIPTION: ("Description", "paragraphs"),
    SectionName.MAIN_TEXT: ("Main text", "paragraphs"),
    SectionName.SUPPLEMENTARY: ("Supplementary texts", "paragraphs"),
    SectionName.QUESTIONS: ("Questions", "items"),
    SectionName.SYNOPSIS: ("Synopsis", "paragraphs"),
    SectionName.NOTES: ("Notes", "items"),
    SectionName.GLOSSARY: ("Glossary", "entries"),
    SectionName.KEY_PASSAGES: ("Key to passages", "entries"),
}


def format_summary(
    model: SectionModel,
    *,
    title: str | None = None,
    source: str | None = None,
    output_size: int | None = None,
) -> str:
    """Summarize what was extracted, section by section."""
    lines = []
    if title:
        lines.append(f"Title: {title}")
    if source:
        lines.append(f"Source: {source}")
    lines.append(f"Strategy: {model.strategy or 'none'}")

    if model.is_empty:
        lines.append("Sections found: none")
    else:
        lines.append("Sections found:")
        for name, items in model.populated():
            label, unit = _SECTION_LABELS[name]
            lines.append(f"  - {label}: {len(items)} {unit}")
    lines.append(f"Total items: {count_items(model)}")

    if output_size is not None:
        lines.append(f"Output size: {_format_size(output_size)}")
    return "\n".join(lines)


def count_items(model: SectionModel) -> int:
    """Count items across all sections."""
    return sum(len(items) for _, items in model.populated())


def _format_size(size: int) -> str:
    if size >= 1024 * 1024:
        return f"{size / (1024 * 1024):.1f} MB"
    if size >= 1024:
        return f"{size / 1024:.2f} KB"
    return f"{size} B"
