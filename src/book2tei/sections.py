"""Section name resolution and filtering."""

from __future__ import annotations

import re
from typing import Iterable, Literal

from book2tei.schemas import SectionModel, SectionName

_SEPARATORS_RE = re.compile(r"[\s_\-]+")


def _squash(value: str) -> str:
    return _SEPARATORS_RE.sub("", value.strip().lower())


_SECTION_LOOKUP = {_squash(name.value): name for name in SectionName}


def resolve_section_name(value: str) -> SectionName:
    """Resolve ``main-text``, ``Main Text`` or ``mainText`` to a section.

    Raises:
        ValueError: If the name matches no section.
    """
    section = _SECTION_LOOKUP.get(_squash(value))
    if section is None:
        choices = ", ".join(name.value for name in SectionName)
        raise ValueError(f"Unknown section {value!r} (expected one of: {choices})")
    return section


def filter_sections(
    model: SectionModel,
    *,
    mode: Literal["include", "exclude"] = "exclude",
    selected: Iterable[str] | None = None,
) -> SectionModel:
    """Keep (include mode) or drop (exclude mode) the selected sections."""
    selected_sections = {resolve_section_name(name) for name in (selected or []) if name.strip()}
    if not selected_sections:
        return model

    kept = {}
    for name in SectionName:
        in_selected = name in selected_sections
        keep = in_selected if mode == "include" else not in_selected
        kept[name] = model.items(name) if keep else ()
    return SectionModel.build(model.strategy, kept)
