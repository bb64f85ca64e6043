"""Rich text: normalized text interleaved with inline formatting spans."""

from __future__ import annotations

import re
from typing import Iterable, Literal, Union

from pydantic import BaseModel, ConfigDict

SpanKind = Literal["italic", "bold", "underline", "superscript", "subscript", "reference"]

_SPACES_RE = re.compile(r"[^\S\n]+")
_NEWLINE_PADDING_RE = re.compile(r" *\n *")

# Builder tokens: ("text", str) | ("open", kind, target) | ("close",)
_Token = tuple


class Span(BaseModel):
    """An inline span; ``target`` is only set for references."""

    model_config = ConfigDict(frozen=True)

    kind: SpanKind
    target: str | None = None
    children: tuple[Union[str, "Span"], ...] = ()

    @property
    def text(self) -> str:
        return "".join(_plain(child) for child in self.children)


Inline = Union[str, Span]


class RichText(BaseModel):
    """Formatted text of a single item.

    Instances are always compact: whitespace runs are single spaces, there is
    no whitespace around line breaks and none at either edge.
    """

    model_config = ConfigDict(frozen=True)

    parts: tuple[Inline, ...] = ()

    @classmethod
    def plain(cls, text: str) -> RichText:
        builder = RichTextBuilder()
        builder.text(text)
        return builder.build()

    @classmethod
    def concat(cls, texts: Iterable[RichText], separator: str = " ") -> RichText:
        """Join rich texts, putting ``separator`` between non-empty ones."""
        builder = RichTextBuilder()
        first = True
        for text in texts:
            if text.is_empty:
                continue
            if not first:
                builder.text(separator)
            builder.extend(text)
            first = False
        return builder.build()

    @property
    def text(self) -> str:
        """Plain text with all formatting removed."""
        return "".join(_plain(part) for part in self.parts)

    @property
    def is_empty(self) -> bool:
        return not self.parts

    def drop_leading(self, count: int) -> RichText:
        """Remove the first ``count`` characters of plain text, keeping spans."""
        if count <= 0:
            return self
        tokens: list[_Token] = []
        remaining = count
        for token in _flatten(self.parts):
            if token[0] == "text" and remaining:
                value = token[1]
                tokens.append(("text", value[remaining:]))
                remaining = max(0, remaining - len(value))
            else:
                tokens.append(token)
        return RichText(parts=_build(_compact(tokens)))

    def __str__(self) -> str:
        return self.text


class RichTextBuilder:
    """Accumulate text and span boundaries, then build a compact RichText."""

    def __init__(self) -> None:
        self._tokens: list[_Token] = []
        self._depth = 0

    def text(self, value: str) -> None:
        if value:
            self._tokens.append(("text", value))

    def space(self) -> None:
        self._tokens.append(("text", " "))

    def newline(self) -> None:
        self._tokens.append(("text", "\n"))

    def open(self, kind: SpanKind, target: str | None = None) -> None:
        self._tokens.append(("open", kind, target))
        self._depth += 1

    def close(self) -> None:
        if self._depth:
            self._tokens.append(("close",))
            self._depth -= 1

    def extend(self, rich_text: RichText) -> None:
        self._tokens.extend(_flatten(rich_text.parts))

    def build(self) -> RichText:
        tokens = list(self._tokens)
        tokens.extend(("close",) for _ in range(self._depth))
        return RichText(parts=_build(_compact(tokens)))


def _plain(part: Inline) -> str:
    return part if isinstance(part, str) else part.text


def _flatten(parts: Iterable[Inline]) -> list[_Token]:
    tokens: list[_Token] = []
    for part in parts:
        if isinstance(part, str):
            tokens.append(("text", part))
        else:
            tokens.append(("open", part.kind, part.target))
            tokens.extend(_flatten(part.children))
            tokens.append(("close",))
    return tokens


def _compact(tokens: list[_Token]) -> list[_Token]:
    """Collapse whitespace across token boundaries and trim both edges."""
    out: list[_Token] = []
    last_text_index: int | None = None
    previous = ""
    for token in tokens:
        if token[0] != "text":
            out.append(token)
            continue
        value = _NEWLINE_PADDING_RE.sub("\n", _SPACES_RE.sub(" ", token[1]))
        if not previous:
            value = value.lstrip()
        elif previous == "\n":
            value = value.lstrip(" ")
        elif previous == " ":
            value = value.lstrip(" ")
            if value.startswith("\n") and last_text_index is not None:
                out[last_text_index] = ("text", out[last_text_index][1].rstrip(" "))
        if not value:
            continue
        out.append(("text", value))
        last_text_index = len(out) - 1
        previous = value[-1]

    for index in range(len(out) - 1, -1, -1):
        if out[index][0] != "text":
            continue
        value = out[index][1].rstrip()
        out[index] = ("text", value)
        if value:
            break
    return out


def _build(tokens: list[_Token]) -> tuple[Inline, ...]:
    stack: list[tuple[tuple | None, list[Inline]]] = [(None, [])]
    for token in tokens:
        kind = token[0]
        if kind == "text":
            if not token[1]:
                continue
            children = stack[-1][1]
            if children and isinstance(children[-1], str):
                children[-1] += token[1]
            else:
                children.append(token[1])
        elif kind == "open":
            stack.append((token, []))
        elif len(stack) > 1:
            opener, children = stack.pop()
            if children:
                stack[-1][1].append(
                    Span(kind=opener[1], target=opener[2], children=tuple(children))
                )
    while len(stack) > 1:
        opener, children = stack.pop()
        if children:
            stack[-1][1].append(Span(kind=opener[1], target=opener[2], children=tuple(children)))
    return tuple(stack[0][1])
