"""Group loose question/answer blocks into numbered items.

The questions section mixes several conventions: blocks holding only a bare
number, blocks opening with ``Question:`` or ``Answer:``, and questions whose
number is inlined at the start of their own text. Blocks are folded through
:func:`step` one at a time; :func:`finish` closes the pass.

An item's ordinal is resolved in priority order: a number inlined at the
start of the block, else the oldest pending bare number, else the previous
ordinal plus one.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from functools import reduce
from typing import Iterable

from book2tei.normalize import leading_label_length, leading_number
from book2tei.schemas import Item, RichText

logger = logging.getLogger(__name__)

_BARE_NUMBER_RE = re.compile(r"^\s*(\d+)\s*[.):]?\s*$")
_QUESTION_LABEL_RE = re.compile(r"^\s*question\s*[:.]\s*", re.IGNORECASE)
_ANSWER_LABEL_RE = re.compile(r"^\s*answer\s*[:.]\s*", re.IGNORECASE)
_ORDINAL_VALUE_RE = re.compile(r"^\d+")

# Implicit question starts must be longer than this after label stripping.
_MIN_IMPLICIT_LENGTH = 2


@dataclass(frozen=True)
class QAState:
    """Accumulator threaded through one pass over a questions range.

    ``current_text`` is None while no item is open.
    """

    current_ordinal: str = ""
    current_text: RichText | None = None
    pending: tuple[str, ...] = ()
    previous_ordinal: int = 0
    emitted: tuple[Item, ...] = ()

    @property
    def is_open(self) -> bool:
        return self.current_text is not None


def is_bare_number(text: str) -> bool:
    return _BARE_NUMBER_RE.match(text) is not None


def segment_questions(blocks: Iterable[RichText], previous_ordinal: int = 0) -> tuple[Item, ...]:
    """Run the state machine over ``blocks`` and return the emitted items."""
    state = reduce(step, blocks, QAState(previous_ordinal=previous_ordinal))
    return finish(state)


def step(state: QAState, block: RichText) -> QAState:
    """Apply one content block to the state."""
    text = block.text

    bare = _BARE_NUMBER_RE.match(text)
    if bare:
        return replace(state, pending=state.pending + (bare.group(1),))

    question = _QUESTION_LABEL_RE.match(text)
    if question:
        return _open(_flush(state), block.drop_leading(question.end()))

    answer = _ANSWER_LABEL_RE.match(text)
    if answer and state.is_open:
        return _append(state, block.drop_leading(answer.end()))

    if not state.is_open:
        body = block.drop_leading(answer.end()) if answer else block
        candidate = _open(state, body)
        if len(candidate.current_text.text) > _MIN_IMPLICIT_LENGTH:
            return candidate
        logger.debug("Discarding question block %r", text)
        return state

    return _append(state, block)


def finish(state: QAState) -> tuple[Item, ...]:
    """Flush the open item and emit placeholders for leftover bare numbers."""
    state = _flush(state)
    emitted = list(state.emitted)
    for number in state.pending:
        if emitted and emitted[-1].ordinal == number:
            continue
        emitted.append(Item(ordinal=number))
    return tuple(emitted)


def _open(state: QAState, body: RichText) -> QAState:
    pending = state.pending
    inline = leading_number(body.text)
    if inline is not None:
        ordinal = inline
        if pending and pending[0] != ordinal:
            logger.debug(
                "Inline question number %s disagrees with pending number %s", ordinal, pending[0]
            )
    elif pending:
        ordinal, pending = pending[0], pending[1:]
    else:
        ordinal = str(state.previous_ordinal + 1)

    if pending and pending[0] == ordinal:
        pending = pending[1:]

    text = body.drop_leading(leading_label_length(body.text))
    return replace(state, current_ordinal=ordinal, current_text=text, pending=pending)


def _append(state: QAState, body: RichText) -> QAState:
    return replace(state, current_text=RichText.concat([state.current_text, body]))


def _flush(state: QAState) -> QAState:
    if not state.is_open:
        return state
    emitted = state.emitted
    if state.current_text.text.strip():
        emitted = emitted + (Item(ordinal=state.current_ordinal, text=state.current_text),)
    return replace(
        state,
        current_ordinal="",
        current_text=None,
        emitted=emitted,
        previous_ordinal=ordinal_value(state.current_ordinal, state.previous_ordinal),
    )


def ordinal_value(ordinal: str, default: int = 0) -> int:
    """Numeric value of an ordinal's leading digits (``12b`` -> 12)."""
    match = _ORDINAL_VALUE_RE.match(ordinal)
    return int(match.group(0)) if match else default
