"""Resolve overlapping, content-anchored spans into a flat list of render segments."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Sequence

from .models import Span


class HighlightState(IntEnum):
    """Per-character tag. Higher values take precedence."""

    NONE = 0
    HIGHLIGHTED = 1
    ACTIVE = 2


@dataclass(frozen=True)
class Segment:
    """Maximal run of document text sharing one highlight state."""

    text: str
    highlighted: bool = False
    active: bool = False

    @property
    def state(self) -> HighlightState:
        if self.active:
            return HighlightState.ACTIVE
        if self.highlighted:
            return HighlightState.HIGHLIGHTED
        return HighlightState.NONE


def find_occurrences(text: str, needle: str) -> list[int]:
    """Return the start of every occurrence of ``needle``, overlapping ones included.

    Each search resumes one character after the previous match start, so
    ``"aa"`` in ``"aaa"`` yields ``[0, 1]``.
    """

    if not needle:
        return []
    positions: list[int] = []
    index = text.find(needle)
    while index != -1:
        positions.append(index)
        index = text.find(needle, index + 1)
    return positions


def resolve(
    document_text: str,
    spans: Sequence[Span],
    active_span_id: int | None = None,
) -> list[Segment]:
    """Partition ``document_text`` into segments tagged plain, highlighted or active.

    Every occurrence of every span's text is highlighted. The active span's
    occurrences are then upgraded to active, so activation always wins over
    ordinary highlighting regardless of insertion order. The returned
    segments concatenate back to ``document_text``.
    """

    if not document_text:
        return []
    if not spans:
        return [Segment(text=document_text)]

    tags = bytearray(len(document_text))
    for span in spans:
        _mark(tags, document_text, span.text, HighlightState.HIGHLIGHTED)

    if active_span_id is not None:
        active = next((span for span in spans if span.span_id == active_span_id), None)
        if active is not None:
            _mark(tags, document_text, active.text, HighlightState.ACTIVE)

    return list(_coalesce(document_text, tags))


def spans_at(document_text: str, spans: Iterable[Span], offset: int) -> list[Span]:
    """Return the spans with an occurrence covering the character at ``offset``."""

    covering: list[Span] = []
    for span in spans:
        length = len(span.text)
        if any(start <= offset < start + length for start in find_occurrences(document_text, span.text)):
            covering.append(span)
    return covering


def _mark(tags: bytearray, text: str, needle: str, state: HighlightState) -> None:
    length = len(needle)
    for start in find_occurrences(text, needle):
        for index in range(start, start + length):
            if tags[index] < state:
                tags[index] = state


def _coalesce(text: str, tags: bytearray) -> Iterable[Segment]:
    start = 0
    for index in range(1, len(tags) + 1):
        if index == len(tags) or tags[index] != tags[start]:
            state = HighlightState(tags[start])
            yield Segment(
                text=text[start:index],
                highlighted=state is not HighlightState.NONE,
                active=state is HighlightState.ACTIVE,
            )
            start = index


__all__ = ["HighlightState", "Segment", "find_occurrences", "resolve", "spans_at"]
