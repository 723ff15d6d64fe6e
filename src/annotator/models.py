"""Shared data structures for trace annotation."""

from __future__ import annotations

from dataclasses import dataclass

VALID_SCORES: tuple[int, ...] = (1, 2)


class AnnotatorError(Exception):
    """Base class for annotation errors."""


class InvalidArgumentError(AnnotatorError, ValueError):
    """Raised when an operation receives an unusable argument, such as empty span text."""


@dataclass(frozen=True)
class TraceDocument:
    """A reasoning trace to annotate. The text never changes once loaded."""

    doc_id: str
    text: str
    question: str | None = None


@dataclass(frozen=True)
class Span:
    """A labelled fragment of a document, anchored by its literal text rather than an offset."""

    span_id: int
    text: str
    label: str
    score: int

    def as_export_row(self) -> tuple[str, str, int]:
        return (self.text, self.label, self.score)
