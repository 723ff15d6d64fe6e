"""In-memory ownership of annotated spans, keyed by document id."""

from __future__ import annotations

import itertools
import logging
from typing import Iterator

from .models import InvalidArgumentError, Span

logger = logging.getLogger(__name__)


class SpanStore:
    """Holds each document's spans in creation order plus the active span per document.

    Lookups and removals that reference an unknown document or span are silent
    no-ops: an interactive reviewer must never lose captured work because of a
    stale click.
    """

    def __init__(self, first_id: int = 1) -> None:
        self._annotations: dict[str, list[Span]] = {}
        self._active: dict[str, int] = {}
        self._ids: Iterator[int] = itertools.count(first_id)

    def add(self, document_id: str, text: str, label: str, score: int) -> int:
        """Append a new span to the document and return its freshly minted id."""

        if not text:
            raise InvalidArgumentError("Span text must not be empty")

        span = Span(span_id=next(self._ids), text=text, label=label, score=score)
        self._annotations.setdefault(document_id, []).append(span)
        logger.debug("Added span %s to document %s: %r", span.span_id, document_id, text)
        return span.span_id

    def remove(self, document_id: str, span_id: int) -> None:
        spans = self._annotations.get(document_id)
        if not spans:
            logger.debug("Ignoring removal of span %s from unannotated document %s", span_id, document_id)
            return

        remaining = [span for span in spans if span.span_id != span_id]
        if len(remaining) == len(spans):
            logger.debug("Ignoring removal of unknown span %s from document %s", span_id, document_id)
            return

        self._annotations[document_id] = remaining
        if self._active.get(document_id) == span_id:
            del self._active[document_id]
        logger.debug("Removed span %s from document %s", span_id, document_id)

    def set_active(self, document_id: str, span_id: int | None) -> None:
        """Replace the document's active span. ``None`` clears it."""

        if span_id is None:
            self._active.pop(document_id, None)
        else:
            self._active[document_id] = span_id

    def active(self, document_id: str) -> int | None:
        return self._active.get(document_id)

    def active_span(self, document_id: str) -> Span | None:
        span_id = self._active.get(document_id)
        if span_id is None:
            return None
        return self.get(document_id, span_id)

    def get(self, document_id: str, span_id: int) -> Span | None:
        for span in self._annotations.get(document_id, ()):
            if span.span_id == span_id:
                return span
        return None

    def spans(self, document_id: str) -> tuple[Span, ...]:
        """Return the document's spans in insertion order."""

        return tuple(self._annotations.get(document_id, ()))

    def document_ids(self) -> tuple[str, ...]:
        return tuple(self._annotations)

    def export_all(self) -> dict[str, list[tuple[str, str, int]]]:
        """Project every document's spans to id-less ``(text, label, score)`` rows."""

        return {
            document_id: [span.as_export_row() for span in spans]
            for document_id, spans in self._annotations.items()
        }
