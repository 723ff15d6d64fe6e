"""Interactive annotation session: view state, selection capture and activation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .documents import DocumentProvider
from .highlight import Segment, resolve, spans_at
from .models import VALID_SCORES, InvalidArgumentError, Span, TraceDocument
from .registry import DEFAULT_BEHAVIOR_REGISTRY, BehaviorRegistry
from .store import SpanStore

logger = logging.getLogger(__name__)


@dataclass
class ViewState:
    """Transient state of the document view. Never exported."""

    behavior: str
    score: int = VALID_SCORES[0]
    pending_selection: str | None = None
    hovered_span_id: int | None = None

    def clear_transient(self) -> None:
        self.pending_selection = None
        self.hovered_span_id = None


class AnnotationSession:
    """Ties the document provider, span store and highlight resolver together.

    The label and score choices survive document switches; the pending
    selection, hover and active span do not.
    """

    def __init__(
        self,
        provider: DocumentProvider,
        store: SpanStore | None = None,
        registry: BehaviorRegistry | None = None,
    ) -> None:
        self._provider = provider
        self._store = store or SpanStore()
        self._registry = registry or DEFAULT_BEHAVIOR_REGISTRY
        self.view = ViewState(behavior=self._registry.default_label())

    @property
    def provider(self) -> DocumentProvider:
        return self._provider

    @property
    def store(self) -> SpanStore:
        return self._store

    @property
    def registry(self) -> BehaviorRegistry:
        return self._registry

    def current_document(self) -> TraceDocument:
        return self._provider.current()

    def spans(self) -> tuple[Span, ...]:
        return self._store.spans(self.current_document().doc_id)

    def active_span_id(self) -> int | None:
        return self._store.active(self.current_document().doc_id)

    def hovered_span(self) -> Span | None:
        if self.view.hovered_span_id is None:
            return None
        return self._store.get(self.current_document().doc_id, self.view.hovered_span_id)

    def segments(self) -> list[Segment]:
        document = self.current_document()
        return resolve(document.text, self._store.spans(document.doc_id), self._store.active(document.doc_id))

    def capture_selection(self, raw_selection: str) -> str | None:
        """Record a selection made on the current document.

        Whitespace is trimmed. A blank selection clears the pending one; text
        that does not occur in the document is rejected because it could
        never highlight.
        """

        text = raw_selection.strip()
        if not text:
            self.view.pending_selection = None
            return None
        if text not in self.current_document().text:
            raise InvalidArgumentError(f"Selection {text!r} does not occur in the current document")
        self.view.pending_selection = text
        return text

    def clear_selection(self) -> None:
        self.view.pending_selection = None

    def choose_behavior(self, choice: str | int) -> str:
        self.view.behavior = self._registry.resolve(choice)
        return self.view.behavior

    def choose_score(self, score: int | str) -> int:
        try:
            value = int(score)
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(f"Score must be one of {VALID_SCORES}") from exc
        if value not in VALID_SCORES:
            raise InvalidArgumentError(f"Score must be one of {VALID_SCORES}")
        self.view.score = value
        return value

    def can_submit(self) -> bool:
        return bool(self.view.pending_selection)

    def submit(self) -> Span:
        """Store the pending selection with the chosen behavior and score."""

        if not self.view.pending_selection:
            raise InvalidArgumentError("Select some text before submitting an annotation")
        document_id = self.current_document().doc_id
        span_id = self._store.add(document_id, self.view.pending_selection, self.view.behavior, self.view.score)
        self.view.pending_selection = None
        span = self._store.get(document_id, span_id)
        if span is None:
            raise LookupError(f"Span {span_id} was not stored for document '{document_id}'")
        return span

    def toggle_active(self, span_id: int) -> Span | None:
        """Activate ``span_id``, or clear activation when it is already active."""

        document_id = self.current_document().doc_id
        if self._store.active(document_id) == span_id:
            self._store.set_active(document_id, None)
            self.view.hovered_span_id = None
            return None

        span = self._store.get(document_id, span_id)
        if span is None:
            logger.debug("Ignoring activation of unknown span %s", span_id)
            return None
        self._store.set_active(document_id, span_id)
        self.view.hovered_span_id = span_id
        return span

    def activate_at(self, offset: int) -> Span | None:
        """Activate the earliest span covering the character at ``offset``."""

        document = self.current_document()
        covering = spans_at(document.text, self._store.spans(document.doc_id), offset)
        if not covering:
            return None
        span = covering[0]
        self._store.set_active(document.doc_id, span.span_id)
        self.view.hovered_span_id = span.span_id
        return span

    def delete(self, span_id: int) -> None:
        document_id = self.current_document().doc_id
        self._store.remove(document_id, span_id)
        self._store.set_active(document_id, None)
        self.view.hovered_span_id = None

    def next_document(self) -> bool:
        return self._switch(self._provider.next)

    def previous_document(self) -> bool:
        return self._switch(self._provider.previous)

    def go_to(self, index: int) -> bool:
        return self._switch(lambda: self._provider.go_to(index))

    def _switch(self, move: Callable[[], bool]) -> bool:
        leaving = self.current_document().doc_id
        moved = move()
        if moved:
            self._store.set_active(leaving, None)
            self.view.clear_transient()
            logger.debug("Switched from %s to %s", leaving, self.current_document().doc_id)
        return moved
