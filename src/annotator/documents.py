"""Trace loading and navigation between documents."""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any, Iterable, Sequence

import requests
from pydantic import AliasChoices, BaseModel, Field, ValidationError

from .models import AnnotatorError, TraceDocument

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 30


class DocumentNotFoundError(AnnotatorError, LookupError):
    """Raised when a document id is not known to the provider."""


class TraceModel(BaseModel):
    id: str = Field(min_length=1)
    question: str | None = None
    text: str = Field(validation_alias=AliasChoices("text", "reasoning"))


def parse_traces(payload: Any) -> list[TraceDocument]:
    """Validate a decoded JSON payload into trace documents.

    Accepts a list of trace objects or an object with a ``traces`` list.
    """

    if isinstance(payload, dict) and "traces" in payload:
        payload = payload["traces"]
    if not isinstance(payload, list):
        raise ValueError("Trace payload must be a list of traces or an object with a 'traces' list")

    documents: list[TraceDocument] = []
    seen: set[str] = set()
    for item in payload:
        try:
            model = TraceModel.model_validate(item)
        except ValidationError as exc:
            raise ValueError(f"Trace definition is invalid: {exc}") from exc
        if model.id in seen:
            raise ValueError(f"Duplicate trace id '{model.id}'")
        seen.add(model.id)
        documents.append(TraceDocument(doc_id=model.id, text=model.text, question=model.question))
    return documents


def load_traces(source: str | Path) -> list[TraceDocument]:
    """Load traces from a JSON or JSONL file, or from an ``http(s)`` URL."""

    location = str(source)
    if location.startswith(("http://", "https://")):
        logger.info("Fetching traces from %s", location)
        response = requests.get(location, timeout=REQUEST_TIMEOUT_SECONDS)
        response.raise_for_status()
        return parse_traces(_decode(response.text, jsonl=location.endswith(".jsonl")))

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Trace file '{path}' not found")
    logger.info("Loading traces from %s", path)
    return parse_traces(_decode(path.read_text(encoding="utf-8"), jsonl=path.suffix == ".jsonl"))


def load_default_traces() -> list[TraceDocument]:
    """Load the sample traces bundled with the package."""

    data = resources.files(__package__).joinpath("sample_traces.json").read_text(encoding="utf-8")
    return parse_traces(json.loads(data))


def _decode(content: str, *, jsonl: bool) -> Any:
    if not jsonl:
        return json.loads(content)
    return [json.loads(line) for line in content.splitlines() if line.strip()]


class DocumentProvider:
    """Supplies the documents under review and tracks which one is open."""

    def __init__(self, documents: Iterable[TraceDocument]) -> None:
        self._documents: list[TraceDocument] = list(documents)
        if not self._documents:
            raise ValueError("At least one document must be provided")
        ids = [document.doc_id for document in self._documents]
        if len(set(ids)) != len(ids):
            raise ValueError("Document ids must be unique")
        self._index = 0

    @property
    def documents(self) -> Sequence[TraceDocument]:
        return tuple(self._documents)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def has_previous(self) -> bool:
        return self._index > 0

    @property
    def has_next(self) -> bool:
        return self._index < len(self._documents) - 1

    def current(self) -> TraceDocument:
        return self._documents[self._index]

    def get(self, document_id: str) -> TraceDocument:
        for document in self._documents:
            if document.doc_id == document_id:
                return document
        raise DocumentNotFoundError(f"Document '{document_id}' not found")

    def go_to(self, index: int) -> bool:
        """Move to ``index`` clamped to the valid range; return whether the index changed."""

        target = max(0, min(len(self._documents) - 1, index))
        moved = target != self._index
        self._index = target
        return moved

    def next(self) -> bool:
        return self.go_to(self._index + 1)

    def previous(self) -> bool:
        return self.go_to(self._index - 1)

    def position_label(self) -> str:
        return f"Question {self._index + 1} of {len(self._documents)}"

    def __len__(self) -> int:
        return len(self._documents)
