"""Serialize annotations to the ``{documentId: {"spans": [[text, label, score]]}}`` document."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, RootModel, ValidationError

from .models import AnnotatorError
from .store import SpanStore

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_PATH = "annotations.json"


class ExportError(AnnotatorError):
    """Raised when the export file cannot be written."""


class ExportEntryModel(BaseModel):
    spans: list[tuple[str, str, int]] = Field(default_factory=list)


class ExportDocumentModel(RootModel[dict[str, ExportEntryModel]]):
    pass


def build_export_document(store: SpanStore) -> dict[str, Any]:
    """Build the export payload from the store's id-less projection."""

    payload = {document_id: {"spans": rows} for document_id, rows in store.export_all().items()}
    try:
        document = ExportDocumentModel.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(f"Annotations cannot be exported: {exc}") from exc
    return document.model_dump(mode="json")


class AnnotationExporter:
    """Writes the export document to a JSON file, replacing any previous export."""

    def __init__(self, path: str | Path = DEFAULT_EXPORT_PATH) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def write(self, store: SpanStore) -> Path:
        document = build_export_document(store)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            raise ExportError(f"Cannot write annotations to {self._path}: {exc}") from exc
        logger.info("Exported annotations for %d documents to %s", len(document), self._path)
        return self._path


def export_annotations(store: SpanStore, path: str | Path = DEFAULT_EXPORT_PATH) -> Path:
    return AnnotationExporter(path).write(store)


__all__ = ["AnnotationExporter", "ExportError", "build_export_document", "export_annotations", "DEFAULT_EXPORT_PATH"]
