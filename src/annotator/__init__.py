"""Span annotation and highlight resolution for LLM reasoning traces."""

from .config import Settings, configure_logging, load_settings_from_env
from .documents import DocumentNotFoundError, DocumentProvider, load_default_traces, load_traces, parse_traces
from .export import AnnotationExporter, ExportError, build_export_document, export_annotations
from .highlight import HighlightState, Segment, find_occurrences, resolve, spans_at
from .models import VALID_SCORES, AnnotatorError, InvalidArgumentError, Span, TraceDocument
from .registry import DEFAULT_BEHAVIOR_REGISTRY, BehaviorLabel, BehaviorRegistry
from .render import render_segments, render_span_detail, render_span_list
from .session import AnnotationSession, ViewState
from .store import SpanStore

__all__ = [
    "AnnotatorError",
    "InvalidArgumentError",
    "DocumentNotFoundError",
    "Span",
    "TraceDocument",
    "VALID_SCORES",
    "SpanStore",
    "HighlightState",
    "Segment",
    "find_occurrences",
    "resolve",
    "spans_at",
    "BehaviorLabel",
    "BehaviorRegistry",
    "DEFAULT_BEHAVIOR_REGISTRY",
    "DocumentProvider",
    "load_traces",
    "load_default_traces",
    "parse_traces",
    "AnnotationSession",
    "ViewState",
    "render_segments",
    "render_span_detail",
    "render_span_list",
    "AnnotationExporter",
    "ExportError",
    "build_export_document",
    "export_annotations",
    "Settings",
    "load_settings_from_env",
    "configure_logging",
]

__version__ = "0.1.0"
