import json

import pytest

from annotator import AnnotationExporter, ExportError, SpanStore, build_export_document, export_annotations


def build_store() -> SpanStore:
    store = SpanStore()
    store.add("trace_001", "Paris", "Memory recall", 1)
    removed = store.add("trace_001", "Europe", "Pattern recognition", 2)
    store.add("trace_001", "Therefore, the answer is Paris.", "Logical reasoning", 2)
    store.add("trace_002", "120 ÷ 2 = 60", "Decomposition", 1)
    store.remove("trace_001", removed)
    return store


def test_build_export_document_shape():
    document = build_export_document(build_store())

    assert document == {
        "trace_001": {
            "spans": [
                ["Paris", "Memory recall", 1],
                ["Therefore, the answer is Paris.", "Logical reasoning", 2],
            ]
        },
        "trace_002": {"spans": [["120 ÷ 2 = 60", "Decomposition", 1]]},
    }


def test_export_annotations_writes_pretty_json(tmp_path):
    target = tmp_path / "out" / "annotations.json"

    path = export_annotations(build_store(), target)

    content = path.read_text(encoding="utf-8")
    assert path == target
    assert json.loads(content)["trace_002"]["spans"] == [["120 ÷ 2 = 60", "Decomposition", 1]]
    assert "÷" in content
    assert '\n  "trace_001"' in content


def test_exporter_overwrites_previous_export(tmp_path):
    exporter = AnnotationExporter(tmp_path / "annotations.json")
    exporter.write(build_store())

    exporter.write(SpanStore())

    assert json.loads(exporter.path.read_text(encoding="utf-8")) == {}


def test_export_to_directory_raises_export_error(tmp_path):
    with pytest.raises(ExportError):
        export_annotations(build_store(), tmp_path)
