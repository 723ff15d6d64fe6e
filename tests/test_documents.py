import json

import pytest

from annotator import DocumentNotFoundError, DocumentProvider, TraceDocument, load_default_traces, load_traces
from annotator import documents as documents_module


def test_default_traces_are_bundled():
    traces = load_default_traces()

    assert [trace.doc_id for trace in traces] == ["trace_001", "trace_002", "trace_003"]
    assert traces[0].question == "What is the capital of France?"
    assert "Paris" in traces[0].text


def test_load_traces_from_json_accepts_text_or_reasoning(tmp_path):
    path = tmp_path / "traces.json"
    path.write_text(
        json.dumps(
            {
                "traces": [
                    {"id": "a", "reasoning": "First trace."},
                    {"id": "b", "text": "Second trace.", "question": "Why?"},
                ]
            }
        ),
        encoding="utf-8",
    )

    traces = load_traces(path)

    assert traces == [
        TraceDocument(doc_id="a", text="First trace."),
        TraceDocument(doc_id="b", text="Second trace.", question="Why?"),
    ]


def test_load_traces_from_jsonl(tmp_path):
    path = tmp_path / "traces.jsonl"
    path.write_text('{"id": "a", "text": "One."}\n\n{"id": "b", "text": "Two."}\n', encoding="utf-8")

    assert [trace.doc_id for trace in load_traces(str(path))] == ["a", "b"]


def test_load_traces_rejects_invalid_entries(tmp_path):
    path = tmp_path / "traces.json"
    path.write_text(json.dumps([{"id": "a"}]), encoding="utf-8")

    with pytest.raises(ValueError, match="invalid"):
        load_traces(path)


def test_load_traces_rejects_duplicate_ids(tmp_path):
    path = tmp_path / "traces.json"
    path.write_text(json.dumps([{"id": "a", "text": "x"}, {"id": "a", "text": "y"}]), encoding="utf-8")

    with pytest.raises(ValueError, match="Duplicate"):
        load_traces(path)


def test_load_traces_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_traces(tmp_path / "missing.json")


def test_load_traces_from_url(monkeypatch):
    calls = []

    class FakeResponse:
        text = json.dumps([{"id": "remote", "reasoning": "Fetched."}])

        def raise_for_status(self):
            return None

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return FakeResponse()

    monkeypatch.setattr(documents_module.requests, "get", fake_get)

    traces = load_traces("https://example.com/traces.json")

    assert traces == [TraceDocument(doc_id="remote", text="Fetched.")]
    assert calls == [("https://example.com/traces.json", documents_module.REQUEST_TIMEOUT_SECONDS)]


def test_provider_navigation_is_clamped():
    provider = DocumentProvider(load_default_traces())

    assert provider.position_label() == "Question 1 of 3"
    assert provider.has_previous is False
    assert provider.previous() is False
    assert provider.next() is True
    assert provider.go_to(99) is True
    assert provider.current().doc_id == "trace_003"
    assert provider.has_next is False
    assert provider.next() is False
    assert provider.position_label() == "Question 3 of 3"


def test_provider_lookup_by_id():
    provider = DocumentProvider(load_default_traces())

    assert provider.get("trace_002").doc_id == "trace_002"
    with pytest.raises(DocumentNotFoundError):
        provider.get("trace_999")


def test_provider_requires_unique_non_empty_documents():
    with pytest.raises(ValueError):
        DocumentProvider([])
    with pytest.raises(ValueError):
        DocumentProvider([TraceDocument(doc_id="a", text="x"), TraceDocument(doc_id="a", text="y")])
