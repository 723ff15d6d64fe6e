import pytest

from annotator import InvalidArgumentError, SpanStore


@pytest.fixture()
def store():
    return SpanStore()


def test_add_mints_monotonic_ids_across_documents(store):
    first = store.add("trace_001", "Paris", "Memory recall", 1)
    second = store.add("trace_002", "120 miles", "Decomposition", 2)
    third = store.add("trace_001", "capital", "Logical reasoning", 1)

    assert first < second < third
    assert [span.span_id for span in store.spans("trace_001")] == [first, third]


def test_add_rejects_empty_text_and_leaves_spans_unchanged(store):
    store.add("doc", "capital", "Logical reasoning", 1)

    with pytest.raises(InvalidArgumentError):
        store.add("doc", "", "Logical reasoning", 1)

    assert [span.text for span in store.spans("doc")] == ["capital"]


def test_invalid_argument_is_a_value_error():
    assert issubclass(InvalidArgumentError, ValueError)


def test_add_does_not_require_text_to_occur_anywhere(store):
    span_id = store.add("doc", "not in the document", "Error detection", 2)

    assert store.get("doc", span_id).text == "not in the document"


def test_remove_unknown_span_is_a_silent_noop(store):
    store.remove("doc", 9999)

    assert store.spans("doc") == ()
    assert store.active("doc") is None
    assert store.document_ids() == ()


def test_remove_unknown_id_keeps_spans_and_active_selection(store):
    span_id = store.add("doc", "capital", "Logical reasoning", 1)
    store.set_active("doc", span_id)

    store.remove("doc", span_id + 100)

    assert [span.span_id for span in store.spans("doc")] == [span_id]
    assert store.active("doc") == span_id


def test_remove_active_span_clears_selection(store):
    span_id = store.add("doc", "capital", "Logical reasoning", 1)
    store.set_active("doc", span_id)

    store.remove("doc", span_id)

    assert store.spans("doc") == ()
    assert store.active("doc") is None
    assert store.active_span("doc") is None


def test_remove_other_span_keeps_active_selection(store):
    kept = store.add("doc", "capital", "Logical reasoning", 1)
    removed = store.add("doc", "Paris", "Memory recall", 1)
    store.set_active("doc", kept)

    store.remove("doc", removed)

    assert store.active("doc") == kept
    assert store.active_span("doc").text == "capital"


def test_set_active_replaces_and_clears(store):
    first = store.add("doc", "capital", "Logical reasoning", 1)
    second = store.add("doc", "Paris", "Memory recall", 2)

    store.set_active("doc", first)
    store.set_active("doc", second)
    assert store.active("doc") == second

    store.set_active("doc", None)
    assert store.active("doc") is None


def test_active_selection_is_scoped_per_document(store):
    span_id = store.add("a", "capital", "Logical reasoning", 1)
    store.set_active("a", span_id)

    assert store.active("b") is None


def test_spans_returns_read_only_snapshot(store):
    store.add("doc", "capital", "Logical reasoning", 1)

    snapshot = store.spans("doc")
    store.add("doc", "Paris", "Memory recall", 1)

    assert isinstance(snapshot, tuple)
    assert len(snapshot) == 1
    assert len(store.spans("doc")) == 2


def test_export_all_preserves_insertion_order_and_drops_ids(store):
    store.add("trace_002", "divide distance by time", "Decomposition", 2)
    store.add("trace_001", "Paris", "Memory recall", 1)
    store.add("trace_001", "Therefore", "Logical reasoning", 2)

    exported = store.export_all()

    assert list(exported) == ["trace_002", "trace_001"]
    assert exported["trace_001"] == [
        ("Paris", "Memory recall", 1),
        ("Therefore", "Logical reasoning", 2),
    ]


def test_document_keeps_empty_entry_after_all_spans_removed(store):
    span_id = store.add("doc", "capital", "Logical reasoning", 1)

    store.remove("doc", span_id)

    assert store.export_all() == {"doc": []}
