import pytest

from scoping_core.datastore import get_datastore
from scoping_core.datastore.memory.service import InMemoryUserRepository, InMemoryCollection


def test_memory_backend():
    datastore = get_datastore("memory")
    assert isinstance(datastore.users, InMemoryUserRepository)


def test_unknown_backend_is_rejected():
    with pytest.raises(ValueError):
        get_datastore("postgres")


def test_collection_merge_keeps_nested_fields():
    collection = InMemoryCollection()
    collection.set("m1", {"answer": {"question": {"text": "Q"}, "answer": "A"}})
    collection.set("m1", {"answer": {"answer": "B"}, "status": "completed"}, merge=True)

    assert collection.get("m1") == {
        "answer": {"question": {"text": "Q"}, "answer": "B"},
        "status": "completed",
    }


def test_collection_query_skips_documents_without_order_field():
    collection = InMemoryCollection()
    collection.set("a", {"technology_name": "GCP"})
    collection.set("b", {"course_code": "X-1"})
    collection.set("c", {"technology_name": "AWS"})

    assert [doc_id for doc_id, _ in collection.query("technology_name", 1, 10)] == ["c", "a"]


def test_collection_returns_copies():
    collection = InMemoryCollection()
    collection.set("a", {"tags": ["x"]})
    collection.get("a")["tags"].append("y")
    assert collection.get("a") == {"tags": ["x"]}
