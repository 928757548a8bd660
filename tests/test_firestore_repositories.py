from unittest.mock import MagicMock

import pytest
from google.api_core.exceptions import ServiceUnavailable as GoogleServiceUnavailable
from google.cloud.firestore_v1 import SERVER_TIMESTAMP
from werkzeug.exceptions import NotFound, ServiceUnavailable

from scoping_core.datastore.firestore.service import (
    FirestoreUserRepository,
    FirestoreQuestionSetRepository,
    FirestoreMessageRepository,
    create_firestore_datastore,
)
from scoping_core.entities import User, Message, MessageStatus
from scoping_core.exceptions import DatastoreError


def snapshot(doc_id, data):
    doc = MagicMock()
    doc.id = doc_id
    doc.exists = data is not None
    doc.to_dict.return_value = data
    return doc


def test_get_user_reads_document_and_uses_key_as_id():
    client = MagicMock()
    doc_ref = client.collection.return_value.document.return_value
    doc_ref.get.return_value = snapshot("u1", {"name": "Ada", "email_address": "ada@example.com", "corporate": True})

    user = FirestoreUserRepository(client).get_user("u1")

    client.collection.assert_called_with("users")
    client.collection.return_value.document.assert_called_with("u1")
    assert (user.id, user.name, user.email_address, user.corporate) == ("u1", "Ada", "ada@example.com", True)


def test_missing_document_raises_not_found():
    client = MagicMock()
    client.collection.return_value.document.return_value.get.return_value = snapshot("u1", None)

    with pytest.raises(NotFound):
        FirestoreUserRepository(client).get_user("u1")


def test_api_errors_become_service_unavailable():
    client = MagicMock()
    client.collection.return_value.document.return_value.set.side_effect = GoogleServiceUnavailable("down")

    with pytest.raises(ServiceUnavailable):
        FirestoreUserRepository(client).create_user(User(id="u1", name="Ada", email_address="ada@example.com"))


def test_unparseable_documents_raise_datastore_error():
    client = MagicMock()
    client.collection.return_value.document.return_value.get.return_value = snapshot("u1", {"corporate": "maybe"})

    with pytest.raises(DatastoreError):
        FirestoreUserRepository(client).get_user("u1")


def test_get_all_users_orders_and_paginates():
    client = MagicMock()
    ordered = client.collection.return_value.order_by.return_value
    paginated = ordered.offset.return_value.limit.return_value
    paginated.stream.return_value = [snapshot("u3", {"name": "C", "email_address": "c@example.com"})]

    users = FirestoreUserRepository(client).get_all_users(page=3, page_size=5)

    client.collection.return_value.order_by.assert_called_once()
    assert client.collection.return_value.order_by.call_args.args[0] == "email_address"
    ordered.offset.assert_called_with(10)
    ordered.offset.return_value.limit.assert_called_with(5)
    assert [user.id for user in users] == ["u3"]


def test_update_user_merges():
    client = MagicMock()
    doc_ref = client.collection.return_value.document.return_value

    FirestoreUserRepository(client).update_user(User(id="u1", name="Ada", email_address="ada@example.com"))

    doc_ref.set.assert_called_once_with(
        {"id": "u1", "name": "Ada", "email_address": "ada@example.com", "corporate": False}, merge=True
    )


def test_tech_name_lookup_returns_first_match_or_not_found():
    client = MagicMock()
    limited = client.collection.return_value.where.return_value.limit.return_value
    limited.stream.return_value = [snapshot("qs1", {"technology_name": "AWS"})]

    repository = FirestoreQuestionSetRepository(client)
    assert repository.get_question_set_by_tech_name("AWS").id == "qs1"
    client.collection.return_value.where.return_value.limit.assert_called_with(1)

    limited.stream.return_value = []
    with pytest.raises(NotFound):
        repository.get_question_set_by_tech_name("Mainframe")


def test_messages_are_written_under_their_user():
    client = MagicMock()
    message_ref = (
        client.collection.return_value.document.return_value.collection.return_value.document.return_value
    )
    message = Message(id="m1", user_id="u1", message_text="pending", status=MessageStatus.PENDING)

    FirestoreMessageRepository(client).post_message(message)

    client.collection.assert_called_with("users")
    client.collection.return_value.document.assert_called_with("u1")
    client.collection.return_value.document.return_value.collection.assert_called_with("messages")
    message_ref.set.assert_called_once_with({
        "id": "m1",
        "user_id": "u1",
        "message_text": "pending",
        "status": "pending",
        "created_at": SERVER_TIMESTAMP,
    })


def test_message_update_stamps_updated_at_and_merges():
    client = MagicMock()
    message_ref = (
        client.collection.return_value.document.return_value.collection.return_value.document.return_value
    )

    FirestoreMessageRepository(client).update_message(Message(id="m1", user_id="u1", message_text="done"))

    args, kwargs = message_ref.set.call_args
    assert args[0]["updated_at"] is SERVER_TIMESTAMP
    assert kwargs == {"merge": True}


def test_datastore_uses_configured_collection_names():
    client = MagicMock()
    datastore = create_firestore_datastore(client, {"users": "people", "question_sets": "sets"})

    assert datastore.users.collection_name == "people"
    assert datastore.question_sets.collection_name == "sets"
    assert datastore.course_outlines.collection_name == "course_outlines"
    assert datastore.messages.user_collection_name == "people"
