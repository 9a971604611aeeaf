import pytest
from agentchat.errors import PersistenceError
from agentchat.models import Chat


def test_list_messages_limit_keeps_most_recent_in_order(store):
    for text in ("one", "two", "three"):
        store.add_message("ws-1", text, "user")

    assert [m.content for m in store.list_messages("ws-1", limit=2)] == ["two", "three"]
    assert [m.content for m in store.list_messages("ws-1")] == ["one", "two", "three"]


def test_add_message_assigns_id_and_timestamp(store):
    msg = store.add_message("ws-1", "Hello", "user")

    assert msg.id is not None
    assert msg.created_at is not None


def test_database_errors_become_persistence_errors(store, engine):
    Chat.__table__.drop(engine)

    with pytest.raises(PersistenceError):
        store.add_message("ws-1", "Hello", "user")
    with pytest.raises(PersistenceError):
        store.list_messages("ws-1")
    with pytest.raises(PersistenceError):
        store.list_messages("ws-1", limit=4)
