"""Tests for the Supabase-backed persistence and session adapters."""

import asyncio
from types import SimpleNamespace

from conftest import FakeSupabase
from spamguard.services.auth import AuthenticatedUser, resolve_user
from spamguard.services.conversation import ConversationMemory


def test_append_message_inserts_row():
    client = FakeSupabase()
    memory = ConversationMemory(client=client)

    asyncio.run(memory.append_message("chat-1", "user", "hello", "user-1"))

    query = client.queries[0]
    assert query.table == "messages"
    name, args, _ = query.calls[0]
    assert name == "insert"
    row = args[0]
    assert row["chat_id"] == "chat-1"
    assert row["user_id"] == "user-1"
    assert row["role"] == "user"
    assert row["content"] == "hello"
    assert row["created_at"]


def test_append_message_failure_is_logged_not_raised():
    class BrokenSupabase(FakeSupabase):
        def table(self, name):
            raise RuntimeError("insert failed")

    memory = ConversationMemory(client=BrokenSupabase())

    asyncio.run(memory.append_message("chat-1", "assistant", "answer", "user-1"))


def test_get_chat_messages_maps_rows():
    rows = [
        {"chat_id": "chat-1", "user_id": "user-1", "role": "user", "content": "hi", "created_at": "2026-03-10T10:00:00+00:00"},
        {"chat_id": "chat-1", "user_id": "user-1", "role": "assistant", "content": "hello", "created_at": "2026-03-10T10:00:01+00:00"},
    ]
    memory = ConversationMemory(client=FakeSupabase(tables={"messages": rows}))

    messages = asyncio.run(memory.get_chat_messages("chat-1", "user-1"))

    assert [m.role for m in messages] == ["user", "assistant"]
    assert messages[0].timestamp == "2026-03-10T10:00:00+00:00"


def test_history_is_scoped_to_the_chat_owner():
    rows = [
        {"chat_id": "chat-1", "user_id": "owner", "role": "user", "content": "mine", "created_at": "2026-03-10T10:00:00+00:00"},
    ]
    client = FakeSupabase(tables={"messages": rows})
    memory = ConversationMemory(client=client)

    assert asyncio.run(memory.get_chat_messages("chat-1", "intruder")) == []
    assert ("eq", ("user_id", "intruder"), {}) in client.queries[0].calls

    asyncio.run(memory.clear_chat("chat-1", "intruder"))
    assert len(client.tables["messages"]) == 1

    asyncio.run(memory.clear_chat("chat-1", "owner"))
    assert client.tables["messages"] == []


def test_resolve_user_returns_session_owner():
    client = FakeSupabase(user=SimpleNamespace(id="user-1", email="a@example.com"))

    assert resolve_user("token", client=client) == AuthenticatedUser(id="user-1", email="a@example.com")


def test_resolve_user_rejects_invalid_session():
    assert resolve_user("token", client=FakeSupabase(auth_error=RuntimeError("bad jwt"))) is None
    assert resolve_user("token", client=FakeSupabase(user=None)) is None
