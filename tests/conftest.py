"""Shared fakes and helpers for the test suite."""

import asyncio
import json
from types import SimpleNamespace

import pytest

from spamguard.prediction_client import PredictionResult
from spamguard.streaming import EVENT_DELIMITER, EVENT_PREFIX, StreamSink


class FakeMemory:
    """Records appended messages instead of persisting them."""

    def __init__(self):
        self.appended = []
        self.owners = []

    async def append_message(self, chat_id, role, content, user_id):
        self.appended.append((chat_id, role, content))
        self.owners.append(user_id)

    async def get_chat_messages(self, chat_id, user_id, limit=100):
        return []

    async def clear_chat(self, chat_id, user_id):
        kept = [
            (entry, owner)
            for entry, owner in zip(self.appended, self.owners)
            if entry[0] != chat_id or owner != user_id
        ]
        self.appended = [entry for entry, _ in kept]
        self.owners = [owner for _, owner in kept]


class FakePredictor:
    """Returns a fixed result, or raises the configured exception."""

    def __init__(self, result=None, error=None, on_predict=None):
        self.result = result or PredictionResult(label="1", confidence=0.873)
        self.error = error
        self.on_predict = on_predict
        self.calls = []

    async def predict(self, text):
        self.calls.append(text)
        if self.on_predict:
            self.on_predict()
        if self.error:
            raise self.error
        return self.result


class FakeQuery:
    """In-memory stand-in for a supabase-py table query builder.

    Filters apply to the shared row list on ``execute``; ``insert`` and
    ``delete`` change it in place.
    """

    def __init__(self, table, rows):
        self.table = table
        self.rows = rows
        self.calls = []
        self.filters = []
        self.action = "select"
        self.payload = None
        self.row_limit = None

    def _record(self, name, *args, **kwargs):
        self.calls.append((name, args, kwargs))
        return self

    def select(self, *args, **kwargs):
        return self._record("select", *args, **kwargs)

    def insert(self, data):
        self.action = "insert"
        self.payload = data
        return self._record("insert", data)

    def delete(self):
        self.action = "delete"
        return self._record("delete")

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self._record("eq", column, value)

    def gte(self, column, value):
        self.filters.append(lambda row: row.get(column) >= value)
        return self._record("gte", column, value)

    def lte(self, column, value):
        self.filters.append(lambda row: row.get(column) <= value)
        return self._record("lte", column, value)

    def order(self, column, desc=False):
        return self._record("order", column, desc=desc)

    def limit(self, count):
        self.row_limit = count
        return self._record("limit", count)

    def _matches(self, row):
        return all(check(row) for check in self.filters)

    def execute(self):
        if self.action == "insert":
            self.rows.append(self.payload)
            return SimpleNamespace(data=[self.payload], count=1)

        matched = [row for row in self.rows if self._matches(row)]
        if self.action == "delete":
            self.rows[:] = [row for row in self.rows if not self._matches(row)]
        elif self.row_limit is not None:
            matched = matched[:self.row_limit]
        return SimpleNamespace(data=matched, count=len(matched))


class FakeSupabase:
    """Supabase client fake backed by plain lists of row dicts."""

    def __init__(self, tables=None, user=None, auth_error=None):
        self.tables = tables if tables is not None else {}
        self.queries = []
        self.auth = SimpleNamespace(get_user=self._get_user)
        self._user = user
        self._auth_error = auth_error

    def table(self, name):
        query = FakeQuery(name, self.tables.setdefault(name, []))
        self.queries.append(query)
        return query

    def _get_user(self, token):
        if self._auth_error:
            raise self._auth_error
        return SimpleNamespace(user=self._user)


def decode_events(chunks):
    """Turn encoded ``data:`` chunks back into payload dicts."""
    events = []
    for chunk in chunks:
        assert chunk.startswith(EVENT_PREFIX)
        assert chunk.endswith(EVENT_DELIMITER)
        events.append(json.loads(chunk[len(EVENT_PREFIX):-len(EVENT_DELIMITER)]))
    return events


def decode_stream_body(body):
    """Split a full text/event-stream body into payload dicts."""
    chunks = [f"{part}{EVENT_DELIMITER}" for part in body.split(EVENT_DELIMITER) if part]
    return decode_events(chunks)


def run_relay(
    relay,
    sink=None,
    chat_id="chat-1",
    content="You won a free cruise, click here",
    user_id="user-1",
):
    """Run a relay to completion and drain everything it wrote."""

    async def _run():
        target = sink or StreamSink()
        ended_in = await relay.run(chat_id, content, target, user_id)
        chunks = []
        if not target.detached:
            chunks = [chunk async for chunk in target]
        return ended_in, target, decode_events(chunks)

    return asyncio.run(_run())


@pytest.fixture
def memory():
    return FakeMemory()


@pytest.fixture
def predictor():
    return FakePredictor()
