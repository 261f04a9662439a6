"""Shared fixtures: an in-memory pool/connection pair that records what the DAO does."""
import pytest

from dao import entity_dao
from db.connection import ConnectionPool


class FakeCursor:
    def __init__(self, connection):
        self.connection = connection

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=None):
        self.connection.executed.append((sql, list(params or [])))
        if self.connection.fail_with is not None:
            raise self.connection.fail_with

    def fetchall(self):
        return list(self.connection.rows)


class FakeConnection:
    """Records statements, batches, commits and rollbacks."""

    def __init__(self):
        self.rows = []
        self.executed = []
        self.batches = []
        self.commits = 0
        self.rollbacks = 0
        self.fail_with = None
        self.rollback_error = None

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1
        if self.rollback_error is not None:
            raise self.rollback_error

    @property
    def statement_count(self):
        return len(self.executed) + len(self.batches)


class FakePool(ConnectionPool):
    """ConnectionPool handing out a single FakeConnection and counting acquire/release."""

    def __init__(self, connection):
        self.conn = connection
        self.acquired = 0
        self.released = 0

    def acquire(self):
        self.acquired += 1
        return self.conn

    def release(self, conn):
        assert conn is self.conn
        self.released += 1


@pytest.fixture
def conn(monkeypatch):
    """A FakeConnection; execute_batch is redirected to record into it."""
    connection = FakeConnection()

    def _execute_batch(cur, sql, argslist, page_size=100):
        cur.connection.batches.append((sql, [list(args) for args in argslist]))
        if cur.connection.fail_with is not None:
            raise cur.connection.fail_with

    monkeypatch.setattr(entity_dao, "execute_batch", _execute_batch)
    return connection


@pytest.fixture
def pool(conn):
    return FakePool(conn)
