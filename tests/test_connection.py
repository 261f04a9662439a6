"""Tests for the connection pool wrapper and the process-wide pool lifecycle."""
import psycopg2
import pytest
from psycopg2 import pool as pg_pool

from db import connection as db_connection
from db.connection import ConnectionPool


class StubConnection:
    autocommit = True
    closed = False


class BrokenConnection(StubConnection):
    """A connection whose server went away: any setting change fails."""

    @property
    def autocommit(self):
        return True

    @autocommit.setter
    def autocommit(self, value):
        raise psycopg2.InterfaceError("connection already closed")


class StubThreadedPool:
    """Mimics psycopg2's pool bookkeeping without a database."""

    connection_cls = StubConnection

    def __init__(self, min_conn, max_conn, dsn):
        self.dsn = dsn
        self.closed = False
        self._used = set()

    def getconn(self):
        conn = self.connection_cls()
        self._used.add(id(conn))
        return conn

    def putconn(self, conn, key=None, close=False):
        if id(conn) not in self._used:
            raise pg_pool.PoolError("trying to put unkeyed connection")
        self._used.discard(id(conn))
        if close:
            conn.closed = True

    def closeall(self):
        self.closed = True


@pytest.fixture
def stub_pool(monkeypatch):
    monkeypatch.setattr(db_connection.pool, "ThreadedConnectionPool", StubThreadedPool)
    monkeypatch.setattr(db_connection, "_pool", None)


def test_acquire_disables_autocommit(stub_pool):
    conn = ConnectionPool("postgresql://test").acquire()

    assert conn.autocommit is False


def test_double_release_is_ignored(stub_pool, caplog):
    pool = ConnectionPool("postgresql://test")
    conn = pool.acquire()

    pool.release(conn)
    pool.release(conn)

    assert "not owned by the pool" in caplog.text


def test_connection_context_releases_on_error(stub_pool):
    pool = ConnectionPool("postgresql://test")

    with pytest.raises(KeyError):
        with pool.connection() as conn:
            raise KeyError("boom")

    assert id(conn) not in pool._pool._used


def test_process_pool_lifecycle(stub_pool):
    with pytest.raises(RuntimeError):
        db_connection.get_pool()

    created = db_connection.init_pool(dsn="postgresql://test")

    assert db_connection.init_pool() is created
    assert db_connection.get_pool() is created
    conn = db_connection.get_connection()
    db_connection.release_connection(conn)

    db_connection.close_pool()
    assert created.closed
    with pytest.raises(RuntimeError):
        db_connection.get_pool()


def test_failed_acquire_returns_connection_to_pool(stub_pool, monkeypatch):
    pool = ConnectionPool("postgresql://test")
    monkeypatch.setattr(pool._pool, "connection_cls", BrokenConnection)

    with pytest.raises(psycopg2.InterfaceError):
        pool.acquire()

    assert pool._pool._used == set()
