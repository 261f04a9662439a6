"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool so that concurrent callers each get
their own connection. Connections are handed out in explicit-transaction
mode: commit and rollback are the caller's job, never the pool's.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from utils.logger import get_logger

logger = get_logger(__name__)


class ConnectionPool:
    """Thread-safe pool of transactional psycopg2 connections."""

    def __init__(self, dsn: str, min_conn: int = 1, max_conn: int = 10):
        """
        Open the pool.

        Args:
            dsn: libpq connection string or URL.
            min_conn: Minimum number of connections to keep open.
            max_conn: Maximum number of connections allowed.

        Raises:
            psycopg2.OperationalError: If the database is unreachable.
        """
        self._pool = pool.ThreadedConnectionPool(min_conn, max_conn, dsn)

    def acquire(self):
        """
        Take a connection out of the pool.

        Returns:
            A psycopg2 connection with autocommit disabled.

        Raises:
            psycopg2.pool.PoolError: If the pool is exhausted or closed.
        """
        conn = self._pool.getconn()
        try:
            conn.autocommit = False
        except psycopg2.Error:
            self._pool.putconn(conn, close=True)
            raise
        return conn

    def release(self, conn) -> None:
        """
        Return a connection to the pool.

        Any transaction still open on the connection is rolled back by psycopg2.
        Releasing a connection that is not checked out (double release) is
        logged and ignored.
        """
        try:
            self._pool.putconn(conn)
        except pool.PoolError as e:
            logger.warning(f"Ignored release of a connection not owned by the pool: {e}")

    @contextmanager
    def connection(self) -> Iterator:
        """Acquire a connection for the duration of a ``with`` block."""
        conn = self.acquire()
        try:
            yield conn
        finally:
            self.release(conn)

    def close(self) -> None:
        """Close all connections in the pool."""
        self._pool.closeall()

    @property
    def closed(self) -> bool:
        return self._pool.closed


_pool: Optional[ConnectionPool] = None


def init_pool(min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX, dsn: str = DATABASE_URL) -> ConnectionPool:
    """
    Initialize the process-wide connection pool.

    Safe to call more than once; the first pool created is kept.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return _pool
    try:
        _pool = ConnectionPool(dsn, min_conn, max_conn)
        logger.info("Database connection pool initialized successfully.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise
    return _pool


def get_pool() -> ConnectionPool:
    """
    Return the process-wide pool.

    Raises:
        RuntimeError: If the pool has not been initialized.
    """
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _pool


def get_connection():
    """Get a connection from the process-wide pool."""
    return get_pool().acquire()


def release_connection(conn) -> None:
    """
    Return a connection back to the process-wide pool.

    Args:
        conn: The psycopg2 connection to release.
    """
    if _pool is not None:
        _pool.release(conn)


def close_pool() -> None:
    """Close all connections in the process-wide pool."""
    global _pool
    if _pool is not None:
        _pool.close()
        _pool = None
        logger.info("Database connection pool closed.")
