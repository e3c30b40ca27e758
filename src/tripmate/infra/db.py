"""Database access layer using psycopg2.

Provides:
- get_conn(): Get a database connection from DATABASE_URL
- txn(): Context manager for short, safe transactions
- rows_as_dicts(): Map cursor rows to column-keyed dicts
"""

import os
from contextlib import contextmanager
from typing import Any, Iterator, Sequence
from urllib.parse import urlparse

import psycopg2
from psycopg2.extensions import connection as PgConnection, cursor as PgCursor


class DatabaseNotConfiguredError(RuntimeError):
    """DATABASE_URL is not set, so no connection can be opened."""


def _dsn_has_password(dsn: str) -> bool:
    """Tell whether a libpq DSN or a postgres URL already carries a password."""
    if "://" in dsn:
        return bool(urlparse(dsn).password)
    return any(token.startswith("password=") for token in dsn.split())


def get_conn() -> PgConnection:
    """Get a new database connection from DATABASE_URL.

    When the DSN has no password and DB_PASSWORD is set, the password is
    passed separately so it never has to live inside DATABASE_URL.

    Returns:
        psycopg2 connection object.

    Raises:
        DatabaseNotConfiguredError: If DATABASE_URL is not set.
        psycopg2.Error: On connection failure.
    """
    dsn = os.environ.get("DATABASE_URL")
    if not dsn:
        raise DatabaseNotConfiguredError("DATABASE_URL environment variable not set")

    db_password = os.environ.get("DB_PASSWORD")
    if db_password and not _dsn_has_password(dsn):
        return psycopg2.connect(dsn, password=db_password)
    return psycopg2.connect(dsn)


@contextmanager
def txn(conn: PgConnection | None = None) -> Iterator[PgCursor]:
    """Context manager for a short, safe transaction.

    If conn is None, creates a new connection that is closed on exit.
    Commits on successful exit, rolls back on exception.

    Example:
        with txn() as cur:
            cur.execute("UPDATE posts SET deleted_at = now() WHERE id = %s", (post_id,))
    """
    owns_conn = conn is None
    if owns_conn:
        conn = get_conn()

    try:
        with conn.cursor() as cur:
            yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        if owns_conn:
            conn.close()


def rows_as_dicts(columns: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> list[dict[str, Any]]:
    """Zip each row with the selected column names.

    Args:
        columns: Column names in SELECT order.
        rows: Row tuples as returned by fetchall().

    Returns:
        One dict per row, keyed by column name.
    """
    return [dict(zip(columns, row)) for row in rows]
