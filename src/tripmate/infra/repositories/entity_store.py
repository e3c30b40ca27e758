"""Entity store - row access for every stored collection.

Uses raw SQL with psycopg2 (no ORM). Table and column names come from the
collection registry, never from callers, so the f-string SQL below only ever
interpolates whitelisted identifiers.

The store exposes the small surface the trash lifecycle is built on:

  query(spec, view)                   → rows, optionally filtered on deleted_at
  set_field(spec, id, field, value)   → single-row update
  set_field_many(spec, ids, ...)      → all-or-nothing multi-row update
  delete(spec, id)                    → single hard delete
  trashed_ids(spec)                   → snapshot of trashed ids
  batch_delete(spec, ids)             → all-or-nothing multi-row delete

psycopg2 errors are translated into the store errors defined here, so callers
never need to know which driver is underneath.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator, Literal, Protocol, Sequence

import psycopg2
from psycopg2 import errors as pg_errors

from tripmate.domain.collections import UntrashableCollectionError
from tripmate.infra.db import DatabaseNotConfiguredError, rows_as_dicts, txn

if TYPE_CHECKING:
    from tripmate.domain.collections import CollectionSpec

View = Literal["all", "active", "trash"]

# Largest number of ids sent in a single statement.
MAX_BATCH_SIZE = 500


class _ServerTimestamp:
    """Sentinel asking the store to write its own clock (now())."""

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP: Any = _ServerTimestamp()


class StoreError(Exception):
    """The store could not complete the operation (connectivity or unknown)."""


class StorePermissionError(StoreError):
    """The database role lacks privileges for the operation."""


class DuplicateEntityError(StoreError):
    """An insert collided with a unique constraint (e.g. slug)."""


class EntityNotFoundError(LookupError):
    """One or more targeted ids do not exist."""

    def __init__(self, collection: str, ids: Sequence[str]):
        self.collection = collection
        self.ids = list(ids)
        super().__init__(f"{collection}: {', '.join(self.ids)}")


class EntityStore(Protocol):
    """What the domain layer needs from a store."""

    def query(self, spec: CollectionSpec, view: View = "all") -> list[dict[str, Any]]: ...

    def get(self, spec: CollectionSpec, entity_id: str) -> dict[str, Any] | None: ...

    def insert(self, spec: CollectionSpec, values: dict[str, Any]) -> dict[str, Any]: ...

    def set_field(self, spec: CollectionSpec, entity_id: str, field: str, value: Any) -> None: ...

    def set_field_many(
        self, spec: CollectionSpec, ids: Sequence[str], field: str, value: Any
    ) -> int: ...

    def delete(self, spec: CollectionSpec, entity_id: str) -> None: ...

    def trashed_ids(self, spec: CollectionSpec) -> list[str]: ...

    def batch_delete(self, spec: CollectionSpec, ids: Sequence[str]) -> int: ...


def _pg_detail(exc: psycopg2.Error) -> str:
    diag = getattr(exc, "diag", None)
    primary = getattr(diag, "message_primary", None) if diag is not None else None
    return primary or (exc.pgerror or str(exc)).strip()


@contextmanager
def _translate_errors() -> Iterator[None]:
    try:
        yield
    except DatabaseNotConfiguredError as exc:
        raise StoreError(str(exc)) from exc
    except pg_errors.InsufficientPrivilege as exc:
        raise StorePermissionError(_pg_detail(exc)) from exc
    except pg_errors.UniqueViolation as exc:
        raise DuplicateEntityError(_pg_detail(exc)) from exc
    except psycopg2.Error as exc:
        raise StoreError(_pg_detail(exc)) from exc


def _check_field(spec: CollectionSpec, field: str) -> None:
    if field == "id" or field not in spec.columns:
        raise ValueError(f"{spec.name} has no writable field {field!r}")


def _value_sql(value: Any) -> tuple[str, tuple[Any, ...]]:
    """SQL placeholder and params for a value, honouring SERVER_TIMESTAMP."""
    if value is SERVER_TIMESTAMP:
        return "now()", ()
    return "%s", (value,)


def _where_view(spec: CollectionSpec, view: View) -> str:
    if view == "all":
        return ""
    if not spec.trashable:
        raise UntrashableCollectionError(spec.name)
    if view == "active":
        return "WHERE deleted_at IS NULL"
    return "WHERE deleted_at IS NOT NULL"


class PgEntityStore:
    """Postgres-backed entity store. Each call runs in its own transaction."""

    def query(self, spec: CollectionSpec, view: View = "all") -> list[dict[str, Any]]:
        columns = spec.columns
        with _translate_errors(), txn() as cur:
            cur.execute(
                f"""
                SELECT {", ".join(columns)}
                FROM {spec.table}
                {_where_view(spec, view)}
                ORDER BY {spec.order_by}
                """  # noqa: S608 – identifiers come from the collection registry
            )
            return rows_as_dicts(columns, cur.fetchall())

    def get(self, spec: CollectionSpec, entity_id: str) -> dict[str, Any] | None:
        columns = spec.columns
        with _translate_errors(), txn() as cur:
            cur.execute(
                f"SELECT {', '.join(columns)} FROM {spec.table} WHERE id = %s",  # noqa: S608
                (entity_id,),
            )
            row = cur.fetchone()
        if row is None:
            return None
        return dict(zip(columns, row))

    def insert(self, spec: CollectionSpec, values: dict[str, Any]) -> dict[str, Any]:
        """Insert a row; columns left out take their database defaults."""
        for field in values:
            _check_field(spec, field)
        columns = spec.columns
        names = list(values)
        placeholders = ", ".join(["%s"] * len(names))
        with _translate_errors(), txn() as cur:
            cur.execute(
                f"""
                INSERT INTO {spec.table} ({", ".join(names)})
                VALUES ({placeholders})
                RETURNING {", ".join(columns)}
                """,  # noqa: S608
                [values[name] for name in names],
            )
            row = cur.fetchone()
        return dict(zip(columns, row))

    def set_field(self, spec: CollectionSpec, entity_id: str, field: str, value: Any) -> None:
        _check_field(spec, field)
        value_sql, params = _value_sql(value)
        with _translate_errors(), txn() as cur:
            cur.execute(
                f"UPDATE {spec.table} SET {field} = {value_sql} WHERE id = %s RETURNING id",  # noqa: S608
                (*params, entity_id),
            )
            if cur.fetchone() is None:
                raise EntityNotFoundError(spec.name, [entity_id])

    def set_field_many(
        self, spec: CollectionSpec, ids: Sequence[str], field: str, value: Any
    ) -> int:
        """Update every id or none of them.

        Raises:
            EntityNotFoundError: If any id is missing; the transaction is
                rolled back so no row changes.
        """
        _check_field(spec, field)
        wanted = list(dict.fromkeys(ids))
        if not wanted:
            return 0
        if len(wanted) > MAX_BATCH_SIZE:
            raise ValueError(f"At most {MAX_BATCH_SIZE} ids per batch")
        value_sql, params = _value_sql(value)
        with _translate_errors(), txn() as cur:
            cur.execute(
                f"UPDATE {spec.table} SET {field} = {value_sql} WHERE id = ANY(%s) RETURNING id",  # noqa: S608
                (*params, wanted),
            )
            updated = {row[0] for row in cur.fetchall()}
            missing = [i for i in wanted if i not in updated]
            if missing:
                raise EntityNotFoundError(spec.name, missing)
        return len(updated)

    def delete(self, spec: CollectionSpec, entity_id: str) -> None:
        with _translate_errors(), txn() as cur:
            cur.execute(
                f"DELETE FROM {spec.table} WHERE id = %s RETURNING id",  # noqa: S608
                (entity_id,),
            )
            if cur.fetchone() is None:
                raise EntityNotFoundError(spec.name, [entity_id])

    def trashed_ids(self, spec: CollectionSpec) -> list[str]:
        with _translate_errors(), txn() as cur:
            cur.execute(
                f"SELECT id FROM {spec.table} {_where_view(spec, 'trash')} ORDER BY id"  # noqa: S608
            )
            return [row[0] for row in cur.fetchall()]

    def batch_delete(self, spec: CollectionSpec, ids: Sequence[str]) -> int:
        """Delete all ids in one transaction, chunked by MAX_BATCH_SIZE.

        Ids that no longer exist are skipped. Returns the number of rows removed.
        """
        wanted = list(dict.fromkeys(ids))
        removed = 0
        with _translate_errors(), txn() as cur:
            for start in range(0, len(wanted), MAX_BATCH_SIZE):
                chunk = wanted[start:start + MAX_BATCH_SIZE]
                cur.execute(
                    f"DELETE FROM {spec.table} WHERE id = ANY(%s)",  # noqa: S608
                    (chunk,),
                )
                removed += cur.rowcount
        return removed
