"""Trash lifecycle for soft-deletable records.

Every trashable record is either Active (deleted_at is NULL) or Trashed
(deleted_at holds the time it was trashed):

        trash()            restore()
  Active -----------> Trashed ----------> Active
                         |
                         | hard_delete() / empty_trash()
                         v
                     [Removed]

The operators never raise for store failures. They return a TrashResult
that the HTTP layer renders as ``{"success": ..., "message": ...}``. Nothing
is retried: a failed call is final and the user re-issues it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Iterable, Literal, Sequence, TypeVar

from tripmate.infra.repositories.entity_store import (
    MAX_BATCH_SIZE,
    SERVER_TIMESTAMP,
    EntityNotFoundError,
    EntityStore,
    StoreError,
    StorePermissionError,
)
from tripmate.infra.time import days_elapsed
from tripmate.observability.logging import get_logger

from .collections import CollectionSpec, UntrashableCollectionError, get_collection

logger = get_logger(__name__)

DEFAULT_RETENTION_DAYS = 30

ResultKind = Literal["ok", "not_found", "permission_denied", "too_many", "unavailable"]

R = TypeVar("R")


@dataclass(frozen=True)
class TrashResult:
    """Outcome of a lifecycle operation.

    Attributes:
        success: Whether the operation took effect.
        message: Human-readable outcome, shown to the admin as-is.
        kind: Failure category ("ok" on success).
        count: Rows affected, for bulk operations only.
    """

    success: bool
    message: str
    kind: ResultKind = "ok"
    count: int | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"success": self.success, "message": self.message}
        if self.count is not None:
            body["count"] = self.count
        return body


# ── Trash filter ──────────────────────────────────────────────────────────────


def is_active(record: Any) -> bool:
    return getattr(record, "deleted_at", None) is None


def is_trashed(record: Any) -> bool:
    return not is_active(record)


def partition(records: Iterable[R]) -> tuple[list[R], list[R]]:
    """Split records into (active, trashed), keeping input order in each."""
    active: list[R] = []
    trashed: list[R] = []
    for record in records:
        (active if is_active(record) else trashed).append(record)
    return active, trashed


def retention_days() -> int:
    """Days an item stays in trash before it is due for purge (TRASH_RETENTION_DAYS)."""
    raw = os.environ.get("TRASH_RETENTION_DAYS", "")
    try:
        return int(raw) if raw.strip() else DEFAULT_RETENTION_DAYS
    except ValueError:
        return DEFAULT_RETENTION_DAYS


def days_left_in_trash(deleted_at: datetime, now: datetime, retention: int) -> int:
    """Days remaining before a trashed item is due for purge (may be negative)."""
    return retention - days_elapsed(deleted_at, now)


# ── Operators ─────────────────────────────────────────────────────────────────


def _resolve(collection: str | CollectionSpec) -> CollectionSpec:
    spec = collection if isinstance(collection, CollectionSpec) else get_collection(collection)
    if not spec.trashable:
        raise UntrashableCollectionError(spec.name)
    return spec


def _guarded(
    spec: CollectionSpec,
    action: str,
    failure: str,
    op: Callable[[], TrashResult],
    **log_fields: Any,
) -> TrashResult:
    """Run op, turning store failures into a failed TrashResult."""
    fields = {"collection": spec.name, "action": action, **log_fields}
    try:
        result = op()
    except EntityNotFoundError as exc:
        logger.warning(
            "trash operation target not found",
            extra={"extra_fields": {**fields, "missing_ids": exc.ids}},
        )
        if len(exc.ids) > 1:
            return TrashResult(False, f"{len(exc.ids)} {spec.plural} not found.", "not_found")
        return TrashResult(False, f"{spec.label} not found.", "not_found")
    except StorePermissionError as exc:
        logger.warning(
            "trash operation denied by store",
            extra={"extra_fields": {**fields, "error": str(exc)}},
        )
        return TrashResult(False, f"Permission denied: {exc}", "permission_denied")
    except StoreError as exc:
        logger.exception(
            "trash operation failed",
            extra={"extra_fields": {**fields, "error": str(exc)}},
        )
        return TrashResult(False, failure, "unavailable")

    logger.info(
        "trash operation applied",
        extra={"extra_fields": {**fields, "count": result.count}},
    )
    return result


def trash(store: EntityStore, collection: str | CollectionSpec, entity_id: str) -> TrashResult:
    """Move one record to trash by stamping deleted_at with server time.

    Trashing a record that is already trashed refreshes the timestamp.
    """
    spec = _resolve(collection)

    def op() -> TrashResult:
        store.set_field(spec, entity_id, "deleted_at", SERVER_TIMESTAMP)
        return TrashResult(True, f"{spec.label} moved to trash.")

    return _guarded(spec, "trash", f"Failed to move {spec.noun} to trash.", op, entity_id=entity_id)


def restore(store: EntityStore, collection: str | CollectionSpec, entity_id: str) -> TrashResult:
    """Bring a trashed record back. Restoring an active record is a no-op."""
    spec = _resolve(collection)

    def op() -> TrashResult:
        store.set_field(spec, entity_id, "deleted_at", None)
        return TrashResult(True, f"{spec.label} restored.")

    return _guarded(spec, "restore", f"Failed to restore {spec.noun}.", op, entity_id=entity_id)


def hard_delete(store: EntityStore, collection: str | CollectionSpec, entity_id: str) -> TrashResult:
    """Remove one record permanently, whatever its state."""
    spec = _resolve(collection)

    def op() -> TrashResult:
        store.delete(spec, entity_id)
        return TrashResult(True, f"{spec.label} permanently deleted.")

    return _guarded(spec, "hard_delete", f"Failed to delete {spec.noun}.", op, entity_id=entity_id)


def _bulk_set_deleted_at(
    store: EntityStore,
    spec: CollectionSpec,
    ids: Sequence[str],
    value: Any,
    action: str,
    done: str,
    failure: str,
) -> TrashResult:
    wanted = list(dict.fromkeys(ids))
    if not wanted:
        return TrashResult(True, f"No {spec.plural} selected.", count=0)
    if len(wanted) > MAX_BATCH_SIZE:
        return TrashResult(
            False,
            f"Select at most {MAX_BATCH_SIZE} {spec.plural} at a time.",
            "too_many",
        )

    def op() -> TrashResult:
        count = store.set_field_many(spec, wanted, "deleted_at", value)
        return TrashResult(True, f"{count} {spec.noun}(s) {done}.", count=count)

    return _guarded(spec, action, failure, op, requested=len(wanted))


def trash_many(store: EntityStore, collection: str | CollectionSpec, ids: Sequence[str]) -> TrashResult:
    """Move a selection to trash in one transaction; any unknown id cancels all."""
    spec = _resolve(collection)
    return _bulk_set_deleted_at(
        store, spec, ids, SERVER_TIMESTAMP, "trash_many", "moved to trash",
        f"Failed to move {spec.plural} to trash.",
    )


def restore_many(store: EntityStore, collection: str | CollectionSpec, ids: Sequence[str]) -> TrashResult:
    """Restore a selection in one transaction; any unknown id cancels all."""
    spec = _resolve(collection)
    return _bulk_set_deleted_at(
        store, spec, ids, None, "restore_many", "restored", f"Failed to restore {spec.plural}."
    )


def empty_trash(store: EntityStore, collection: str | CollectionSpec) -> TrashResult:
    """Permanently delete everything currently in a collection's trash.

    The set of trashed ids is read first and exactly that set is deleted in
    one transaction. Records trashed after the snapshot stay in trash.
    """
    spec = _resolve(collection)

    def op() -> TrashResult:
        ids = store.trashed_ids(spec)
        if not ids:
            return TrashResult(True, "Trash is already empty.", count=0)
        removed = store.batch_delete(spec, ids)
        return TrashResult(
            True,
            f"Successfully emptied trash for {spec.name}.",
            count=removed,
        )

    return _guarded(spec, "empty_trash", f"Failed to empty trash for {spec.plural}.", op)
