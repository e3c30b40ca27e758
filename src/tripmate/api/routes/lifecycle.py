"""Router factory for trashable collections.

Every trashable collection gets the same endpoints:

GET    /{c}?view=active|trash     → list              (staff+)
POST   /{c}                       → create            (staff+, when a schema is given)
POST   /{c}/trash                 → trash selection   (staff+)
POST   /{c}/restore               → restore selection (staff+)
DELETE /{c}?view=trash            → empty trash       (admin+)
GET    /{c}/{id}                  → read one          (staff+)
POST   /{c}/{id}/trash            → move to trash     (staff+)
POST   /{c}/{id}/restore          → restore           (staff+)
DELETE /{c}/{id}                  → delete forever    (admin+)

Lifecycle endpoints answer ``{"success": bool, "message": str}`` and use the
HTTP status to mirror the failure kind. Asking the admin to confirm before a
permanent delete is the client's job.

Collection-level actions never share a path shape with a per-record route,
so any id (including "trash" or "restore") addresses its record.
"""

from typing import Any, Callable, Literal

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from tripmate.api.rbac import RoleContext, require_role
from tripmate.api.store import get_store
from tripmate.domain import trash as lifecycle
from tripmate.domain.collections import (
    CollectionSpec,
    UntrashableCollectionError,
    get_collection,
)
from tripmate.domain.listing import list_records
from tripmate.infra.repositories.entity_store import (
    DuplicateEntityError,
    EntityStore,
    StoreError,
)
from tripmate.infra.time import utc_now
from tripmate.observability.logging import get_logger

logger = get_logger(__name__)

ListDecorator = Callable[[EntityStore, list[dict[str, Any]]], list[dict[str, Any]]]

_STATUS_BY_KIND = {
    "ok": 200,
    "not_found": 404,
    "permission_denied": 403,
    "too_many": 409,
    "unavailable": 503,
}


class BulkSelection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    ids: list[str]


# ── Helpers ───────────────────────────────────────────────────────────────────


def result_response(result: lifecycle.TrashResult) -> JSONResponse:
    return JSONResponse(status_code=_STATUS_BY_KIND[result.kind], content=result.to_dict())


def serialize(record: BaseModel, retention: int | None = None) -> dict[str, Any]:
    """Dump a record for the API; trashed records also get ``days_left``."""
    body = record.model_dump(mode="json")
    deleted_at = getattr(record, "deleted_at", None)
    if deleted_at is not None:
        if retention is None:
            retention = lifecycle.retention_days()
        body["days_left"] = lifecycle.days_left_in_trash(deleted_at, utc_now(), retention)
    return body


def create_record(store: EntityStore, spec: CollectionSpec, body: BaseModel) -> dict[str, Any]:
    """Insert a validated request body as a new Active record.

    Raises:
        HTTPException: 409 on a duplicate slug, 503 if the store fails.
    """
    values = body.model_dump(exclude_none=True)
    try:
        row = store.insert(spec, values)
    except DuplicateEntityError:
        raise HTTPException(status_code=409, detail=f"{spec.label} already exists")
    except StoreError as exc:
        logger.exception(
            "create failed",
            extra={"extra_fields": {"collection": spec.name, "error": str(exc)}},
        )
        raise HTTPException(status_code=503, detail=f"Failed to create {spec.noun}")

    record = spec.model.model_validate(row)
    logger.info(
        "record created",
        extra={"extra_fields": {"collection": spec.name, "entity_id": record.id}},
    )
    return serialize(record)


# ── Factory ───────────────────────────────────────────────────────────────────


def build_lifecycle_router(
    collection: str,
    create_schema: type[BaseModel] | None = None,
    *,
    decorate_list: ListDecorator | None = None,
) -> APIRouter:
    """Build the router for one trashable collection.

    Args:
        collection: Registered collection name.
        create_schema: Request body for POST /{c}; no create route when None.
        decorate_list: Optional hook that enriches listed items (e.g. labels
            resolved from another collection).
    """
    spec = get_collection(collection)
    if not spec.trashable:
        raise UntrashableCollectionError(collection)

    router = APIRouter(prefix=f"/{spec.name}", tags=[spec.name])

    @router.get("")
    def list_entities(
        view: Literal["active", "trash"] = Query("active"),
        ctx: RoleContext = Depends(require_role("staff")),
        store: EntityStore = Depends(get_store),
    ) -> list[dict]:
        """List active records, or the trash with ``view=trash``."""
        try:
            records = list_records(store, spec, view)
        except StoreError:
            raise HTTPException(status_code=503, detail=f"Failed to load {spec.plural}")
        retention = lifecycle.retention_days()
        items = [serialize(r, retention) for r in records]
        if decorate_list is not None:
            items = decorate_list(store, items)
        return items

    if create_schema is not None:

        @router.post("", status_code=201)
        def create_entity(
            body: create_schema,  # type: ignore[valid-type]
            ctx: RoleContext = Depends(require_role("staff")),
            store: EntityStore = Depends(get_store),
        ) -> dict:
            return create_record(store, spec, body)

    @router.post("/trash")
    def trash_selection(
        body: BulkSelection,
        ctx: RoleContext = Depends(require_role("staff")),
        store: EntityStore = Depends(get_store),
    ) -> JSONResponse:
        return result_response(lifecycle.trash_many(store, spec, body.ids))

    @router.post("/restore")
    def restore_selection(
        body: BulkSelection,
        ctx: RoleContext = Depends(require_role("staff")),
        store: EntityStore = Depends(get_store),
    ) -> JSONResponse:
        return result_response(lifecycle.restore_many(store, spec, body.ids))

    @router.delete("")
    def empty_trash(
        view: Literal["trash"] = Query(..., description="Only the trash can be emptied"),
        ctx: RoleContext = Depends(require_role("admin")),
        store: EntityStore = Depends(get_store),
    ) -> JSONResponse:
        return result_response(lifecycle.empty_trash(store, spec))

    @router.get("/{entity_id}")
    def get_entity(
        entity_id: str = Path(...),
        ctx: RoleContext = Depends(require_role("staff")),
        store: EntityStore = Depends(get_store),
    ) -> dict:
        try:
            row = store.get(spec, entity_id)
        except StoreError:
            raise HTTPException(status_code=503, detail=f"Failed to load {spec.noun}")
        if row is None:
            raise HTTPException(status_code=404, detail=f"{spec.label} not found")
        return serialize(spec.model.model_validate(row))

    @router.post("/{entity_id}/trash")
    def trash_entity(
        entity_id: str = Path(...),
        ctx: RoleContext = Depends(require_role("staff")),
        store: EntityStore = Depends(get_store),
    ) -> JSONResponse:
        return result_response(lifecycle.trash(store, spec, entity_id))

    @router.post("/{entity_id}/restore")
    def restore_entity(
        entity_id: str = Path(...),
        ctx: RoleContext = Depends(require_role("staff")),
        store: EntityStore = Depends(get_store),
    ) -> JSONResponse:
        return result_response(lifecycle.restore(store, spec, entity_id))

    @router.delete("/{entity_id}")
    def delete_entity(
        entity_id: str = Path(...),
        ctx: RoleContext = Depends(require_role("admin")),
        store: EntityStore = Depends(get_store),
    ) -> JSONResponse:
        return result_response(lifecycle.hard_delete(store, spec, entity_id))

    return router
