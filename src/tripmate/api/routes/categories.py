"""Blog category endpoints.

GET    /categories          → list   (staff+)
POST   /categories          → create (staff+)
DELETE /categories/{id}     → delete (admin+)

Categories have no trash: DELETE removes the row at once. Posts that still
reference a deleted category are not touched and list as "Uncategorized".
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel, ConfigDict, Field

from tripmate.api.rbac import RoleContext, require_role
from tripmate.api.store import get_store
from tripmate.domain.collections import CATEGORIES
from tripmate.domain.listing import list_records
from tripmate.infra.repositories.entity_store import (
    EntityNotFoundError,
    EntityStore,
    StoreError,
)
from tripmate.observability.logging import get_logger

from .lifecycle import create_record

logger = get_logger(__name__)

router = APIRouter(prefix="/categories", tags=["categories"])


class CreateCategoryRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    slug: str = Field(min_length=1)


@router.get("")
def list_categories(
    ctx: RoleContext = Depends(require_role("staff")),
    store: EntityStore = Depends(get_store),
) -> list[dict]:
    """List categories ordered by name."""
    try:
        records = list_records(store, CATEGORIES)
    except StoreError:
        raise HTTPException(status_code=503, detail="Failed to load categories")
    return [r.model_dump(mode="json") for r in records]


@router.post("", status_code=201)
def create_category(
    body: CreateCategoryRequest,
    ctx: RoleContext = Depends(require_role("staff")),
    store: EntityStore = Depends(get_store),
) -> dict:
    return create_record(store, CATEGORIES, body)


@router.delete("/{category_id}", status_code=204)
def delete_category(
    category_id: str = Path(..., description="Category ID"),
    ctx: RoleContext = Depends(require_role("admin")),
    store: EntityStore = Depends(get_store),
) -> None:
    try:
        store.delete(CATEGORIES, category_id)
    except EntityNotFoundError:
        raise HTTPException(status_code=404, detail="Category not found")
    except StoreError as exc:
        logger.exception(
            "category delete failed",
            extra={"extra_fields": {"category_id": category_id, "error": str(exc)}},
        )
        raise HTTPException(status_code=503, detail="Failed to delete category")
    logger.info(
        "category deleted",
        extra={"extra_fields": {"category_id": category_id}},
    )
