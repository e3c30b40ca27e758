"""Blog post endpoints.

Listings carry a ``category`` label next to ``category_id``. Categories can
be deleted while posts still point at them; such posts (and posts with no
category) are labelled "Uncategorized".
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tripmate.domain.listing import category_label, category_names
from tripmate.infra.repositories.entity_store import EntityStore, StoreError
from tripmate.observability.logging import get_logger

from .lifecycle import build_lifecycle_router

logger = get_logger(__name__)


class CreatePostRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    slug: str = Field(min_length=1)
    title: str = Field(min_length=1)
    content: str = ""
    featured_image_url: str | None = None
    author_id: str | None = None
    published_at: datetime | None = None
    category_id: str | None = None


def _with_category_labels(store: EntityStore, items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    try:
        names = category_names(store)
    except StoreError as exc:
        logger.warning(
            "category lookup failed, labelling posts as uncategorized",
            extra={"extra_fields": {"error": str(exc)}},
        )
        names = {}
    for item in items:
        item["category"] = category_label(item.get("category_id"), names)
    return items


router = build_lifecycle_router(
    "posts",
    CreatePostRequest,
    decorate_list=_with_category_labels,
)
