"""Typed reads for admin listings."""

from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel

from tripmate.infra.repositories.entity_store import EntityStore, View

from .collections import CATEGORIES, CollectionSpec, get_collection
from .entities import Category

UNCATEGORIZED = "Uncategorized"


def list_records(
    store: EntityStore,
    collection: str | CollectionSpec,
    view: View = "all",
) -> list[BaseModel]:
    """Fetch rows and validate each one against the collection's model.

    Raises:
        pydantic.ValidationError: If a stored row does not fit its schema.
    """
    spec = collection if isinstance(collection, CollectionSpec) else get_collection(collection)
    return [spec.model.model_validate(row) for row in store.query(spec, view)]


def category_names(store: EntityStore) -> dict[str, str]:
    categories: Iterable[Category] = list_records(store, CATEGORIES)  # type: ignore[assignment]
    return {c.id: c.name for c in categories}


def category_label(category_id: str | None, names: dict[str, str]) -> str:
    """Display name for a post's category.

    Posts keep their category_id after the category is deleted, so a missing
    category falls back to "Uncategorized" rather than failing.
    """
    if not category_id:
        return UNCATEGORIZED
    return names.get(category_id, UNCATEGORIZED)
