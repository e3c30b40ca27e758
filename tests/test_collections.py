"""Tests for the collection registry and listing helpers."""

import pytest
from pydantic import ValidationError

from tripmate.domain.collections import (
    COLLECTIONS,
    CONTACT_MESSAGES,
    TRASHABLE_COLLECTIONS,
    UnknownCollectionError,
    UntrashableCollectionError,
    get_collection,
)
from tripmate.domain.entities import Package
from tripmate.domain.listing import UNCATEGORIZED, category_label


class TestRegistry:
    def test_trashable_collections(self):
        assert set(TRASHABLE_COLLECTIONS) == {
            "packages",
            "posts",
            "bookings",
            "contactMessages",
            "media",
            "pages",
        }

    def test_every_trashable_model_has_deleted_at(self):
        for name in TRASHABLE_COLLECTIONS:
            assert "deleted_at" in COLLECTIONS[name].columns

    def test_api_name_differs_from_table(self):
        spec = get_collection("contactMessages")
        assert spec is CONTACT_MESSAGES
        assert spec.table == "contact_messages"
        assert spec.label == "Message"

    def test_unknown_collection(self):
        with pytest.raises(UnknownCollectionError):
            get_collection("spaceships")

    def test_untrashable_collection_has_no_lifecycle_router(self):
        from tripmate.api.routes.lifecycle import build_lifecycle_router

        with pytest.raises(UntrashableCollectionError) as exc_info:
            build_lifecycle_router("categories")
        assert exc_info.value.collection == "categories"


class TestRecords:
    def test_trash_state_is_not_a_record_property(self):
        # Trash state is read through domain.trash.is_trashed only
        assert not hasattr(Package, "is_trashed")

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            Package.model_validate(
                {
                    "id": "p",
                    "slug": "p",
                    "title": "P",
                    "type": "Tour",
                    "destination": "Rome",
                    "duration": 3,
                    "price": 1.0,
                    "trashed": True,
                }
            )


class TestCategoryLabel:
    def test_known(self):
        assert category_label("c1", {"c1": "Travel Tips"}) == "Travel Tips"

    @pytest.mark.parametrize("category_id", [None, "", "deleted"])
    def test_fallback(self, category_id):
        assert category_label(category_id, {"c1": "Travel Tips"}) == UNCATEGORIZED
