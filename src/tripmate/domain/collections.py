"""Registry of stored collections.

Each collection maps an API-facing name (kept from the original document
store, e.g. ``contactMessages``) to its table, record model and default
listing order. Table and column names used in SQL come only from here.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

from .entities import Booking, Category, ContactMessage, MediaFile, Package, Page, Post


class UnknownCollectionError(KeyError):
    """Raised when a collection name is not in the registry."""


class UntrashableCollectionError(ValueError):
    """Raised when a trash operation or view targets a collection without deleted_at."""

    def __init__(self, collection: str):
        self.collection = collection
        super().__init__(f"{collection} does not support trash")


@dataclass(frozen=True)
class CollectionSpec:
    """Static description of one collection.

    Attributes:
        name: Collection name as exposed by the API.
        table: Backing table.
        noun: Singular, lower-case name used in user-facing messages.
        plural: Plural of noun.
        model: Record model; its field names are the table's columns.
        order_by: ORDER BY clause for listings.
        trashable: Whether rows carry deleted_at.
    """

    name: str
    table: str
    noun: str
    plural: str
    model: type[BaseModel]
    order_by: str
    trashable: bool = True

    @property
    def label(self) -> str:
        return self.noun[:1].upper() + self.noun[1:]

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(self.model.model_fields)


PACKAGES = CollectionSpec(
    name="packages",
    table="packages",
    noun="package",
    plural="packages",
    model=Package,
    order_by="title",
)

POSTS = CollectionSpec(
    name="posts",
    table="posts",
    noun="post",
    plural="posts",
    model=Post,
    order_by="published_at DESC",
)

BOOKINGS = CollectionSpec(
    name="bookings",
    table="bookings",
    noun="booking",
    plural="bookings",
    model=Booking,
    order_by="booking_date DESC",
)

CONTACT_MESSAGES = CollectionSpec(
    name="contactMessages",
    table="contact_messages",
    noun="message",
    plural="messages",
    model=ContactMessage,
    order_by="submitted_at DESC",
)

MEDIA = CollectionSpec(
    name="media",
    table="media_files",
    noun="file",
    plural="files",
    model=MediaFile,
    order_by="uploaded_at DESC",
)

PAGES = CollectionSpec(
    name="pages",
    table="pages",
    noun="page",
    plural="pages",
    model=Page,
    order_by="menu_order, title",
)

CATEGORIES = CollectionSpec(
    name="categories",
    table="categories",
    noun="category",
    plural="categories",
    model=Category,
    order_by="name",
    trashable=False,
)

COLLECTIONS: dict[str, CollectionSpec] = {
    spec.name: spec
    for spec in (PACKAGES, POSTS, BOOKINGS, CONTACT_MESSAGES, MEDIA, PAGES, CATEGORIES)
}

TRASHABLE_COLLECTIONS: tuple[str, ...] = tuple(
    name for name, spec in COLLECTIONS.items() if spec.trashable
)


def get_collection(name: str) -> CollectionSpec:
    """Look up a collection by name.

    Raises:
        UnknownCollectionError: If the name is not registered.
    """
    try:
        return COLLECTIONS[name]
    except KeyError:
        raise UnknownCollectionError(name) from None
