"""Record schemas for everything the admin panel stores.

Rows read from the database are parsed through these models so that the
rest of the code works with typed records instead of loose tuples. Field
names match column names one to one.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

BookingStatus = Literal["Pending", "Confirmed", "Cancelled"]
MediaType = Literal["image", "video", "pdf", "file"]
PageStatus = Literal["published", "draft"]


class TrashableRecord(BaseModel):
    """Common shape of every soft-deletable record.

    ``deleted_at`` is None while the record is active and holds the time it
    was moved to trash otherwise.
    """

    model_config = ConfigDict(extra="forbid")

    id: str
    deleted_at: datetime | None = None


class Package(TrashableRecord):
    slug: str
    title: str
    type: str
    destination: str
    duration: int
    price: float
    rating: float = 0
    image_url: str | None = None
    description: str = ""


class Post(TrashableRecord):
    slug: str
    title: str
    content: str = ""
    featured_image_url: str | None = None
    author_id: str | None = None
    published_at: datetime
    # Not a foreign key: posts may outlive their category.
    category_id: str | None = None


class Booking(TrashableRecord):
    package_id: str
    package_name: str
    customer_name: str
    customer_email: str
    customer_phone: str | None = None
    travelers: int
    departure_date: date
    booking_date: datetime
    status: BookingStatus = "Pending"


class ContactMessage(TrashableRecord):
    name: str
    email: str
    subject: str
    message: str
    submitted_at: datetime
    is_read: bool = False


class MediaFile(TrashableRecord):
    name: str
    type: MediaType
    url: str
    size: str | None = None
    uploaded_at: datetime
    alt_text: str | None = None


class Page(TrashableRecord):
    slug: str
    title: str
    content: str = ""
    status: PageStatus = "draft"
    show_in_menu: bool = False
    menu_order: int = 0


class Category(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    name: str
    slug: str
