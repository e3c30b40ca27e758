"""Booking endpoints for the admin panel.

Bookings normally arrive through the public booking form
(POST /public/bookings); admins can also enter one by hand.
"""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .lifecycle import build_lifecycle_router


class CreateBookingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    package_id: str
    package_name: str
    customer_name: str = Field(min_length=1)
    customer_email: str = Field(min_length=3)
    customer_phone: str | None = None
    travelers: int = Field(default=1, ge=1)
    departure_date: date
    status: Literal["Pending", "Confirmed", "Cancelled"] | None = None


router = build_lifecycle_router("bookings", CreateBookingRequest)
