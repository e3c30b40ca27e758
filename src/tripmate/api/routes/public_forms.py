"""Public site form endpoints (no authentication).

POST /public/bookings   → booking form on a package page
POST /public/contact    → contact form

Both create Active rows that admins then manage (and trash) from the panel.
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from tripmate.api.store import get_store
from tripmate.domain.collections import BOOKINGS, CONTACT_MESSAGES
from tripmate.infra.repositories.entity_store import EntityStore
from tripmate.observability.logging import get_logger
from tripmate.observability.redaction import safe_log_context

from .lifecycle import create_record

logger = get_logger(__name__)

router = APIRouter(prefix="/public", tags=["public"])


class BookingFormRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    package_id: str = Field(min_length=1)
    package_name: str = Field(min_length=1)
    customer_name: str = Field(min_length=1)
    customer_email: str = Field(min_length=3)
    customer_phone: str | None = None
    travelers: int = Field(default=1, ge=1, le=50)
    departure_date: date


class ContactFormRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    subject: str = Field(min_length=1)
    message: str = Field(min_length=1)


@router.post("/bookings", status_code=201)
def submit_booking(
    body: BookingFormRequest,
    store: EntityStore = Depends(get_store),
) -> dict:
    """Record a booking request; it starts as Pending."""
    logger.info(
        "booking form submitted",
        extra={
            "extra_fields": safe_log_context(
                package_id=body.package_id,
                customer_email=body.customer_email,
                travelers=body.travelers,
            )
        },
    )
    created = create_record(store, BOOKINGS, body)
    return {"id": created["id"], "status": created["status"]}


@router.post("/contact", status_code=201)
def submit_contact_message(
    body: ContactFormRequest,
    store: EntityStore = Depends(get_store),
) -> dict:
    logger.info(
        "contact form submitted",
        extra={"extra_fields": safe_log_context(email=body.email, subject=body.subject)},
    )
    created = create_record(store, CONTACT_MESSAGES, body)
    return {"id": created["id"]}
