"""Admin panel routes (APP_ROLE=admin)."""

from fastapi import APIRouter

from tripmate.api.routes import (
    bookings,
    categories,
    me,
    media,
    messages,
    packages,
    pages,
    posts,
)

router = APIRouter()

for _module in (me, packages, posts, categories, bookings, messages, media, pages):
    router.include_router(_module.router)
