"""Travel package endpoints (see lifecycle.py for the route set)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .lifecycle import build_lifecycle_router


class CreatePackageRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    slug: str = Field(min_length=1)
    title: str = Field(min_length=1)
    type: str
    destination: str
    duration: int = Field(gt=0, description="Length in days")
    price: float = Field(ge=0)
    rating: float = Field(default=0, ge=0, le=5)
    image_url: str | None = None
    description: str = ""


router = build_lifecycle_router("packages", CreatePackageRequest)
