"""Static site page endpoints (About, Terms, custom pages)."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .lifecycle import build_lifecycle_router


class CreatePageRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    slug: str = Field(min_length=1)
    title: str = Field(min_length=1)
    content: str = ""
    status: Literal["published", "draft"] = "draft"
    show_in_menu: bool = False
    menu_order: int = 0


router = build_lifecycle_router("pages", CreatePageRequest)
