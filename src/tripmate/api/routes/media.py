"""Media library endpoints.

The file itself lives in object storage; these routes manage only the
library record. Deleting a record does not delete the stored object.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .lifecycle import build_lifecycle_router


class CreateMediaFileRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    type: Literal["image", "video", "pdf", "file"]
    url: str = Field(min_length=1)
    size: str | None = None
    alt_text: str | None = None


router = build_lifecycle_router("media", CreateMediaFileRequest)
