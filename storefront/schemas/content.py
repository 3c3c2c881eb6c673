"""Announcement and preview video schemas."""

from typing import Literal

from pydantic import Field

from storefront.schemas.base import DocumentModel
from storefront.utils.time import now_ms


class Announcement(DocumentModel):
    """Rotating storefront banner; several may be active at once."""

    type: Literal["text", "image"] = "text"
    content: str
    is_active: bool = True


class PreviewVideo(DocumentModel):
    """Storefront preview clip; at most one is meant to be active."""

    url: str
    poster: str | None = None
    is_active: bool = False
    created_at: int = Field(default_factory=now_ms)
