"""Pydantic schemas for boxes."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

TOGGLE_HIDDEN_ACTION = "toggleHidden"


class BoxCreate(BaseModel):
    """Request schema for creating a box."""

    number: int
    room: str = Field(..., min_length=1, max_length=100)
    contents: str = Field(..., min_length=1)
    image_url: Optional[str] = None

    @field_validator("image_url")
    @classmethod
    def blank_image_url_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class BoxUpdate(BaseModel):
    """Request schema for overwriting room, contents and photo of a box."""

    id: int
    room: str = Field(..., min_length=1, max_length=100)
    contents: str = Field(..., min_length=1)
    image_url: Optional[str] = None

    @field_validator("image_url")
    @classmethod
    def blank_image_url_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class BoxToggleHidden(BaseModel):
    """Request schema for the visibility toggle."""

    action: Literal["toggleHidden"]
    id: int
    hidden: bool


class BoxDelete(BaseModel):
    id: int


class BoxRead(BaseModel):
    """Response schema for a box."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    number: int
    room: str
    contents: str
    image_url: Optional[str] = None
    hidden: bool = False
    created_at: Optional[datetime] = None

    @field_validator("hidden", mode="before")
    @classmethod
    def null_hidden_is_false(cls, v: Any) -> Any:
        return False if v is None else v


def parse_update_payload(payload: dict[str, Any]) -> BoxUpdate | BoxToggleHidden:
    """Pick the PUT variant from the `action` field."""
    if payload.get("action") == TOGGLE_HIDDEN_ACTION:
        return BoxToggleHidden.model_validate(payload)
    return BoxUpdate.model_validate(payload)
