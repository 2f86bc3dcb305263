"""Request and response schemas for packing list parsing."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class ParseRequest(BaseModel):
    """Decoded packing list submitted for classification."""

    filename: Optional[str] = Field(default=None, max_length=255)
    document: Any = None
    dispatch_location: Optional[str] = Field(
        alias="dispatchLocationNumber", default=None, max_length=100
    )

    class Config:
        populate_by_name = True


class FormatSummary(BaseModel):
    """Registered format as listed by the API."""

    format_id: str
    kind: str
    deprecated: bool = False
