from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class MessageRequest(BaseModel):
    """Request payload for the quiz message API."""
    userId: Optional[str] = Field(default=None)
    message: Optional[str] = Field(default="")


class MessageResponse(BaseModel):
    """Response payload returned by the quiz message API."""
    reply: str


class HealthResponse(BaseModel):
    """Classification table readiness for diagnostics."""
    ready: bool
    rows: int


class ResultSummary(BaseModel):
    """Stored quiz result as shown in the results listing."""
    display_name: Optional[str] = None
    personality_type: str
    wing_label: str


class StoredResult(ResultSummary):
    """Durable result record including owner and creation time."""
    user_id: str
    created_at: Optional[datetime] = None
