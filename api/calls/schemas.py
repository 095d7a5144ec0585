"""
Pydantic schemas for call endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CallCreate(BaseModel):
    customer_id: int | None = None
    user_id: int | None = None
    call_time: datetime | None = None
    call_duration_seconds: int | None = Field(default=None, ge=0)
    call_recording_path: str | None = None
    transcription_text: str | None = None
    summary_text: str | None = None
    sentiment: str | None = Field(default=None, max_length=50)
    # Stored as jsonb; usually a list of floats.
    embedding_vector: Any | None = None
    model_used: str | None = Field(default=None, max_length=200)


class CallUpdate(CallCreate):
    model_config = ConfigDict(extra="forbid")
