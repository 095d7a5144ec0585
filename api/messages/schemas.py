"""
Pydantic schemas for message endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_STATUS = "sent"


class MessageCreate(BaseModel):
    customer_id: int | None = None
    user_id: int | None = None
    channel: str | None = Field(default=None, max_length=50)
    message_body: str | None = None
    status: str | None = Field(default=None, max_length=50)
    timestamp: datetime | None = None


class MessageUpdate(MessageCreate):
    model_config = ConfigDict(extra="forbid")
