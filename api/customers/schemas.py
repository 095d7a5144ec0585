"""
Pydantic schemas for customer endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CustomerCreate(BaseModel):
    assigned_user_id: int | None = None
    name: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=320)
    phone_number: str | None = Field(default=None, max_length=50)
    company_name: str | None = Field(default=None, max_length=200)
    address: str | None = None


class CustomerUpdate(CustomerCreate):
    model_config = ConfigDict(extra="forbid")
