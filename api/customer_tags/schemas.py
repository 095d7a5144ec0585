"""
Pydantic schemas for customer-tag links.
"""

from __future__ import annotations

from pydantic import BaseModel


class CustomerTagLink(BaseModel):
    customer_id: int
    tag_id: int
