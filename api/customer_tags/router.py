"""
Customer-tag link endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter

from . import repository, schemas

router = APIRouter()


@router.get("/customer-tags")
async def list_customer_tags() -> list[dict]:
    return await repository.list_links()


@router.post("/customer-tags")
async def add_customer_tag(request: schemas.CustomerTagLink) -> dict:
    row = await repository.add_link(customer_id=request.customer_id, tag_id=request.tag_id)
    return row if row is not None else {"inserted": False}


@router.delete("/customer-tags")
async def remove_customer_tag(request: schemas.CustomerTagLink) -> dict:
    deleted = await repository.remove_link(customer_id=request.customer_id, tag_id=request.tag_id)
    return {"deleted": deleted}
