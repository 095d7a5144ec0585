"""
Customer API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from core import crud

from . import repository, schemas

router = APIRouter()


@router.get("/customers")
async def list_customers(request: Request) -> dict:
    """
    Any customer column can be used as a query filter, e.g.
    `?company_name=acme*&assigned_user_id=3&assigned_user_id=4&page=2`.
    """
    return await crud.list_rows(repository.TABLE, request.query_params)


@router.get("/customers/{customer_id}")
async def get_customer(customer_id: int) -> dict:
    return await crud.get_row(repository.TABLE, customer_id)


@router.post("/customers")
async def create_customer(request: schemas.CustomerCreate) -> dict:
    return await repository.create_customer(request)


@router.patch("/customers/{customer_id}")
async def update_customer(customer_id: int, request: schemas.CustomerUpdate) -> dict:
    return await crud.update_row(repository.TABLE, customer_id, crud.unset_missing(request))


@router.delete("/customers/{customer_id}")
async def delete_customer(customer_id: int) -> dict:
    return await crud.delete_row(repository.TABLE, customer_id)
