"""
Call API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from core import crud

from . import repository, schemas

router = APIRouter()


@router.get("/calls")
async def list_calls(request: Request) -> dict:
    return await crud.list_rows(repository.TABLE, request.query_params)


@router.get("/calls/{call_id}")
async def get_call(call_id: int) -> dict:
    return await crud.get_row(repository.TABLE, call_id)


@router.post("/calls")
async def create_call(request: schemas.CallCreate) -> dict:
    return await repository.create_call(request)


@router.patch("/calls/{call_id}")
async def update_call(call_id: int, request: schemas.CallUpdate) -> dict:
    return await crud.update_row(repository.TABLE, call_id, crud.unset_missing(request))


@router.delete("/calls/{call_id}")
async def delete_call(call_id: int) -> dict:
    return await crud.delete_row(repository.TABLE, call_id)
