"""
Message API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from core import crud

from . import repository, schemas

router = APIRouter()


@router.get("/messages")
async def list_messages(request: Request) -> dict:
    return await crud.list_rows(repository.TABLE, request.query_params)


@router.get("/messages/{message_id}")
async def get_message(message_id: int) -> dict:
    return await crud.get_row(repository.TABLE, message_id)


@router.post("/messages")
async def create_message(request: schemas.MessageCreate) -> dict:
    return await repository.create_message(request)


@router.patch("/messages/{message_id}")
async def update_message(message_id: int, request: schemas.MessageUpdate) -> dict:
    return await crud.update_row(repository.TABLE, message_id, crud.unset_missing(request))


@router.delete("/messages/{message_id}")
async def delete_message(message_id: int) -> dict:
    return await crud.delete_row(repository.TABLE, message_id)
