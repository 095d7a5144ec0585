"""
Tag API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from core import crud

from . import repository, schemas

router = APIRouter()


@router.get("/tags")
async def list_tags(request: Request) -> dict:
    return await crud.list_rows(repository.TABLE, request.query_params)


@router.get("/tags/{tag_id}")
async def get_tag(tag_id: int) -> dict:
    return await crud.get_row(repository.TABLE, tag_id)


@router.post("/tags")
async def create_tag(request: schemas.TagCreate) -> dict:
    return await repository.create_tag(name=request.name)


@router.patch("/tags/{tag_id}")
async def update_tag(tag_id: int, request: schemas.TagUpdate) -> dict:
    return await crud.update_row(repository.TABLE, tag_id, crud.unset_missing(request))


@router.delete("/tags/{tag_id}")
async def delete_tag(tag_id: int) -> dict:
    return await crud.delete_row(repository.TABLE, tag_id)
