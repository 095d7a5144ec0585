"""
User API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from core import crud

from . import repository, schemas, service

router = APIRouter()


@router.get("/users")
async def list_users(request: Request) -> dict:
    return await crud.list_rows(repository.TABLE, request.query_params)


@router.get("/users/{user_id}")
async def get_user(user_id: int) -> dict:
    return await crud.get_row(repository.TABLE, user_id)


@router.post("/users")
async def create_user(request: schemas.UserCreate) -> dict:
    return await service.create_user(request)


@router.patch("/users/{user_id}")
async def update_user(user_id: int, request: schemas.UserUpdate) -> dict:
    return await service.update_user(user_id, request)


@router.delete("/users/{user_id}")
async def delete_user(user_id: int) -> dict:
    return await crud.delete_row(repository.TABLE, user_id)
