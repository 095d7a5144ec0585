"""
Task API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from core import crud

from . import repository, schemas

router = APIRouter()


@router.get("/tasks")
async def list_tasks(request: Request) -> dict:
    return await crud.list_rows(repository.TABLE, request.query_params)


@router.get("/tasks/{task_id}")
async def get_task(task_id: int) -> dict:
    return await crud.get_row(repository.TABLE, task_id)


@router.post("/tasks")
async def create_task(request: schemas.TaskCreate) -> dict:
    return await repository.create_task(request)


@router.patch("/tasks/{task_id}")
async def update_task(task_id: int, request: schemas.TaskUpdate) -> dict:
    return await crud.update_row(repository.TABLE, task_id, crud.unset_missing(request))


@router.delete("/tasks/{task_id}")
async def delete_task(task_id: int) -> dict:
    return await crud.delete_row(repository.TABLE, task_id)
