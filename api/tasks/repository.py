"""
Task persistence (raw SQL).
"""

from __future__ import annotations

from datetime import date
from typing import Any

from core import crud

from . import schemas

TABLE = crud.Table(
    name="tasks",
    primary_key="task_id",
    columns={
        "customer_id": int,
        "assigned_to": int,
        "task_description": str,
        "due_date": date,
        "status": str,
    },
)


async def create_task(payload: schemas.TaskCreate) -> dict[str, Any]:
    return await crud.insert_row(
        TABLE,
        """
        INSERT INTO tasks (customer_id, assigned_to, task_description, due_date, status)
        VALUES ($1, $2, $3, $4, $5)
        RETURNING *
        """,
        payload.customer_id,
        payload.assigned_to,
        payload.task_description,
        payload.due_date,
        payload.status or schemas.DEFAULT_STATUS,
    )
