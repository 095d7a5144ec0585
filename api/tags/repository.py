"""
Tag persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import crud

TABLE = crud.Table(
    name="tags",
    primary_key="tag_id",
    columns={"name": str},
)


async def create_tag(*, name: str) -> dict[str, Any]:
    return await crud.insert_row(
        TABLE,
        "INSERT INTO tags (name) VALUES ($1) RETURNING *",
        name.strip(),
    )
