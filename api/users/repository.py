"""
User persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import crud

TABLE = crud.Table(
    name="users",
    primary_key="user_id",
    columns={
        "name": str,
        "email": str,
        "password_hash": str,
        "role": str,
    },
    hidden=frozenset({"password_hash"}),
)


def normalize_email(email: str | None) -> str | None:
    if email is None:
        return None
    return email.strip().lower()


async def create_user(
    *,
    name: str | None,
    email: str | None,
    password_hash: str | None,
    role: str,
) -> dict[str, Any]:
    return await crud.insert_row(
        TABLE,
        """
        INSERT INTO users (name, email, password_hash, role)
        VALUES ($1, $2, $3, $4)
        RETURNING *
        """,
        name,
        normalize_email(email),
        password_hash,
        role,
    )
