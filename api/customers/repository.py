"""
Customer persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import crud

from . import schemas

TABLE = crud.Table(
    name="customers",
    primary_key="customer_id",
    columns={
        "assigned_user_id": int,
        "name": str,
        "email": str,
        "phone_number": str,
        "company_name": str,
        "address": str,
    },
)


async def create_customer(payload: schemas.CustomerCreate) -> dict[str, Any]:
    return await crud.insert_row(
        TABLE,
        """
        INSERT INTO customers (assigned_user_id, name, email, phone_number, company_name, address)
        VALUES ($1, $2, $3, $4, $5, $6)
        RETURNING *
        """,
        payload.assigned_user_id,
        payload.name,
        payload.email,
        payload.phone_number,
        payload.company_name,
        payload.address,
    )
