"""
Message persistence (raw SQL).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from core import crud

from . import schemas

TABLE = crud.Table(
    name="messages",
    primary_key="message_id",
    columns={
        "customer_id": int,
        "user_id": int,
        "channel": str,
        "message_body": str,
        "status": str,
        "timestamp": datetime,
    },
)


async def create_message(payload: schemas.MessageCreate) -> dict[str, Any]:
    # "timestamp" must be quoted; it is also a type name.
    return await crud.insert_row(
        TABLE,
        """
        INSERT INTO messages (customer_id, user_id, channel, message_body, status, "timestamp")
        VALUES ($1, $2, $3, $4, $5, $6)
        RETURNING *
        """,
        payload.customer_id,
        payload.user_id,
        payload.channel,
        payload.message_body,
        payload.status or schemas.DEFAULT_STATUS,
        payload.timestamp,
    )
