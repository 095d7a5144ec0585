"""
Customer-tag link persistence (raw SQL).

The table has a composite key (customer_id, tag_id), so it does not go
through `core.crud`.
"""

from __future__ import annotations

import logging
from typing import Any

from core import crud, db

logger = logging.getLogger(__name__)


async def list_links() -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT *
        FROM customer_tags
        ORDER BY customer_id, tag_id
        """
    )


async def add_link(*, customer_id: int, tag_id: int) -> dict[str, Any] | None:
    """
    Returns the new row, or None when the link already existed.
    """
    with crud.integrity_errors():
        row = await db.fetch_one(
            """
            INSERT INTO customer_tags (customer_id, tag_id)
            VALUES ($1, $2)
            ON CONFLICT (customer_id, tag_id) DO NOTHING
            RETURNING *
            """,
            customer_id,
            tag_id,
        )
    if row is not None:
        logger.info("customer_tag_added customer_id=%s tag_id=%s", customer_id, tag_id)
    return row


async def remove_link(*, customer_id: int, tag_id: int) -> bool:
    row = await db.fetch_one(
        """
        DELETE FROM customer_tags
        WHERE customer_id = $1
          AND tag_id = $2
        RETURNING *
        """,
        customer_id,
        tag_id,
    )
    return row is not None
