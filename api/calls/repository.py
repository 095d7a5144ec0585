"""
Call persistence (raw SQL).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from core import crud

from . import schemas

TABLE = crud.Table(
    name="calls",
    primary_key="call_id",
    columns={
        "customer_id": int,
        "user_id": int,
        "call_time": datetime,
        "call_duration_seconds": int,
        "call_recording_path": str,
        "transcription_text": str,
        "summary_text": str,
        "sentiment": str,
        "embedding_vector": Any,
        "model_used": str,
    },
    opaque=frozenset({"embedding_vector"}),
)


async def create_call(payload: schemas.CallCreate) -> dict[str, Any]:
    # embedding_vector goes through the jsonb codec registered in core.db.
    return await crud.insert_row(
        TABLE,
        """
        INSERT INTO calls (
            customer_id, user_id, call_time, call_duration_seconds, call_recording_path,
            transcription_text, summary_text, sentiment, embedding_vector, model_used
        )
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)
        RETURNING *
        """,
        payload.customer_id,
        payload.user_id,
        payload.call_time,
        payload.call_duration_seconds,
        payload.call_recording_path,
        payload.transcription_text,
        payload.summary_text,
        payload.sentiment,
        payload.embedding_vector,
        payload.model_used,
    )
