"""
User business logic: the API takes plaintext passwords, the table stores
bcrypt hashes.
"""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from core import crud
from core.sql import UNSET

from . import repository, schemas, security


def _hash_or_400(password: str) -> str:
    try:
        return security.hash_password(password)
    except security.PasswordError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


async def create_user(payload: schemas.UserCreate) -> dict[str, Any]:
    password_hash = _hash_or_400(payload.password) if payload.password is not None else None
    return await repository.create_user(
        name=payload.name,
        email=payload.email,
        password_hash=password_hash,
        role=payload.role,
    )


def update_fields(payload: schemas.UserUpdate) -> dict[str, Any]:
    """
    Column -> value map for `crud.update_row`; unsent fields stay UNSET.
    """
    fields = crud.unset_missing(payload)
    password = fields.pop("password")
    if password is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="password cannot be null.",
        )
    fields["password_hash"] = UNSET if password is UNSET else _hash_or_400(password)

    if fields["email"] is not UNSET:
        fields["email"] = repository.normalize_email(fields["email"])
    if fields["role"] is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="role cannot be null.",
        )
    return fields


async def update_user(user_id: int, payload: schemas.UserUpdate) -> dict[str, Any]:
    return await crud.update_row(repository.TABLE, user_id, update_fields(payload))
