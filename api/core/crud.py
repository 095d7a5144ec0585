"""
Generic table CRUD on top of `core.sql` and `core.db`.

Feature packages describe their table with `Table` and keep their own
INSERT statements; list/get/update/delete are identical across resources
and live here.

The `Table` column map is also the identifier allow-list: only names listed
there are ever interpolated into SQL text.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

import asyncpg
from fastapi import HTTPException, status
from pydantic import TypeAdapter, ValidationError

from . import db
from .sql import UNSET, WILDCARD, build_filters, build_pagination, build_update_set, quote_ident

logger = logging.getLogger(__name__)

PAGINATION_KEYS = ("page", "limit", "offset")


@dataclass(frozen=True)
class Table:
    name: str
    primary_key: str
    # Updatable columns and the Python type used to coerce filter values.
    columns: Mapping[str, Any] = field(default_factory=dict)
    # Stored but never returned or filtered on (e.g. password hashes).
    hidden: frozenset[str] = frozenset()
    # Returned but not filterable (json payloads).
    opaque: frozenset[str] = frozenset()
    primary_key_type: Any = int

    def filter_types(self) -> dict[str, Any]:
        types = {self.primary_key: self.primary_key_type}
        for column, column_type in self.columns.items():
            if column in self.hidden or column in self.opaque:
                continue
            types[column] = column_type
        return types

    def public(self, row: dict[str, Any] | None) -> dict[str, Any] | None:
        if row is None or not self.hidden:
            return row
        return {k: v for k, v in row.items() if k not in self.hidden}


@lru_cache(maxsize=None)
def _adapter(column_type: Any) -> TypeAdapter:
    return TypeAdapter(column_type)


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")


def _multi_items(params: Any) -> list[tuple[str, Any]]:
    # Starlette's QueryParams keeps repeated keys; plain mappings may carry lists.
    if hasattr(params, "multi_items"):
        return list(params.multi_items())
    items: list[tuple[str, Any]] = []
    for key, value in (params or {}).items():
        if isinstance(value, (list, tuple)):
            items.extend((key, v) for v in value)
        else:
            items.append((key, value))
    return items


def _first(params: Any, key: str) -> Any:
    for k, v in _multi_items(params):
        if k == key:
            return v
    return None


def _coerce(column: str, column_type: Any, raw: Any) -> Any:
    if raw is None or raw == "":
        return raw
    if isinstance(raw, str) and WILDCARD in raw:
        if column_type is not str:
            raise _bad_request(f"Wildcard filters are only supported on text fields: {column}")
        return raw
    try:
        return _adapter(column_type).validate_python(raw)
    except ValidationError as exc:
        raise _bad_request(f"Invalid value for filter field {column}: {raw!r}") from exc


def parse_filters(table: Table, params: Any) -> dict[str, Any]:
    """
    Turn query-string params into a filter map for `build_filters`.

    - pagination keys are ignored
    - a key given once is a scalar, a repeated key is a list
    - values are coerced to the column type (lax pydantic validation)
    - unknown keys are rejected with 400
    """
    types = table.filter_types()
    grouped: dict[str, list[Any]] = {}
    for key, value in _multi_items(params):
        if key in PAGINATION_KEYS:
            continue
        if key not in types:
            raise _bad_request(f"Unknown filter field: {key}")
        grouped.setdefault(key, []).append(value)

    filters: dict[str, Any] = {}
    for column, raw_values in grouped.items():
        if len(raw_values) == 1:
            filters[column] = _coerce(column, types[column], raw_values[0])
            continue
        present = [v for v in raw_values if v is not None and v != ""]
        for v in present:
            if isinstance(v, str) and WILDCARD in v:
                raise _bad_request(f"Wildcard values cannot be combined in a list filter: {column}")
        filters[column] = [_coerce(column, types[column], v) for v in present]
    return filters


@contextmanager
def integrity_errors() -> Iterator[None]:
    """
    Translate constraint violations from INSERT/UPDATE into client errors.
    """
    try:
        yield
    except asyncpg.exceptions.UniqueViolationError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=getattr(exc, "detail", None) or "Duplicate value.",
        ) from exc
    except (
        asyncpg.exceptions.ForeignKeyViolationError,
        asyncpg.exceptions.NotNullViolationError,
        asyncpg.exceptions.CheckViolationError,
    ) as exc:
        raise _bad_request(getattr(exc, "detail", None) or str(exc)) from exc


def _statement(*parts: str) -> str:
    return " ".join(p for p in parts if p)


async def list_rows(table: Table, params: Any) -> dict[str, Any]:
    """
    Filtered, paginated listing.

    The count and page queries share the same WHERE fragment and values;
    LIMIT/OFFSET placeholders are appended after the filter values.
    """
    limit, offset = build_pagination(
        page=_first(params, "page"),
        limit=_first(params, "limit"),
        offset=_first(params, "offset"),
    )
    filters = parse_filters(table, params)
    where_clause, values = build_filters({quote_ident(c): v for c, v in filters.items()})

    total = await db.fetch_value(
        _statement(f"SELECT COUNT(*) AS total FROM {table.name}", where_clause),
        *values,
    )
    total = int(total or 0)

    n = len(values)
    rows = await db.fetch_all(
        _statement(
            f"SELECT * FROM {table.name}",
            where_clause,
            f"ORDER BY {table.primary_key} LIMIT ${n + 1} OFFSET ${n + 2}",
        ),
        *values,
        limit,
        offset,
    )
    return {
        "data": [table.public(row) for row in rows],
        "pagination": {
            "page": offset // limit + 1,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit),
        },
    }


async def get_row(table: Table, row_id: Any) -> dict[str, Any]:
    row = await db.fetch_one(
        f"SELECT * FROM {table.name} WHERE {table.primary_key} = $1",
        row_id,
    )
    if row is None:
        raise _not_found()
    return table.public(row)


async def insert_row(table: Table, sql: str, *args: Any) -> dict[str, Any]:
    """
    Run a feature's INSERT ... RETURNING * statement.
    """
    with integrity_errors():
        row = await db.fetch_one(sql, *args)
    if row is None:
        raise RuntimeError(f"Failed to insert into {table.name}.")
    logger.info("row_created table=%s id=%s", table.name, row.get(table.primary_key))
    return table.public(row)


async def update_row(table: Table, row_id: Any, payload: Mapping[str, Any]) -> dict[str, Any]:
    """
    Partial update. Unset fields are left alone, `None` writes NULL.
    """
    unknown = [column for column in payload if column not in table.columns]
    if unknown:
        raise _bad_request(f"Unknown field: {unknown[0]}")

    set_clause, values = build_update_set({quote_ident(c): v for c, v in payload.items()})
    if not set_clause:
        raise _bad_request("No fields to update")

    with integrity_errors():
        row = await db.fetch_one(
            f"UPDATE {table.name} SET {set_clause} "
            f"WHERE {table.primary_key} = ${len(values) + 1} RETURNING *",
            *values,
            row_id,
        )
    if row is None:
        raise _not_found()
    logger.info("row_updated table=%s id=%s fields=%s", table.name, row_id, len(values))
    return table.public(row)


async def delete_row(table: Table, row_id: Any) -> dict[str, bool]:
    rows = await db.fetch_all(
        f"DELETE FROM {table.name} WHERE {table.primary_key} = $1 RETURNING *",
        row_id,
    )
    if rows:
        logger.info("row_deleted table=%s id=%s", table.name, row_id)
    return {"deleted": len(rows) > 0}


def unset_missing(model: Any) -> dict[str, Any]:
    """
    Map every field of a pydantic update model to its value, or UNSET when
    the client did not send it.
    """
    sent = model.model_fields_set
    return {name: (getattr(model, name) if name in sent else UNSET) for name in type(model).model_fields}
