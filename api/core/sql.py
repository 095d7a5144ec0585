"""
Dynamic SQL clause builders.

Route handlers compose these to turn loosely-typed request input into SQL
fragments for asyncpg. Every builder returns `(clause_text, values)` where
placeholder `$k` in the text is bound to `values[k - 1]`.

Trust boundary:
- column names are interpolated into the SQL text, so callers must only pass
  allow-listed field names as keys (see `core.crud.Table`);
- values are always bound as positional parameters, never interpolated.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100
# PostgreSQL bigint ceiling for OFFSET.
MAX_OFFSET = 2**63 - 1

WILDCARD = "*"
SQL_WILDCARD = "%"


class _Unset:
    """
    Marker for "field not present in the request".

    `None` is a real value for updates (set the column to NULL), so absence
    needs its own sentinel.
    """

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class Equals:
    column: str
    value: Any


@dataclass(frozen=True)
class Matches:
    # `pattern` already uses SQL wildcards.
    column: str
    pattern: str


@dataclass(frozen=True)
class AnyOf:
    column: str
    values: tuple[Any, ...]


Condition = Equals | Matches | AnyOf


def quote_ident(name: str) -> str:
    """
    Quote a trusted identifier so names like `timestamp` are read as columns.

    This is not an injection guard; identifiers must still be allow-listed.
    """
    return '"' + name.replace('"', '""') + '"'


def is_empty_filter(value: Any) -> bool:
    return value is UNSET or value is None or (isinstance(value, str) and value == "")


def classify(column: str, value: Any) -> Condition:
    """
    Map a filter value onto one of the three condition kinds.
    """
    if isinstance(value, str) and WILDCARD in value:
        return Matches(column, value.replace(WILDCARD, SQL_WILDCARD))
    if isinstance(value, (list, tuple)):
        return AnyOf(column, tuple(value))
    return Equals(column, value)


def _render(condition: Condition, start: int) -> tuple[str, list[Any]]:
    # `start` is the 1-based index of the first placeholder this condition owns.
    if isinstance(condition, Matches):
        return f"{condition.column} ILIKE ${start}", [condition.pattern]
    if isinstance(condition, AnyOf):
        placeholders = ", ".join(f"${start + j}" for j in range(len(condition.values)))
        return f"{condition.column} IN ({placeholders})", list(condition.values)
    if isinstance(condition, Equals):
        return f"{condition.column} = ${start}", [condition.value]
    raise TypeError(f"Unsupported condition: {condition!r}")


def build_filters(filters: Mapping[str, Any] | None = None) -> tuple[str, list[Any]]:
    """
    Build a `WHERE` clause from a column -> value mapping.

    - unset, `None` and `""` values are not filters and are skipped
    - strings containing `*` become `col ILIKE $k` with `*` -> `%`
    - lists/tuples become `col IN ($k, $k+1, ...)`; an empty list is skipped
    - anything else becomes `col = $k`

    Returns `("", [])` when no filter applies.
    """
    conditions: list[str] = []
    values: list[Any] = []

    for column, value in (filters or {}).items():
        if is_empty_filter(value):
            continue
        if isinstance(value, (list, tuple)) and not value:
            continue
        text, bound = _render(classify(column, value), len(values) + 1)
        conditions.append(text)
        values.extend(bound)

    if not conditions:
        return "", []
    return "WHERE " + " AND ".join(conditions), values


def build_update_set(payload: Mapping[str, Any] | None = None) -> tuple[str, list[Any]]:
    """
    Build the body of an `UPDATE ... SET` from a partial record.

    Unset entries are dropped, `None` is kept and binds NULL. An empty
    clause means there is nothing to update; callers must not run the
    statement in that case.
    """
    entries = [(column, value) for column, value in (payload or {}).items() if value is not UNSET]
    set_clause = ", ".join(f"{column} = ${i}" for i, (column, _) in enumerate(entries, start=1))
    return set_clause, [value for _, value in entries]


def _as_int(value: Any) -> int | None:
    """
    Best-effort integer coercion for query-string input.

    Returns None for anything that is missing, non-numeric or non-finite.
    """
    if value is None or value is UNSET or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        try:
            return int(raw)
        except ValueError:
            pass
        try:
            value = float(raw)
        except ValueError:
            return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return math.floor(value)
    return None


def build_pagination(page: Any = None, limit: Any = None, offset: Any = None) -> tuple[int, int]:
    """
    Normalize page/limit/offset into `(limit, offset)`.

    Never raises: bad input falls back to the defaults, `limit` is clamped to
    [1, MAX_LIMIT] and `offset` is kept within [0, MAX_OFFSET]. An
    explicit `offset` wins over `page`.
    """
    page_n = _as_int(page)
    if page_n is None or page_n < 1:
        page_n = DEFAULT_PAGE

    limit_n = _as_int(limit)
    if limit_n is None:
        limit_n = DEFAULT_LIMIT
    final_limit = min(max(1, limit_n), MAX_LIMIT)

    offset_n = _as_int(offset)
    if offset_n is None:
        offset_n = (page_n - 1) * final_limit
    return final_limit, min(max(0, offset_n), MAX_OFFSET)
