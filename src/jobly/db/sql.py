"""
jobly.db.sql

Partial-update SQL helpers.

Responsibilities:
- Turn a field map into a parameterized `SET` clause and an ordered value list.
- Bind `$n` placeholders to SQLAlchemy named parameters for execution.

Values never appear in the generated text: placeholder `$i` is bound to
`values[i - 1]`.
"""

from __future__ import annotations

import re
from collections.abc import Collection, Mapping
from typing import Any, NamedTuple

from jobly.errors import ContractViolationError

_PLACEHOLDER = re.compile(r"\$(\d+)")


class PartialUpdate(NamedTuple):
    set_cols: str
    values: list[Any]


def sql_for_partial_update(
    data: Mapping[str, Any],
    js_to_sql: Mapping[str, str],
    *,
    allowed: Collection[str],
) -> PartialUpdate:
    """
    Build the `SET` portion of an `UPDATE` statement.

    `data` maps logical field names to new values, in the order the
    placeholders should be numbered. `js_to_sql` renames fields whose storage
    column differs; any other field maps to a column of the same name.
    Every key must be in `allowed`.

        >>> sql_for_partial_update(
        ...     {"firstName": "Aliya", "age": 32},
        ...     {"firstName": "first_name"},
        ...     allowed={"firstName", "age"},
        ... )
        PartialUpdate(set_cols='"first_name"=$1, "age"=$2', values=['Aliya', 32])
    """
    keys = list(data)
    if not keys:
        raise ContractViolationError("No data")

    unknown = [k for k in keys if k not in allowed]
    if unknown:
        raise ContractViolationError(f"Cannot update field(s): {', '.join(unknown)}")

    cols = [f'"{js_to_sql.get(key, key)}"=${idx}' for idx, key in enumerate(keys, start=1)]
    return PartialUpdate(set_cols=", ".join(cols), values=[data[k] for k in keys])


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so `value` matches literally (use with `escape="\\"`)."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def bind_positional(sql: str, values: list[Any]) -> tuple[str, dict[str, Any]]:
    """Rewrite `$n` placeholders as `:pn` and return the matching parameter dict."""
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}
    return _PLACEHOLDER.sub(lambda m: f":p{m.group(1)}", sql), params


# --- Module Notes -----------------------------------------------------------
# The storage dialect (SQLite/Postgres via SQLAlchemy) uses named binds, hence
# `bind_positional`; the builder itself stays dialect-neutral.
