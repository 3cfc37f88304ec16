"""
jobly.db.repositories.base

Shared execution path for partial updates.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.db.sql import PartialUpdate, bind_positional


async def apply_partial_update(
    session: AsyncSession,
    *,
    table: str,
    update: PartialUpdate,
    key_column: str,
    key: Any,
) -> int:
    """
    Run `UPDATE <table> SET <update> WHERE <key_column> = $n` as one statement.

    Returns the number of matched rows.
    """
    key_idx = len(update.values) + 1
    sql = f'UPDATE {table} SET {update.set_cols} WHERE "{key_column}" = ${key_idx}'
    stmt, params = bind_positional(sql, [*update.values, key])
    result = await session.execute(text(stmt), params)
    return result.rowcount
