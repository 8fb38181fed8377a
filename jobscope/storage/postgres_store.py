from collections.abc import Mapping, Sequence
from typing import Any

import psycopg
from psycopg.types.json import Jsonb
from psycopg_pool import AsyncConnectionPool

from jobscope.logging.logger import Log
from jobscope.storage.base import BaseKeyValueStore
from jobscope.storage.exceptions import StorageError

_CREATE_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS kv_store (
        key TEXT PRIMARY KEY,
        value JSONB NOT NULL,
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
"""


class PostgresKeyValueStore(BaseKeyValueStore):
    """Key-value records in the kv_store table, one JSONB value per key."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def open(self) -> None:
        await self._pool.open()
        await self.ensure_schema()

    async def close(self) -> None:
        await self._pool.close()

    async def ensure_schema(self) -> None:
        try:
            async with self._pool.connection() as conn:
                await conn.execute(_CREATE_TABLE_SQL)
        except psycopg.Error as exc:
            raise StorageError(f"Failed to create kv_store table: {exc}") from exc
        Log.debug("kv_store table ready")

    async def get(self, keys: Sequence[str]) -> dict[str, Any]:
        if not keys:
            return {}
        try:
            async with self._pool.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        "SELECT key, value FROM kv_store WHERE key = ANY(%s)",
                        (list(keys),),
                    )
                    rows = await cur.fetchall()
        except psycopg.Error as exc:
            raise StorageError(f"Failed to read keys {list(keys)}: {exc}") from exc
        return {key: value for key, value in rows}

    async def set(self, values: Mapping[str, Any]) -> None:
        if not values:
            return
        try:
            async with self._pool.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.executemany(
                        """
                        INSERT INTO kv_store (key, value)
                        VALUES (%s, %s)
                        ON CONFLICT (key)
                        DO UPDATE SET value = EXCLUDED.value, updated_at = now()
                        """,
                        [(key, Jsonb(value)) for key, value in values.items()],
                    )
        except psycopg.Error as exc:
            raise StorageError(f"Failed to write keys {list(values)}: {exc}") from exc

    async def remove(self, keys: Sequence[str]) -> None:
        if not keys:
            return
        try:
            async with self._pool.connection() as conn:
                await conn.execute(
                    "DELETE FROM kv_store WHERE key = ANY(%s)",
                    (list(keys),),
                )
        except psycopg.Error as exc:
            raise StorageError(f"Failed to remove keys {list(keys)}: {exc}") from exc
