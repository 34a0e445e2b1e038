# key-value storage medium backed by one sqlite table
import asyncio
import os
from contextlib import asynccontextmanager
from typing import Optional

import aiosqlite

from utils import config
from utils.logger import get_logger

_logger = get_logger(__name__)

DB_PATH = config.DB_PATH

_SCHEMA = """
CREATE TABLE IF NOT EXISTS storage (
    key   TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""

_initialized = False
_init_lock = asyncio.Lock()


@asynccontextmanager
async def connect() -> aiosqlite.Connection:
    """Async context manager yielding an aiosqlite connection.

    Creates the storage table on first use.
    """
    global _initialized
    folder = os.path.dirname(DB_PATH)
    if folder:
        os.makedirs(folder, exist_ok=True)
    conn = await aiosqlite.connect(DB_PATH)

    try:
        if not _initialized:
            async with _init_lock:
                if not _initialized:
                    _logger.info(f"Initializing storage at {DB_PATH}...")
                    await conn.executescript(_SCHEMA)
                    await conn.commit()
                    _initialized = True
        yield conn
    finally:
        await conn.close()


async def get_item(key: str) -> Optional[str]:
    """Return the raw value stored under key, or None."""
    async with connect() as conn:
        cur = await conn.execute("SELECT value FROM storage WHERE key = ?;", (key,))
        row = await cur.fetchone()
        await cur.close()
    return row[0] if row else None


async def set_item(key: str, value: str) -> None:
    async with connect() as conn:
        await conn.execute(
            """
            INSERT INTO storage(key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value;
            """,
            (key, value),
        )
        await conn.commit()


async def remove_item(key: str) -> None:
    async with connect() as conn:
        await conn.execute("DELETE FROM storage WHERE key = ?;", (key,))
        await conn.commit()
