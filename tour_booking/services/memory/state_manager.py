"""
State manager remembering the last booking created per client.
"""

import asyncio
import sqlite3
from typing import Optional

from ...config import get_settings


class StateManager:
    """Keeps the most recent booking id per client in SQLite."""

    def __init__(self, db_path: Optional[str] = None):
        self.settings = get_settings()
        self.state_db = db_path or self.settings.state_db_path
        self._lock = asyncio.Lock()

    async def _ensure_table(self) -> None:
        """Ensure the last_booking table exists."""
        def _create_table():
            conn = sqlite3.connect(self.state_db)
            try:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS last_booking (
                        client_id TEXT PRIMARY KEY,
                        booking_id TEXT NOT NULL
                    )
                    """
                )
                conn.commit()
            finally:
                conn.close()

        await asyncio.to_thread(_create_table)

    async def remember_last_booking(self, client_id: str, booking_id: str) -> None:
        """Store ``booking_id`` as the latest booking of ``client_id``."""
        await self._ensure_table()

        async with self._lock:
            def _write() -> None:
                conn = sqlite3.connect(self.state_db)
                try:
                    conn.execute(
                        "INSERT OR REPLACE INTO last_booking (client_id, booking_id) VALUES (?, ?)",
                        (client_id, booking_id),
                    )
                    conn.commit()
                finally:
                    conn.close()

            await asyncio.to_thread(_write)

    async def get_last_booking(self, client_id: str) -> Optional[str]:
        """Retrieve the latest booking id stored for ``client_id``."""
        await self._ensure_table()

        async with self._lock:
            def _fetch() -> Optional[str]:
                conn = sqlite3.connect(self.state_db)
                try:
                    cur = conn.execute(
                        "SELECT booking_id FROM last_booking WHERE client_id = ?",
                        (client_id,),
                    )
                    row = cur.fetchone()
                finally:
                    conn.close()
                return row[0] if row else None

            return await asyncio.to_thread(_fetch)
