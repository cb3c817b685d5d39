# =============================================================================
# TELEWIND - SUBSCRIPTION STORE
# =============================================================================
#
# Telegram chat ids that want rising-edge notifications, kept in SQLite.
#
# The command listener thread writes while the monitor loop reads, so one
# connection is shared and every operation runs under a single lock.
#
# =============================================================================

import logging
import sqlite3
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS subscriptions (
    id INTEGER PRIMARY KEY NOT NULL CHECK(id >= 0),
    user_id INTEGER NOT NULL UNIQUE CHECK(user_id >= 0),
    created_at INTEGER NOT NULL CHECK(created_at >= 0)
)
"""


@dataclass(frozen=True)
class Subscription:
    id: int
    user_id: int
    created_at: int


class SubscriptionStore:
    """
    SQLite-backed set of subscribed chat ids.

    Usage:
        store = SubscriptionStore("data/subscriptions.db")
        store.add(chat_id)
        for sub in store.list():
            ...
    """

    def __init__(self, database_url: Union[str, Path] = ":memory:"):
        """
        Args:
            database_url: SQLite file path, or ":memory:"
        """
        self.database_url = str(database_url)
        if self.database_url != ":memory:":
            Path(self.database_url).parent.mkdir(parents=True, exist_ok=True)

        self._lock = threading.Lock()
        self._conn = sqlite3.connect(self.database_url, check_same_thread=False)
        with self._lock, self._conn:
            self._conn.execute(SCHEMA)

        logger.info(f"Subscription store ready: {self.database_url}")

    def add(self, user_id: int) -> bool:
        """
        Subscribe a chat.

        Returns:
            True if the chat was not subscribed before
        """
        with self._lock, self._conn:
            cursor = self._conn.execute(
                "INSERT OR IGNORE INTO subscriptions (user_id, created_at) VALUES (?, ?)",
                (user_id, int(time.time())),
            )
        return cursor.rowcount > 0

    def remove(self, user_id: int) -> bool:
        """
        Unsubscribe a chat.

        Returns:
            True if the chat was subscribed
        """
        with self._lock, self._conn:
            cursor = self._conn.execute(
                "DELETE FROM subscriptions WHERE user_id = ?",
                (user_id,),
            )
        return cursor.rowcount > 0

    def list(self) -> List[Subscription]:
        """All subscriptions, oldest first."""
        with self._lock:
            rows = self._conn.execute(
                "SELECT id, user_id, created_at FROM subscriptions ORDER BY id"
            ).fetchall()
        return [Subscription(*row) for row in rows]

    def user_ids(self) -> List[int]:
        return [s.user_id for s in self.list()]

    def close(self) -> None:
        with self._lock:
            self._conn.close()
