from __future__ import annotations
from typing import Optional, List
import sqlite3, os
from persona_core.storage.provider import StorageProvider
from persona_core.utils import now_ts


class SQLiteStorage(StorageProvider):
    name = "sqlite"

    def __init__(self, path="db/persona_state.db"):
        # If no directory, default to current working directory
        dir_path = os.path.dirname(path) or "."
        os.makedirs(dir_path, exist_ok=True)
        self.path = path
        self.db = sqlite3.connect(path, check_same_thread=False)

        self._init()

    def _init(self) -> None:
        self.db.execute("""CREATE TABLE IF NOT EXISTS kv(
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )""")
        self.db.commit()

    def get(self, key: str) -> Optional[str]:
        cur = self.db.execute("SELECT value FROM kv WHERE key=?", (key,))
        row = cur.fetchone()
        if not row: return None
        return row[0]

    def set(self, key: str, value: str) -> None:
        self.db.execute(
            "INSERT INTO kv(key,value,updated_at) VALUES(?,?,?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at",
            (key, value, now_ts())
        )
        self.db.commit()

    def remove(self, key: str) -> None:
        self.db.execute("DELETE FROM kv WHERE key=?", (key,))
        self.db.commit()

    def keys(self) -> List[str]:
        cur = self.db.execute("SELECT key FROM kv ORDER BY key")
        return [r[0] for r in cur.fetchall()]

    def flush(self):
        self.db.commit()

    def close(self):
        self.db.close()
