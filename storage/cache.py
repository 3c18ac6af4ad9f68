"""
In-run SQLite memo for entity-by-name lookups.
Stores raw JSON entities keyed by entity kind + name in an in-memory database, so nothing outlives the run.
"""

import sqlite3
import json
from typing import Optional, Any, Dict

# noinspection SqlResolve
SQL_CREATE = """
CREATE TABLE IF NOT EXISTS lookup_cache (
    key TEXT PRIMARY KEY,
    entity TEXT
);
"""


def cache_key(kind: str, name: str) -> str:
    """Build the cache key for an entity lookup, e.g. ('project', 'Web') -> 'project:Web'."""
    return f"{kind}:{name}"


class Cache:
    def __init__(self):
        self.conn = sqlite3.connect(':memory:')
        self.conn.executescript(SQL_CREATE)

    def close(self):
        if self.conn is not None:
            try:
                self.conn.close()
            finally:
                self.conn = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # noinspection SqlResolve
    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Return the memoized entity dict for key, or None when it was never stored."""
        cur = self.conn.execute('SELECT entity FROM lookup_cache WHERE key = ?', (key,))
        row = cur.fetchone()
        if not row:
            return None
        return json.loads(row[0])

    # noinspection SqlResolve
    def set(self, key: str, entity: Dict[str, Any]):
        self.conn.execute('REPLACE INTO lookup_cache(key, entity) VALUES (?, ?)', (key, json.dumps(entity)))
        self.conn.commit()


__all__ = ["Cache", "cache_key"]
