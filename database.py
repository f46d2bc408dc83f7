"""
database.py - SQLite storage for the persisted garden store.

The whole store lives in one namespaced row of a key/value table, the same
way a browser app keeps its state under a single local-storage key. Only the
snapshot produced by GardenStore.to_snapshot() is written; undo history and
derived views are rebuilt at load time.

Uses WAL mode for concurrent read performance.
"""

import os
import sqlite3
from typing import Optional, Dict, Any

from utils.snapshots import serialize_snapshot, deserialize_snapshot

STORAGE_KEY = 'gardengrid-storage'


def get_db_path() -> str:
    """Get the database path from environment or default."""
    default_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data', 'garden_grid.db')
    return os.environ.get('GARDEN_DB_PATH', default_path)


def get_db(db_path: Optional[str] = None):
    """Get a database connection with WAL mode enabled."""
    db_path = db_path or get_db_path()
    os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
    conn = sqlite3.connect(db_path)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: Optional[str] = None):
    """Create the storage table if it doesn't exist."""
    conn = get_db(db_path)
    conn.execute("""
        CREATE TABLE IF NOT EXISTS storage (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)
    conn.commit()
    conn.close()


def load_snapshot(db_path: Optional[str] = None, key: str = STORAGE_KEY) -> Optional[Dict[str, Any]]:
    """
    Read the persisted store snapshot.

    Returns:
        The snapshot dict, or None when nothing is stored or the blob is corrupt.
    """
    conn = get_db(db_path)
    try:
        row = conn.execute("SELECT value FROM storage WHERE key = ?", (key,)).fetchone()
    finally:
        conn.close()
    if not row:
        return None
    return deserialize_snapshot(row['value'])


def save_snapshot(snapshot: Dict[str, Any], db_path: Optional[str] = None, key: str = STORAGE_KEY):
    """Write the store snapshot, replacing the previous one."""
    conn = get_db(db_path)
    try:
        conn.execute(
            """INSERT INTO storage (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP)
               ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP""",
            (key, serialize_snapshot(snapshot))
        )
        conn.commit()
    finally:
        conn.close()


def delete_snapshot(db_path: Optional[str] = None, key: str = STORAGE_KEY) -> bool:
    """Remove the persisted snapshot. Returns True if a row was deleted."""
    conn = get_db(db_path)
    try:
        cursor = conn.execute("DELETE FROM storage WHERE key = ?", (key,))
        conn.commit()
        return cursor.rowcount > 0
    finally:
        conn.close()


def get_last_saved_at(db_path: Optional[str] = None, key: str = STORAGE_KEY) -> Optional[str]:
    """Timestamp of the last snapshot write, for the save indicator."""
    conn = get_db(db_path)
    try:
        row = conn.execute("SELECT updated_at FROM storage WHERE key = ?", (key,)).fetchone()
    finally:
        conn.close()
    return row['updated_at'] if row else None
