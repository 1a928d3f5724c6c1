"""Settings store — JSON blobs keyed by a fixed string ("config", "ui").

Two interchangeable backends: a SQLite ``settings`` table and a flat JSON
file. Writes are last-write-wins; there is no versioning or history.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

STATE_FILES = ("state.json", "srs.db", "srs.db-wal", "srs.db-shm")


class SettingsStore:
    """Interface: get / set a JSON-serialisable value by key."""

    backend = "abstract"

    def get(self, key: str, default: Any = None) -> Any:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError


class JsonFileSettingsStore(SettingsStore):
    """All keys in one pretty-printed JSON object on disk."""

    backend = "json"

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _read(self) -> dict[str, Any]:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Unreadable state file %s (%s); treating as empty", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        state = self._read()
        state[key] = value or {}
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(state, f, indent=2)


class SqliteSettingsStore(SettingsStore):
    """``settings(key, value, updatedAt)`` table with upsert."""

    backend = "sqlite"

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS settings (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updatedAt INTEGER NOT NULL
                    )
                    """
                )
        finally:
            conn.close()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.path)

    def get(self, key: str, default: Any = None) -> Any:
        conn = self._connect()
        try:
            row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()
        if row is None:
            return default
        try:
            return json.loads(row[0])
        except json.JSONDecodeError as exc:
            logger.warning("Failed to parse setting %r (%s)", key, exc)
            return default

    def set(self, key: str, value: Any) -> None:
        payload = json.dumps(value or {})
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    "INSERT INTO settings (key, value, updatedAt) VALUES (?, ?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updatedAt = excluded.updatedAt",
                    (key, payload, int(time.time() * 1000)),
                )
        finally:
            conn.close()


def open_store(db_path: str | Path, state_path: str | Path, backend: str = "auto") -> SettingsStore:
    """Open the SQLite store, falling back to the JSON file if SQLite is unusable.

    ``backend`` = "sqlite" | "json" | "auto".
    """
    if backend == "json":
        return JsonFileSettingsStore(state_path)
    try:
        store = SqliteSettingsStore(db_path)
    except (sqlite3.Error, OSError) as exc:
        if backend == "sqlite":
            raise
        logger.warning("SQLite unavailable (%s), falling back to JSON file storage.", exc)
        return JsonFileSettingsStore(state_path)
    logger.info("Using SQLite settings store at %s", db_path)
    return store


def clear_state(data_dir: str | Path) -> list[Path]:
    """Delete the stored state files under ``data_dir``. Returns what was removed."""
    removed: list[Path] = []
    for name in STATE_FILES:
        target = Path(data_dir) / name
        try:
            target.unlink()
        except FileNotFoundError:
            continue
        removed.append(target)
        logger.info("Removed %s", target)
    return removed
