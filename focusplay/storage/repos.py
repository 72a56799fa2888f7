# storage/repos.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import json
import logging
import sqlite3
from typing import Any, List, Optional

from focusplay import config
from focusplay.domain.models import Meta, Task
from focusplay.errors import PersistenceError
from focusplay.storage.db import Database

logger = logging.getLogger(__name__)


class AppStateRepo:
    def __init__(self, db: Database):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        row = self.db.conn.execute(
            "SELECT value FROM app_state WHERE key=?",
            (key,),
        ).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        self.db.conn.execute(
            """
            INSERT INTO app_state(key, value) VALUES(?, ?)
            ON CONFLICT(key) DO UPDATE SET value=excluded.value
            """,
            (key, value),
        )
        self.db.conn.commit()


class TrackerRepo:
    """
    The two persisted records:
    - tasks: JSON list, newest first
    - meta:  {"xp", "streak", "lastDoneDay"}

    Loads never raise: a broken record falls back to empty state.
    Saves raise PersistenceError.
    """

    def __init__(self, db: Database):
        self.state = AppStateRepo(db)

    def _load_json(self, key: str) -> Any:
        try:
            raw = self.state.get(key)
            return json.loads(raw) if raw else None
        except (sqlite3.Error, ValueError) as e:
            logger.warning("Failed to load %r: %s", key, e)
            return None

    def _save_json(self, key: str, payload: Any) -> None:
        try:
            self.state.set(key, json.dumps(payload))
        except (sqlite3.Error, TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to save {key!r}: {e}") from e

    def load_tasks(self) -> List[Task]:
        data = self._load_json(config.TASKS_KEY)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning("Stored %r is not a list, starting fresh", config.TASKS_KEY)
            return []

        tasks = []
        for item in data:
            try:
                tasks.append(Task.from_dict(item))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                tid = item.get("id", "unknown") if isinstance(item, dict) else "unknown"
                logger.warning("Skipping task %s: %s", tid, e)
        return tasks

    def save_tasks(self, tasks: List[Task]) -> None:
        self._save_json(config.TASKS_KEY, [t.to_dict() for t in tasks])

    def load_meta(self) -> Meta:
        data = self._load_json(config.META_KEY)
        if not isinstance(data, dict):
            return Meta()
        try:
            return Meta.from_dict(data)
        except (TypeError, ValueError) as e:
            logger.warning("Stored meta is malformed, resetting: %s", e)
            return Meta()

    def save_meta(self, meta: Meta) -> None:
        self._save_json(config.META_KEY, meta.to_dict())
