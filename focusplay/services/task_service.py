# services/task_service.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import datetime as dt
import logging
import math
import uuid
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlparse

from focusplay import config
from focusplay.core.clock import Clock, local_day, now_ms
from focusplay.domain.models import (
    Meta,
    Session,
    Task,
    coerce_hours,
    coerce_tags,
    minutes_between,
)
from focusplay.errors import PersistenceError
from focusplay.services.gamification import apply_completion, grant_xp
from focusplay.services.stats_service import progress_from_hours
from focusplay.storage.repos import TrackerRepo

logger = logging.getLogger(__name__)

PATCHABLE = ("title", "url", "notes", "tags", "due", "status", "progress", "total_hours")
PATCH_ALIASES = {"totalHours": "total_hours"}


def domain_from_url(url: str) -> str:
    try:
        host = urlparse((url or "").strip()).hostname or ""
    except ValueError:
        return ""
    return host[4:] if host.startswith("www.") else host


def clamp_pct(value: Any) -> int:
    try:
        pct = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, min(100, pct))


class TaskService:
    """
    Owns the task list and the gamification meta.

    Every successful mutation goes through _commit(): the daily completion
    bonus is applied, both records are persisted (best effort) and the change
    listener is notified. Unknown ids are a silent no-op.
    """

    def __init__(self, repo: TrackerRepo, clock: Clock = now_ms):
        self.repo = repo
        self.clock = clock

        self.tasks: List[Task] = repo.load_tasks()
        self.meta: Meta = repo.load_meta()

        self._on_change: Optional[Callable[[], None]] = None
        self._on_celebrate: Optional[Callable[[], None]] = None

    # ----- Callbacks -----
    def set_on_change(self, fn: Callable[[], None]) -> None:
        self._on_change = fn

    def set_on_celebrate(self, fn: Callable[[], None]) -> None:
        self._on_celebrate = fn

    def _emit_change(self) -> None:
        if self._on_change:
            self._on_change()

    def _emit_celebrate(self) -> None:
        if self._on_celebrate:
            self._on_celebrate()

    # ----- internals -----
    def _today(self) -> dt.date:
        return local_day(self.clock())

    def _find(self, task_id: str) -> Optional[Task]:
        for t in self.tasks:
            if t.id == task_id:
                return t
        logger.debug("Ignoring command for unknown task %r", task_id)
        return None

    def _persist(self) -> None:
        try:
            self.repo.save_tasks(self.tasks)
            self.repo.save_meta(self.meta)
        except PersistenceError as e:
            # in-memory state stays authoritative for this session
            logger.warning("Persist failed: %s", e)

    def _commit(self) -> None:
        self.meta = apply_completion(self.meta, self.tasks, self._today())
        self._persist()
        self._emit_change()

    def _accumulate(self, task: Task, minutes: float, now: int) -> None:
        task.hours_done = round(task.hours_done + minutes / 60, 2)
        task.progress = progress_from_hours(task.hours_done, task.total_hours, task.progress)
        if task.progress >= 100:
            task.status = "done"
        elif task.status == "todo":
            task.status = "doing"
        task.last_update = now
        task.updated_at = now

    # ----- readers -----
    def get_task(self, task_id: str) -> Optional[Task]:
        return self._find(task_id)

    def list_tasks(self) -> List[Task]:
        return list(self.tasks)

    def sessions(self) -> List[Session]:
        return [s for t in self.tasks for s in t.sessions]

    # ----- tasks -----
    def create_task(
        self,
        title: str = "",
        url: str = "",
        notes: str = "",
        due: str = "",
        tags: Optional[List[str]] = None,
        total_hours: Any = 0,
    ) -> Optional[Task]:
        title = (title or "").strip()
        url = (url or "").strip()
        if not title and not url:
            logger.debug("Not creating a task without title or url")
            return None

        now = self.clock()
        task = Task(
            id=str(uuid.uuid4()),
            title=title or domain_from_url(url) or config.UNTITLED,
            url=url,
            notes=(notes or "").strip(),
            due=(due or "").strip(),
            tags=coerce_tags(tags) or [config.DEFAULT_TAG],
            total_hours=coerce_hours(total_hours),
            start_date=now,
            created_at=now,
            last_update=now,
        )
        self.tasks.insert(0, task)
        logger.info("Created task %s (%s)", task.id, task.title)
        self._commit()
        return task

    def update_task(self, task_id: str, patch: Dict[str, Any]) -> Optional[Task]:
        task = self._find(task_id)
        if task is None:
            return None

        if not isinstance(patch, dict):
            logger.debug("Ignoring patch of type %s", type(patch).__name__)
            return None

        for key, value in patch.items():
            key = PATCH_ALIASES.get(key, key)
            if key not in PATCHABLE:
                logger.debug("Ignoring patch key %r", key)
                continue
            if key == "status":
                if value not in config.STATUSES:
                    logger.debug("Ignoring invalid status %r", value)
                    continue
                task.status = value
            elif key == "progress":
                task.progress = clamp_pct(value)
            elif key == "total_hours":
                task.total_hours = coerce_hours(value)
            elif key == "tags":
                tags = coerce_tags(value)
                if tags is None:
                    logger.debug("Ignoring invalid tags %r", value)
                    continue
                task.tags = tags
            else:
                setattr(task, key, "" if value is None else str(value))

        task.updated_at = self.clock()
        self._commit()
        return task

    def remove_task(self, task_id: str) -> bool:
        task = self._find(task_id)
        if task is None:
            return False
        # sessions go with the task
        self.tasks.remove(task)
        logger.info("Removed task %s", task_id)
        self._commit()
        return True

    def set_progress(self, task_id: str, pct: Any) -> Optional[Task]:
        task = self._find(task_id)
        if task is None:
            return None

        p = clamp_pct(pct)
        task.progress = p
        # slider wins over time-derived progress
        if task.total_hours > 0:
            task.hours_done = round(p / 100 * task.total_hours, 2)
        if p >= 100:
            task.status = "done"
        elif task.status == "done":
            task.status = "doing"

        task.updated_at = self.clock()
        self._commit()
        return task

    def mark_done(self, task_id: str) -> Optional[Task]:
        task = self._find(task_id)
        if task is None:
            return None

        task.status = "done"
        task.progress = 100
        task.updated_at = self.clock()
        self.meta = grant_xp(self.meta, config.XP_MARK_DONE)
        self._commit()
        self._emit_celebrate()
        return task

    def reopen_task(self, task_id: str) -> Optional[Task]:
        return self.update_task(task_id, {"status": "todo", "progress": 0})

    def add_minutes(self, task_id: str, minutes: Any) -> Optional[Task]:
        """Manual time credit. Adds hours but no Session."""
        try:
            minutes = float(minutes)
        except (TypeError, ValueError):
            minutes = 0
        if not (math.isfinite(minutes) and minutes > 0):
            logger.debug("Ignoring minutes %r", minutes)
            return None

        task = self._find(task_id)
        if task is None:
            return None

        self._accumulate(task, minutes, self.clock())
        self._commit()
        return task

    def award_xp(self, amount: int, celebrate: bool = False) -> Meta:
        self.meta = grant_xp(self.meta, amount)
        self._persist()
        self._emit_change()
        if celebrate:
            self._emit_celebrate()
        return self.meta

    # ----- live timer -----
    def start_timer(self, task_id: str) -> bool:
        task = self._find(task_id)
        if task is None:
            return False
        if task.is_timing:
            # keep the first timer_start
            return False

        now = self.clock()
        task.is_timing = True
        task.timer_start = now
        task.updated_at = now
        self._commit()
        return True

    def stop_timer(self, task_id: str) -> Optional[Session]:
        """
        Running -> Idle. Commits the elapsed interval as a Session and adds
        its minutes to hours_done. Returns None if the task was not timing.
        """
        task = self._find(task_id)
        if task is None or not task.is_timing or task.timer_start is None:
            return None

        now = max(self.clock(), task.timer_start)
        minutes = minutes_between(task.timer_start, now)
        session = Session(start=task.timer_start, end=now, minutes=minutes)

        task.sessions.append(session)
        task.is_timing = False
        task.timer_start = None
        self._accumulate(task, minutes, now)
        self._commit()
        return session

    def pause_timer(self, task_id: str) -> Optional[Session]:
        return self.stop_timer(task_id)

    def end_timer(self, task_id: str) -> Optional[Session]:
        # same transition as pause; there is no separate finished state
        return self.stop_timer(task_id)
