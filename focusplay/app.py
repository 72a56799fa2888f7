#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from focusplay import config
from focusplay.core.clock import Clock, now_ms
from focusplay.services.task_service import TaskService
from focusplay.services.timer_service import TimerService
from focusplay.storage.db import Database
from focusplay.storage.repos import TrackerRepo


@dataclass
class App:
    db: Database
    tasks: TaskService
    timer: TimerService

    def close(self) -> None:
        self.db.close()


def create_app(db_path: Union[str, Path] = config.DB_PATH, clock: Clock = now_ms) -> App:
    db = Database(db_path=db_path)
    db.init_schema()

    repo = TrackerRepo(db)
    task_service = TaskService(repo, clock=clock)
    timer_service = TimerService(task_service)

    return App(db=db, tasks=task_service, timer=timer_service)
