# -*- coding: utf-8 -*-
"""
Read-only projections over a task snapshot.

Nothing here mutates a Task; every function can be recomputed at any time
and returns the same result for the same snapshot and day.
"""

import datetime as dt
import math
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

from focusplay import config
from focusplay.core.clock import DAY_MS, local_day, now_ms
from focusplay.domain.models import Session, Task

Forecast = Union[int, float]  # float only for math.inf


def progress_from_hours(hours_done: float, total_hours: float, current: int) -> int:
    if total_hours > 0:
        return min(100, int(math.floor(hours_done / total_hours * 100 + 0.5)))
    return current


def forecast_days_left(
    hours_done: float, total_hours: float, start_date: int, now: int
) -> Forecast:
    """
    Days left at the average daily rate since start_date.
    Returns math.inf when nothing has been done yet.
    """
    remaining = max(0.0, total_hours - hours_done)
    if remaining <= 0:
        return 0
    elapsed_days = max(1, (now - start_date) // DAY_MS)
    daily_rate = hours_done / elapsed_days
    if daily_rate <= 0:
        return math.inf
    return int(math.ceil(remaining / daily_rate))


def task_eta(task: Task, now: Optional[int] = None) -> Optional[Forecast]:
    if task.total_hours <= 0:
        return None
    return forecast_days_left(
        task.hours_done,
        task.total_hours,
        task.start_date,
        now if now is not None else now_ms(),
    )


def _minutes_by_day(sessions: Iterable[Session]) -> Dict[dt.date, int]:
    out: Dict[dt.date, int] = defaultdict(int)
    for s in sessions:
        out[local_day(s.start)] += s.minutes
    return out


def _trailing_days(today: dt.date, n: int) -> List[dt.date]:
    return [today - dt.timedelta(days=n - 1 - i) for i in range(n)]


# ---- weekly report ----
@dataclass(frozen=True)
class DayTotal:
    day: dt.date
    minutes: int

    @property
    def hours(self) -> float:
        return self.minutes / 60


@dataclass(frozen=True)
class FocusedTask:
    task_id: str
    title: str
    minutes: int


@dataclass(frozen=True)
class WeeklyReport:
    days: List[DayTotal]  # oldest first, today last
    total_minutes: int
    total_hours: float
    avg_hours_per_day: float
    most_focused: Optional[FocusedTask]


def compute_weekly_report(
    tasks: List[Task], today: Optional[dt.date] = None
) -> WeeklyReport:
    today = today or dt.date.today()
    days = _trailing_days(today, 7)
    window = set(days)

    per_day = _minutes_by_day(s for t in tasks for s in t.sessions)
    totals = [DayTotal(day=d, minutes=per_day.get(d, 0)) for d in days]
    total_min = sum(d.minutes for d in totals)

    top: Optional[FocusedTask] = None
    for t in tasks:
        mins = sum(s.minutes for s in t.sessions if local_day(s.start) in window)
        # first task wins ties, same as a stable sort by minutes
        if mins > 0 and (top is None or mins > top.minutes):
            top = FocusedTask(task_id=t.id, title=t.title, minutes=mins)

    return WeeklyReport(
        days=totals,
        total_minutes=total_min,
        total_hours=total_min / 60,
        avg_hours_per_day=total_min / 7 / 60,
        most_focused=top,
    )


# ---- heatmap ----
@dataclass(frozen=True)
class HeatmapCell:
    day: dt.date
    minutes: int
    level: int  # 0..4

    @property
    def label(self) -> str:
        return config.HEATMAP_LABELS[self.level]


def intensity_level(minutes: int) -> int:
    level = 0
    for i, threshold in enumerate(config.HEATMAP_THRESHOLDS, start=1):
        if minutes >= threshold:
            level = i
    return level


def compute_heatmap(
    sessions: Iterable[Session],
    window_days: int = 7,
    today: Optional[dt.date] = None,
) -> List[HeatmapCell]:
    today = today or dt.date.today()
    per_day = _minutes_by_day(sessions)
    cells = []
    for d in _trailing_days(today, max(1, int(window_days))):
        mins = per_day.get(d, 0)
        cells.append(HeatmapCell(day=d, minutes=mins, level=intensity_level(mins)))
    return cells


def study_week(
    sessions: Iterable[Session], today: Optional[dt.date] = None
) -> List[tuple]:
    """(day, studied) for the current week, Sunday first."""
    today = today or dt.date.today()
    # date.weekday(): Monday=0 .. Sunday=6
    sunday = today - dt.timedelta(days=(today.weekday() + 1) % 7)
    studied = set(_minutes_by_day(sessions))
    week = [sunday + dt.timedelta(days=i) for i in range(7)]
    return [(d, d in studied) for d in week]


# ---- overview ----
@dataclass(frozen=True)
class TaskStats:
    total: int
    done: int
    avg_progress: int
    hours_total: float
    hours_done: float
    overall_pct: int


def compute_stats(tasks: List[Task]) -> TaskStats:
    total = len(tasks)
    done = sum(1 for t in tasks if t.status == "done")
    avg = int(math.floor(sum(t.progress for t in tasks) / total + 0.5)) if total else 0

    hours_total = sum(t.total_hours for t in tasks)
    hours_done = sum(t.hours_done for t in tasks)
    overall = progress_from_hours(hours_done, hours_total, 0)

    return TaskStats(
        total=total,
        done=done,
        avg_progress=avg,
        hours_total=round(hours_total, 2),
        hours_done=round(hours_done, 2),
        overall_pct=overall,
    )


FILTER_VIEWS = ("all", "active", "done", "today")


def filter_tasks(
    tasks: List[Task], view: str = "all", today: Optional[dt.date] = None
) -> List[Task]:
    view = (view or "all").strip().lower()
    if view not in FILTER_VIEWS:
        return list(tasks)
    if view == "active":
        return [t for t in tasks if t.status != "done"]
    if view == "done":
        return [t for t in tasks if t.status == "done"]
    if view == "today":
        key = (today or dt.date.today()).isoformat()
        return [t for t in tasks if t.due == key]
    return list(tasks)  # all
