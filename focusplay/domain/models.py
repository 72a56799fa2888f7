# -*- coding: utf-8 -*-

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from focusplay.core.clock import day_key, parse_day_key


def minutes_between(start_ms: int, end_ms: int) -> int:
    # rounds half up
    return max(0, int(math.floor((end_ms - start_ms) / 60000 + 0.5)))


def coerce_tags(value: Any) -> Optional[List[str]]:
    """A plain string is one tag. Returns None for values that are not tags."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return None


def coerce_hours(value: Any) -> float:
    try:
        hours = float(value or 0)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(hours) or math.isinf(hours) or hours < 0:
        return 0.0
    return hours


@dataclass(frozen=True)
class Session:
    start: int  # epoch ms
    end: int
    minutes: int

    def to_dict(self) -> Dict[str, int]:
        return {"start": self.start, "end": self.end, "minutes": self.minutes}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Session":
        start = int(d["start"])
        end = int(d.get("end") or start)
        minutes = d.get("minutes")
        if minutes is None:
            minutes = minutes_between(start, end)
        return cls(start=start, end=end, minutes=max(0, int(minutes)))


@dataclass
class Task:
    id: str
    title: str
    status: str = "todo"  # todo | doing | done
    url: str = ""
    notes: str = ""
    tags: List[str] = field(default_factory=list)
    progress: int = 0
    total_hours: float = 0.0
    hours_done: float = 0.0
    start_date: int = 0
    due: str = ""  # yyyy-mm-dd
    sessions: List[Session] = field(default_factory=list)
    is_timing: bool = False
    timer_start: Optional[int] = None
    created_at: int = 0
    updated_at: Optional[int] = None
    last_update: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "notes": self.notes,
            "status": self.status,
            "progress": self.progress,
            "createdAt": self.created_at,
            "due": self.due,
            "tags": list(self.tags),
            "totalHours": self.total_hours,
            "hoursDone": self.hours_done,
            "startDate": self.start_date,
            "lastUpdate": self.last_update,
            "updatedAt": self.updated_at,
            "sessions": [s.to_dict() for s in self.sessions],
            "isTiming": self.is_timing,
            "timerStart": self.timer_start,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Task":
        created_at = int(d.get("createdAt") or 0)
        timer_start = d.get("timerStart")
        is_timing = bool(d.get("isTiming")) and timer_start is not None
        status = d.get("status") or "todo"
        if status not in ("todo", "doing", "done"):
            status = "todo"
        return cls(
            id=str(d["id"]),
            title=d.get("title") or "",
            status=status,
            url=d.get("url") or "",
            notes=d.get("notes") or "",
            tags=coerce_tags(d.get("tags")) or [],
            progress=max(0, min(100, int(d.get("progress") or 0))),
            total_hours=coerce_hours(d.get("totalHours")),
            hours_done=coerce_hours(d.get("hoursDone")),
            start_date=int(d.get("startDate") or created_at),
            due=d.get("due") or "",
            sessions=[Session.from_dict(s) for s in (d.get("sessions") or [])],
            is_timing=is_timing,
            timer_start=int(timer_start) if is_timing else None,
            created_at=created_at,
            updated_at=d.get("updatedAt"),
            last_update=d.get("lastUpdate"),
        )


@dataclass(frozen=True)
class Meta:
    xp: int = 0
    streak: int = 0
    last_done_day: str = ""  # yyyy-mm-dd

    def to_dict(self) -> Dict[str, Any]:
        return {"xp": self.xp, "streak": self.streak, "lastDoneDay": self.last_done_day}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Meta":
        # older stores keyed the day as "Sun Oct 18 2026"
        day = parse_day_key(str(d.get("lastDoneDay") or ""))
        return cls(
            xp=max(0, int(d.get("xp") or 0)),
            streak=max(0, int(d.get("streak") or 0)),
            last_done_day=day_key(day) if day else "",
        )
