# -*- coding: utf-8 -*-

import datetime as dt
import time
from typing import Callable, Optional

Clock = Callable[[], int]

DAY_MS = 86_400_000


def now_ms() -> int:
    return int(time.time() * 1000)


def to_local(ts_ms: int) -> dt.datetime:
    return dt.datetime.fromtimestamp(ts_ms / 1000)


def local_day(ts_ms: int) -> dt.date:
    return to_local(ts_ms).date()


def day_key(day: dt.date) -> str:
    return day.isoformat()


def parse_day_key(key: str) -> Optional[dt.date]:
    """
    Accepts "YYYY-MM-DD" and the older "Sun Oct 18 2026" form.
    Returns None for anything else.
    """
    key = (key or "").strip()
    if not key:
        return None
    try:
        return dt.date.fromisoformat(key)
    except ValueError:
        pass
    try:
        return dt.datetime.strptime(key, "%a %b %d %Y").date()
    except ValueError:
        return None
