# -*- coding: utf-8 -*-

import datetime as dt
from dataclasses import replace
from typing import List

from focusplay import config
from focusplay.core.clock import day_key, local_day, parse_day_key
from focusplay.domain.models import Meta, Task


def grant_xp(meta: Meta, amount: int) -> Meta:
    if amount <= 0:
        return meta
    return replace(meta, xp=meta.xp + int(amount))


def _touched_at(t: Task) -> int:
    return t.updated_at or t.last_update or t.created_at


def done_on(tasks: List[Task], day: dt.date) -> bool:
    return any(t.status == "done" and local_day(_touched_at(t)) == day for t in tasks)


def apply_completion(meta: Meta, tasks: List[Task], today: dt.date) -> Meta:
    """
    Daily completion bonus, granted at most once per calendar day.

    Streak grows when the previous credited day was yesterday, otherwise it
    restarts at 1.
    """
    today_key = day_key(today)
    if meta.last_done_day == today_key or not done_on(tasks, today):
        return meta

    last = parse_day_key(meta.last_done_day)
    yesterday = today - dt.timedelta(days=1)
    streak = meta.streak + 1 if last == yesterday else 1

    return Meta(
        xp=meta.xp + config.XP_DAILY,
        streak=streak,
        last_done_day=today_key,
    )
