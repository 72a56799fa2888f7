# -*- coding: utf-8 -*-

import logging
from typing import Callable, Optional

from focusplay import config
from focusplay.core.timer_engine import EngineSnapshot, PomodoroEngine
from focusplay.domain.models import Task
from focusplay.services.task_service import TaskService

logger = logging.getLogger(__name__)


class TimerService:
    """
    Orchestrates:
    - PomodoroEngine state
    - the focused task (a selection, not part of any Task)
    - XP + time credit when a focus phase completes
    - Callbacks for UI
    """

    def __init__(
        self,
        task_service: TaskService,
        focus_sec: int = config.FOCUS_SEC,
        break_sec: int = config.BREAK_SEC,
    ):
        self.task_service = task_service
        self.engine = PomodoroEngine(focus_sec=focus_sec, break_sec=break_sec)

        self.focused_task_id: Optional[str] = None

        self._on_tick: Optional[Callable[[EngineSnapshot], None]] = None
        self._on_phase_change: Optional[Callable[[EngineSnapshot], None]] = None
        self._on_state_change: Optional[Callable[[EngineSnapshot], None]] = None

    # ----- Callbacks -----
    def set_on_tick(self, fn: Callable[[EngineSnapshot], None]) -> None:
        self._on_tick = fn

    def set_on_phase_change(self, fn: Callable[[EngineSnapshot], None]) -> None:
        self._on_phase_change = fn

    def set_on_state_change(self, fn: Callable[[EngineSnapshot], None]) -> None:
        self._on_state_change = fn

    def _emit_tick(self) -> None:
        if self._on_tick:
            self._on_tick(self.engine.snapshot())

    def _emit_phase_change(self) -> None:
        if self._on_phase_change:
            self._on_phase_change(self.engine.snapshot())

    def _emit_state_change(self) -> None:
        if self._on_state_change:
            self._on_state_change(self.engine.snapshot())

    # ----- Focus selection -----
    def set_focused_task(self, task_id: Optional[str]) -> None:
        self.focused_task_id = task_id or None

    def toggle_focus(self, task_id: str) -> Optional[str]:
        self.focused_task_id = None if self.focused_task_id == task_id else task_id
        return self.focused_task_id

    def get_focused_task(self) -> Optional[Task]:
        if not self.focused_task_id:
            return None
        task = self.task_service.get_task(self.focused_task_id)
        if task is None:
            # task was removed
            self.focused_task_id = None
        return task

    # ----- Public API -----
    def get_snapshot(self) -> EngineSnapshot:
        return self.engine.snapshot()

    def start(self) -> None:
        self.engine.start()
        self._emit_state_change()
        self._emit_tick()

    def pause(self) -> None:
        self.engine.pause()
        self._emit_state_change()
        self._emit_tick()

    def toggle(self) -> None:
        self.engine.toggle()
        self._emit_state_change()
        self._emit_tick()

    def reset(self) -> None:
        self.engine.reset()
        self._emit_state_change()
        self._emit_tick()

    def set_duration(self, minutes: int) -> bool:
        if not self.engine.set_duration(minutes):
            logger.debug("Ignoring focus duration %r", minutes)
            return False
        self._emit_state_change()
        self._emit_tick()
        return True

    def tick(self) -> None:
        """
        Should be called once per second by the caller's loop.
        Handles phase switching + focus credit.
        """
        if not self.engine.is_running:
            return

        phase_changed = self.engine.tick()

        # always emit tick
        self._emit_tick()

        if phase_changed:
            snap = self.engine.snapshot()
            logger.info("Pomodoro phase -> %s", snap.phase)
            if snap.phase == "break":
                self._on_focus_complete()
            else:
                self._emit_state_change()
            self._emit_phase_change()

    def _on_focus_complete(self) -> None:
        self.task_service.award_xp(config.XP_POMODORO, celebrate=True)
        task = self.get_focused_task()
        if task is not None:
            # fixed credit, not the configured focus length
            self.task_service.add_minutes(task.id, config.POMODORO_CREDIT_MIN)
