# -*- coding: utf-8 -*-

from dataclasses import dataclass

from focusplay import config


@dataclass
class EngineSnapshot:
    phase: str  # "focus" | "break"
    remaining_sec: int
    is_running: bool
    completed: int  # focus phases finished


class PomodoroEngine:
    """
    Pure countdown engine, independent of any task timer.
    Caller triggers tick() each second.
    """

    def __init__(self, focus_sec: int = config.FOCUS_SEC, break_sec: int = config.BREAK_SEC):
        self.focus_sec = int(focus_sec)
        self.break_sec = int(break_sec)

        self.phase = "focus"
        self.remaining_sec = self.focus_sec
        self.is_running = False
        self.completed = 0

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            phase=self.phase,
            remaining_sec=self.remaining_sec,
            is_running=self.is_running,
            completed=self.completed,
        )

    def start(self) -> None:
        # continues from whatever is left
        self.is_running = True

    def pause(self) -> None:
        self.is_running = False

    def toggle(self) -> None:
        self.is_running = not self.is_running

    def reset(self) -> None:
        self.phase = "focus"
        self.remaining_sec = self.focus_sec
        self.is_running = False

    def set_duration(self, minutes: int) -> bool:
        """Presets (25/45/60) or custom minutes. Returns False if rejected."""
        try:
            minutes = int(minutes)
        except (TypeError, ValueError):
            return False
        if not config.MIN_FOCUS_MIN <= minutes <= config.MAX_FOCUS_MIN:
            return False
        self.focus_sec = minutes * 60
        self.phase = "focus"
        self.remaining_sec = self.focus_sec
        return True

    def tick(self) -> bool:
        """
        Returns True if phase changed on this tick.
        Focus -> break keeps running; break -> focus halts.
        """
        if not self.is_running:
            return False

        if self.remaining_sec > 0:
            self.remaining_sec -= 1

        if self.remaining_sec <= 0:
            if self.phase == "focus":
                self.phase = "break"
                self.remaining_sec = self.break_sec
                self.completed += 1
            else:
                self.phase = "focus"
                self.remaining_sec = self.focus_sec
                self.is_running = False
            return True

        return False
