# -*- coding: utf-8 -*-
"""Configuration constants for focusplay."""

from pathlib import Path

# Storage
DATA_DIR = Path.home() / ".focusplay"
DB_PATH = DATA_DIR / "focusplay.db"
TASKS_KEY = "tasks"
META_KEY = "meta"

# Pomodoro
FOCUS_SEC = 25 * 60
BREAK_SEC = 5 * 60
MIN_FOCUS_MIN = 1
MAX_FOCUS_MIN = 180
POMODORO_CREDIT_MIN = 25  # credited per focus phase, whatever the configured length

# XP
XP_MARK_DONE = 20
XP_POMODORO = 15
XP_DAILY = 10

# Heatmap: minimum minutes for levels 1..4
HEATMAP_THRESHOLDS = (1, 30, 60, 120)
HEATMAP_LABELS = ("none", "low", "medium", "high", "very-high")

# Task defaults
DEFAULT_TAG = "General"
UNTITLED = "Untitled"
STATUSES = ("todo", "doing", "done")
