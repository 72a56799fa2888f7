# -*- coding: utf-8 -*-
"""Progress and time-tracking engine for self-paced learning tasks."""

from focusplay.app import App, create_app

__version__ = "0.1.0"

__all__ = ["App", "create_app"]
