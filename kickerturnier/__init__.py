"""Kickerturnier: group stage and top-4 knockout engine for table-football tournaments."""

__version__ = "0.1.0"
