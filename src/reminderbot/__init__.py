"""Reminder bot for stale pull-request reviews and undeleted merged branches."""

__version__ = "0.1.0"
