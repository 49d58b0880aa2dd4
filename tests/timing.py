"""Timestamp helper shared by tests."""

from datetime import time


def at(hours: int, minutes: int = 0, seconds: int = 0, millis: int = 0) -> time:
    """Build a checkpoint timestamp."""
    return time(hours, minutes, seconds, millis * 1000)
