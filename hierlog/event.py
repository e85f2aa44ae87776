"""Logging events, their time stamps and thread identification."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field

__all__ = ["TimeStamp", "LoggingEvent", "get_thread_id"]


def get_thread_id() -> str:
    """Return an identifier for the calling thread."""
    return str(threading.get_ident())


@dataclass(frozen=True, order=True)
class TimeStamp:
    """A point in time as whole seconds and microseconds since the epoch."""

    seconds: int
    microseconds: int = 0

    @property
    def milliseconds(self) -> int:
        return self.microseconds // 1000

    @staticmethod
    def now() -> TimeStamp:
        ns = time.time_ns()
        return TimeStamp(ns // 1_000_000_000, (ns % 1_000_000_000) // 1000)

    @staticmethod
    def get_start_time() -> TimeStamp:
        """Return the moment the logging package was loaded."""
        return _START_TIME


_START_TIME = TimeStamp.now()


@dataclass
class LoggingEvent:
    """Everything known about one logging request."""

    category_name: str
    message: str
    ndc: str
    priority: int
    thread_name: str = field(default_factory=get_thread_id)
    time_stamp: TimeStamp = field(default_factory=TimeStamp.now)