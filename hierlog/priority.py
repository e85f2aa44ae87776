"""Priority levels and conversion between priority names and values."""

from __future__ import annotations

import enum
import re

__all__ = ["Priority", "MESSAGE_SIZE", "get_priority_name", "get_priority_value"]

MESSAGE_SIZE = 8
"""Width that simple layouts pad priority names to."""


class Priority(enum.IntEnum):
    """Predefined priorities; lower values are more severe."""

    EMERG = 0
    FATAL = 0
    ALERT = 100
    CRIT = 200
    ERROR = 300
    WARN = 400
    NOTICE = 500
    INFO = 600
    DEBUG = 700
    NOTSET = 800


_NAMES = (
    "FATAL",
    "ALERT",
    "CRIT",
    "ERROR",
    "WARN",
    "NOTICE",
    "INFO",
    "DEBUG",
    "NOTSET",
    "UNKNOWN",
)

_NUMBER = re.compile(r"[ \t\n\r\f\v]*[+-]?[0-9]+")


def get_priority_name(priority: int) -> str:
    """Return the name of the priority band that *priority* falls in."""
    shifted = int(priority) + 1
    # integer division truncating towards zero
    index = shifted // 100 if shifted >= 0 else -((-shifted) // 100)
    if index < 0 or index > 8:
        index = 8
    return _NAMES[index]


def get_priority_value(name: str) -> int:
    """Return the numeric value for a priority name or a decimal number.

    Raises ValueError when *name* is neither.
    """
    if name in _NAMES:
        return _NAMES.index(name) * 100
    if name == "EMERG":
        return 0
    if name == "":
        return 0
    if _NUMBER.fullmatch(name):
        return int(name)
    raise ValueError(f"unknown priority name: '{name}'")