"""The simplest configuration: INFO priority and the root logging to stdout."""

from __future__ import annotations

import io
import os
import sys

from hierlog.category import get_root
from hierlog.fileappender import FileAppender
from hierlog.priority import Priority

__all__ = ["configure"]


def _stdout_fd() -> int:
    try:
        return sys.stdout.fileno()
    except (AttributeError, OSError, io.UnsupportedOperation, ValueError):
        return 1


def configure() -> None:
    """Set the root to INFO and replace its appenders with one on stdout."""
    root = get_root()
    root.set_priority(Priority.INFO)
    root.remove_all_appenders()
    root.add_appender(FileAppender("_", fd=os.dup(_stdout_fd())))