"""A file appender that starts a new file whenever the local date changes."""

from __future__ import annotations

import datetime
import os
import sys
import time

from hierlog.appender import Appender
from hierlog.errors import FactoryParams
from hierlog.event import LoggingEvent
from hierlog.fileappender import FileAppender

__all__ = ["DailyRollingFileAppender", "create_daily_roll_file_appender"]

_SECONDS_PER_DAY = 60 * 60 * 24


class DailyRollingFileAppender(FileAppender):
    """Rolls the log file over on the first event of each new day.

    The finished file is renamed to '<file>.YYYY-MM-DD' after the day it
    covers. Regular files next to it whose names contain the log file's
    name and that are older than max_days_to_keep days are deleted.
    """

    max_days_to_keep_default = 30

    def __init__(
        self,
        name: str,
        file_name: str,
        max_days_to_keep: int = 0,
        append: bool = True,
        mode: int = 0o644,
    ) -> None:
        super().__init__(name, file_name, append, mode)
        self.max_days_to_keep = (
            max_days_to_keep if max_days_to_keep != 0 else self.max_days_to_keep_default
        )
        try:
            stamp = os.stat(file_name).st_mtime
        except OSError:
            stamp = time.time()
        self.logs_date = datetime.date.fromtimestamp(stamp)

    def _backup_name(self) -> str:
        day = self.logs_date
        return f"{self.file_name}.{day.year}-{day.month:02d}-{day.day:02d}"

    def roll_over(self) -> None:
        """Rename the current file after its date, reopen, and prune old files."""
        self.close()
        last_name = self._backup_name()
        try:
            os.rename(self.file_name, last_name)
        except OSError:
            print(f"Error renaming file {self.file_name} to {last_name}", file=sys.stderr)

        self._fd = self._open()
        if self._fd == -1:
            print(f"Error opening file {self.file_name}", file=sys.stderr)

        oldest = time.time() - self.max_days_to_keep * _SECONDS_PER_DAY
        dirname, base = os.path.split(self.file_name)
        if not dirname:
            dirname = "."
        try:
            entries = sorted(os.listdir(dirname))
        except OSError:
            return
        for entry in entries:
            full_name = os.path.join(dirname, entry)
            try:
                info = os.stat(full_name)
            except OSError:
                continue
            if not os.path.isfile(full_name):
                continue
            if info.st_mtime < oldest and base in entry:
                print(f" Deleting {full_name}")
                try:
                    os.unlink(full_name)
                except OSError:
                    pass

    def _append(self, event: LoggingEvent) -> None:
        today = datetime.date.today()
        if today != self.logs_date:
            self.roll_over()
            self.logs_date = today
        super()._append(event)


def create_daily_roll_file_appender(params: FactoryParams) -> Appender:
    name, filename, max_days_keep = params.required(
        "daily roll file appender", "name", "filename", "max_days_keep"
    )
    append = params.optional("append", True)
    mode = params.optional("mode", 664)
    return DailyRollingFileAppender(name, filename, int(max_days_keep), append, mode)