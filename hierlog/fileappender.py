"""Appenders that write to files, optionally rolling over by size."""

from __future__ import annotations

import os

from hierlog.appender import Appender, LayoutAppender
from hierlog.errors import FactoryParams
from hierlog.event import LoggingEvent

__all__ = [
    "FileAppender",
    "RollingFileAppender",
    "create_file_appender",
    "create_roll_file_appender",
]

_BASE_FLAGS = os.O_CREAT | os.O_APPEND | os.O_WRONLY


class FileAppender(LayoutAppender):
    """Writes formatted events to a file, or to an already open descriptor.

    A file that cannot be opened leaves the appender without a descriptor;
    writes are then dropped until a successful reopen().
    """

    def __init__(
        self,
        name: str,
        file_name: str = "",
        append: bool = True,
        mode: int = 0o644,
        fd: int | None = None,
    ) -> None:
        super().__init__(name)
        self.mode = mode
        self._flags = _BASE_FLAGS
        if fd is not None:
            self.file_name = ""
            self._fd = fd
            return
        self.file_name = file_name
        if not append:
            self._flags |= os.O_TRUNC
        self._fd = self._open()

    def _open(self) -> int:
        try:
            return os.open(self.file_name, self._flags, self.mode)
        except OSError:
            return -1

    @property
    def fd(self) -> int:
        return self._fd

    @property
    def append(self) -> bool:
        return not (self._flags & os.O_TRUNC)

    @append.setter
    def append(self, value: bool) -> None:
        if value:
            self._flags &= ~os.O_TRUNC
        else:
            self._flags |= os.O_TRUNC

    def close(self) -> None:
        if self._fd != -1:
            try:
                os.close(self._fd)
            except OSError:
                pass
            self._fd = -1

    def reopen(self) -> bool:
        """Reopen the named file; True when it worked or there is no file name."""
        if not self.file_name:
            return True
        try:
            fd = os.open(self.file_name, self._flags, self.mode)
        except OSError:
            return False
        self.close()
        self._fd = fd
        return True

    def _append(self, event: LoggingEvent) -> None:
        if self._fd == -1:
            return
        try:
            os.write(self._fd, self.layout.format(event).encode("utf-8"))
        except OSError:
            pass


class RollingFileAppender(FileAppender):
    """A file appender that rolls the file over once it reaches a size limit.

    Backups are named '<file>.<n>', with n zero-padded to the width of the
    highest backup index; '<file>.1' is the most recent.
    """

    def __init__(
        self,
        name: str,
        file_name: str,
        max_file_size: int = 10 * 1024 * 1024,
        max_backup_index: int = 1,
        append: bool = True,
        mode: int = 0o644,
    ) -> None:
        super().__init__(name, file_name, append, mode)
        self.max_backup_index = max_backup_index if max_backup_index > 0 else 1
        self.max_file_size = max_file_size

    @property
    def max_backup_index(self) -> int:
        return self._max_backup_index

    @max_backup_index.setter
    def max_backup_index(self, value: int) -> None:
        self._max_backup_index = value
        self._index_width = len(str(value)) if value > 0 else 1

    def _backup_name(self, index: int) -> str:
        return f"{self.file_name}.{index:0{self._index_width}d}"

    def roll_over(self) -> None:
        """Shift the backups up by one, move the file to backup 1, start afresh."""
        self.close()
        if self._max_backup_index > 0:
            last = self._backup_name(self._max_backup_index)
            try:
                os.remove(last)
            except OSError:
                pass
            for index in range(self._max_backup_index, 1, -1):
                previous = self._backup_name(index - 1)
                try:
                    os.rename(previous, last)
                except OSError:
                    pass
                last = previous
            try:
                os.rename(self.file_name, last)
            except OSError:
                pass
        self._fd = self._open()

    def _append(self, event: LoggingEvent) -> None:
        super()._append(event)
        if self._fd == -1:
            return
        try:
            offset = os.lseek(self._fd, 0, os.SEEK_END)
        except OSError:
            return
        if offset >= self.max_file_size:
            self.roll_over()


def create_file_appender(params: FactoryParams) -> Appender:
    name, filename = params.required("file appender", "name", "filename")
    append = params.optional("append", True)
    mode = params.optional("mode", 664)
    return FileAppender(name, filename, append, mode)


def create_roll_file_appender(params: FactoryParams) -> Appender:
    name, filename, max_file_size, max_backup_index = params.required(
        "roll file appender", "name", "filename", "max_file_size", "max_backup_index"
    )
    append = params.optional("append", True)
    mode = params.optional("mode", 664)
    return RollingFileAppender(
        name, filename, int(max_file_size), int(max_backup_index), append, mode
    )