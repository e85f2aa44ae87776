"""Named categories arranged in a dotted hierarchy, and the registry holding them."""

from __future__ import annotations

import threading
from typing import Callable

from hierlog import ndc
from hierlog.appender import Appender, delete_all_appenders
from hierlog.appender import get_appender as _lookup_appender
from hierlog.event import LoggingEvent
from hierlog.priority import Priority
from hierlog.stringutil import vform

__all__ = [
    "Category",
    "CategoryStream",
    "HierarchyMaintainer",
    "get_default_maintainer",
    "get_root",
    "get_instance",
    "exists",
    "get_current_categories",
    "set_root_priority",
    "get_root_priority",
    "shutdown",
    "shutdown_forced",
]


class Category:
    """A named logger with a priority, appenders and a parent category.

    Events logged to a category go to its own appenders and, while the
    category is additive, to those of its ancestors as well.
    """

    def __init__(self, name: str, parent: Category | None, priority: int = Priority.NOTSET) -> None:
        self.name = name
        self.parent = parent
        self._priority = int(priority)
        self.additivity = True
        # appender -> whether this category owns (and so disposes of) it
        self._appenders: dict[Appender, bool] = {}
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"Category({self.name!r})"

    @property
    def priority(self) -> int:
        return self._priority

    def set_priority(self, priority: int) -> None:
        """Set the priority; NOTSET is refused on the root category."""
        if priority < Priority.NOTSET or self.parent is not None:
            self._priority = int(priority)
        else:
            raise ValueError("cannot set priority NOTSET on Root Category")

    def get_chained_priority(self) -> int:
        """Return the first priority set on this category or an ancestor."""
        category: Category = self
        while category.priority >= Priority.NOTSET:
            assert category.parent is not None
            category = category.parent
        return category.priority

    def add_appender(self, appender: Appender | None, owned: bool = True) -> None:
        """Attach *appender*; an owned appender is disposed of on removal."""
        if appender is None:
            raise ValueError("NULL appender")
        with self._lock:
            if appender not in self._appenders:
                self._appenders[appender] = owned

    def get_appender(self, name: str | None = None) -> Appender | None:
        """Without *name*, return the first appender, or None if there is none.

        With *name*, look the appender up among all live appenders, provided
        this category has any appender at all.
        """
        with self._lock:
            if not self._appenders:
                return None
            if name is None:
                return next(iter(self._appenders))
        return _lookup_appender(name)

    def get_all_appenders(self) -> set[Appender]:
        with self._lock:
            return set(self._appenders)

    def remove_all_appenders(self) -> None:
        """Detach every appender, disposing of the owned ones."""
        with self._lock:
            owned = [appender for appender, own in self._appenders.items() if own]
            self._appenders.clear()
        for appender in owned:
            appender.dispose()

    def remove_appender(self, appender: Appender) -> None:
        """Detach *appender*, disposing of it if owned; unknown ones are ignored."""
        with self._lock:
            if appender not in self._appenders:
                return
            owned = self._appenders.pop(appender)
        if owned:
            appender.dispose()

    def owns_appender(self, appender: Appender | None) -> bool:
        if appender is None:
            return False
        with self._lock:
            return self._appenders.get(appender, False)

    def call_appenders(self, event: LoggingEvent) -> None:
        """Pass *event* to the appenders here and, if additive, up the hierarchy."""
        with self._lock:
            appenders = list(self._appenders)
        for appender in appenders:
            appender.do_append(event)
        if self.additivity and self.parent is not None:
            self.parent.call_appenders(event)

    def _log_unconditionally(self, priority: int, message: str) -> None:
        event = LoggingEvent(self.name, message, ndc.get(), priority)
        self.call_appenders(event)

    def is_priority_enabled(self, priority: int) -> bool:
        return self.get_chained_priority() >= priority

    def log(self, priority: int, message: str, *args: object) -> None:
        """Log *message*, printf-formatted with *args* if any, at *priority*."""
        if self.is_priority_enabled(priority):
            text = vform(message, *args) if args else message
            self._log_unconditionally(priority, text)

    def debug(self, message: str, *args: object) -> None:
        self.log(Priority.DEBUG, message, *args)

    def info(self, message: str, *args: object) -> None:
        self.log(Priority.INFO, message, *args)

    def notice(self, message: str, *args: object) -> None:
        self.log(Priority.NOTICE, message, *args)

    def warn(self, message: str, *args: object) -> None:
        self.log(Priority.WARN, message, *args)

    def error(self, message: str, *args: object) -> None:
        self.log(Priority.ERROR, message, *args)

    def crit(self, message: str, *args: object) -> None:
        self.log(Priority.CRIT, message, *args)

    def alert(self, message: str, *args: object) -> None:
        self.log(Priority.ALERT, message, *args)

    def emerg(self, message: str, *args: object) -> None:
        self.log(Priority.EMERG, message, *args)

    def fatal(self, message: str, *args: object) -> None:
        self.log(Priority.FATAL, message, *args)

    def get_stream(self, priority: int) -> CategoryStream:
        """Return a stream that logs at *priority*, or discards if it is disabled."""
        return CategoryStream(self, priority if self.is_priority_enabled(priority) else Priority.NOTSET)


class CategoryStream:
    """Collects pieces of a message and logs them as one event on flush."""

    def __init__(self, category: Category, priority: int) -> None:
        self.category = category
        self.priority = priority
        self._buffer: list[str] | None = None

    def write(self, value: object) -> CategoryStream:
        """Append *value* to the pending message unless the stream is disabled."""
        if self.priority != Priority.NOTSET:
            if self._buffer is None:
                self._buffer = []
            self._buffer.append(str(value))
        return self

    def __lshift__(self, value: object) -> CategoryStream:
        return self.write(value)

    def flush(self) -> None:
        """Log the pending message, if any, and start a new one."""
        if self._buffer is not None:
            text = "".join(self._buffer)
            self._buffer = None
            self.category.log(self.priority, text)

    def __enter__(self) -> CategoryStream:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.flush()


class HierarchyMaintainer:
    """Creates and keeps the categories of one hierarchy by name."""

    def __init__(self) -> None:
        self._categories: dict[str, Category] = {}
        self._lock = threading.RLock()
        self._handlers: list[Callable[[], None]] = []

    def get_existing_instance(self, name: str) -> Category | None:
        with self._lock:
            return self._categories.get(name)

    def get_instance(self, name: str) -> Category:
        """Return the category called *name*, creating it and its ancestors."""
        with self._lock:
            return self._get_instance(name)

    def _get_instance(self, name: str) -> Category:
        result = self._categories.get(name)
        if result is None:
            if name == "":
                result = Category(name, None, Priority.INFO)
            else:
                dot = name.rfind(".")
                parent_name = "" if dot < 0 else name[:dot]
                parent = self._get_instance(parent_name)
                result = Category(name, parent, Priority.NOTSET)
            self._categories[name] = result
        return result

    def get_current_categories(self) -> list[Category]:
        with self._lock:
            return list(self._categories.values())

    def shutdown(self) -> None:
        """Detach all appenders, then run the shutdown handlers.

        An exception from a handler stops the remaining handlers silently.
        """
        with self._lock:
            categories = list(self._categories.values())
        for category in categories:
            category.remove_all_appenders()
        try:
            for handler in list(self._handlers):
                handler()
        except Exception:
            pass

    def register_shutdown_handler(self, handler: Callable[[], None]) -> None:
        self._handlers.append(handler)

    def delete_all_categories(self) -> None:
        """Detach all appenders and forget every category."""
        with self._lock:
            categories = list(self._categories.values())
            self._categories.clear()
        for category in categories:
            category.remove_all_appenders()


_default_maintainer = HierarchyMaintainer()


def get_default_maintainer() -> HierarchyMaintainer:
    return _default_maintainer


def get_root() -> Category:
    return _default_maintainer.get_instance("")


def get_instance(name: str) -> Category:
    return _default_maintainer.get_instance(name)


def exists(name: str) -> Category | None:
    return _default_maintainer.get_existing_instance(name)


def get_current_categories() -> list[Category]:
    return _default_maintainer.get_current_categories()


def set_root_priority(priority: int) -> None:
    get_root().set_priority(priority)


def get_root_priority() -> int:
    return get_root().priority


def shutdown() -> None:
    _default_maintainer.shutdown()


def shutdown_forced() -> None:
    """Shut down and also dispose of every appender still alive."""
    _default_maintainer.shutdown()
    delete_all_appenders()