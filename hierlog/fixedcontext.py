"""A category view that logs with a fixed diagnostic context."""

from __future__ import annotations

from hierlog.appender import Appender
from hierlog.category import Category, get_instance
from hierlog.event import LoggingEvent
from hierlog.priority import Priority

__all__ = ["FixedContextCategory"]


class FixedContextCategory(Category):
    """Logs through an existing category, tagging every event with *context*.

    Appenders and additivity belong to the delegate category; changing them
    here has no effect. The priority may be set here to narrow logging.
    """

    def __init__(self, name: str, context: str = "") -> None:
        self._delegate = get_instance(name)
        super().__init__(name, self._delegate.parent)
        self.context = context

    @property
    def delegate(self) -> Category:
        return self._delegate

    @property
    def additivity(self) -> bool:
        return self._delegate.additivity

    @additivity.setter
    def additivity(self, value: bool) -> None:
        pass

    def get_chained_priority(self) -> int:
        result = self.priority
        if result == Priority.NOTSET:
            result = self._delegate.get_chained_priority()
        return result

    def add_appender(self, appender: Appender | None, owned: bool = True) -> None:
        pass

    def get_appender(self, name: str | None = None) -> Appender | None:
        return self._delegate.get_appender(name)

    def get_all_appenders(self) -> set[Appender]:
        return self._delegate.get_all_appenders()

    def remove_all_appenders(self) -> None:
        pass

    def owns_appender(self, appender: Appender | None = None) -> bool:
        return False

    def call_appenders(self, event: LoggingEvent) -> None:
        self._delegate.call_appenders(event)

    def _log_unconditionally(self, priority: int, message: str) -> None:
        event = LoggingEvent(self.name, message, self.context, priority)
        self.call_appenders(event)