"""Appenders: the destinations that logging events are written to."""

from __future__ import annotations

import abc
import os
import threading
from collections import deque
from typing import IO

from hierlog.errors import FactoryParams
from hierlog.event import LoggingEvent
from hierlog.filter import Decision, Filter
from hierlog.layout import BasicLayout, Layout
from hierlog.priority import Priority, get_priority_value

__all__ = [
    "Appender",
    "AppenderSkeleton",
    "LayoutAppender",
    "AbortAppender",
    "OstreamAppender",
    "StringQueueAppender",
    "TriggeringEventEvaluator",
    "LevelEvaluator",
    "BufferingAppender",
    "get_appender",
    "reopen_all",
    "close_all",
    "delete_all_appenders",
    "create_abort_appender",
    "create_level_evaluator",
]

_registry: dict[str, Appender] = {}
_registry_lock = threading.RLock()


def get_appender(name: str) -> Appender | None:
    """Return the live appender registered under *name*, or None."""
    with _registry_lock:
        return _registry.get(name)


def reopen_all() -> bool:
    """Reopen every appender; stop at the first failure and return False."""
    with _registry_lock:
        return all(appender.reopen() for appender in list(_registry.values()))


def close_all() -> None:
    """Close every registered appender."""
    with _registry_lock:
        for appender in list(_registry.values()):
            appender.close()


def delete_all_appenders() -> None:
    """Dispose of every registered appender and empty the registry."""
    with _registry_lock:
        appenders = list(_registry.values())
        _registry.clear()
    for appender in appenders:
        appender.dispose()


class Appender(abc.ABC):
    """A named destination for logging events, registered globally by name."""

    def __init__(self, name: str) -> None:
        self.name = name
        with _registry_lock:
            _registry[name] = self

    @abc.abstractmethod
    def do_append(self, event: LoggingEvent) -> None:
        """Log *event* to this appender."""

    @abc.abstractmethod
    def reopen(self) -> bool:
        """Reopen the underlying resource; return True on success."""

    @abc.abstractmethod
    def close(self) -> None:
        """Release the underlying resource."""

    @abc.abstractmethod
    def requires_layout(self) -> bool:
        """Return True when this appender formats events through a layout."""

    @abc.abstractmethod
    def set_layout(self, layout: Layout | None) -> None:
        """Use *layout* to format events."""

    def dispose(self) -> None:
        """Close the appender and remove it from the registry."""
        self.close()
        with _registry_lock:
            if _registry.get(self.name) is self:
                del _registry[self.name]

    def __enter__(self) -> Appender:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()


class AppenderSkeleton(Appender):
    """An appender with a priority threshold and an optional filter chain."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.threshold: int = Priority.NOTSET
        self.filter: Filter | None = None

    def do_append(self, event: LoggingEvent) -> None:
        if self.threshold == Priority.NOTSET or event.priority <= self.threshold:
            if self.filter is None or self.filter.decide(event) != Decision.DENY:
                self._append(event)

    def reopen(self) -> bool:
        return True

    @abc.abstractmethod
    def _append(self, event: LoggingEvent) -> None:
        """Write *event*, which has already passed threshold and filter."""


class LayoutAppender(AppenderSkeleton):
    """An appender that formats events with a layout, BasicLayout by default."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self._layout: Layout = BasicLayout()

    def requires_layout(self) -> bool:
        return True

    def set_layout(self, layout: Layout | None) -> None:
        """Use *layout*; None restores the default layout."""
        if layout is not self._layout:
            self._layout = BasicLayout() if layout is None else layout

    @property
    def layout(self) -> Layout:
        return self._layout


class AbortAppender(AppenderSkeleton):
    """Aborts the process as soon as it receives an event."""

    def close(self) -> None:
        pass

    def _append(self, event: LoggingEvent) -> None:
        os.abort()

    def requires_layout(self) -> bool:
        return False

    def set_layout(self, layout: Layout | None) -> None:
        pass


class OstreamAppender(LayoutAppender):
    """Writes formatted events to a text stream."""

    def __init__(self, name: str, stream: IO[str]) -> None:
        super().__init__(name)
        self.stream = stream

    def close(self) -> None:
        pass

    def _append(self, event: LoggingEvent) -> None:
        self.stream.write(self.layout.format(event))


class StringQueueAppender(LayoutAppender):
    """Keeps formatted events in memory, oldest first."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.queue: deque[str] = deque()

    def close(self) -> None:
        pass

    def _append(self, event: LoggingEvent) -> None:
        self.queue.append(self.layout.format(event))

    def queue_size(self) -> int:
        return len(self.queue)

    def pop_message(self) -> str:
        """Remove and return the oldest message, or '' when there is none."""
        return self.queue.popleft() if self.queue else ""


class TriggeringEventEvaluator(abc.ABC):
    """Decides whether an event should trigger some action."""

    @abc.abstractmethod
    def eval(self, event: LoggingEvent) -> bool:
        """Return True when *event* triggers."""


class LevelEvaluator(TriggeringEventEvaluator):
    """Triggers on events whose priority value is at least *level*."""

    def __init__(self, level: int) -> None:
        self.level = level

    def eval(self, event: LoggingEvent) -> bool:
        return event.priority >= self.level


class BufferingAppender(LayoutAppender):
    """Buffers events and passes them to a sink as one event when triggered."""

    def __init__(
        self,
        name: str,
        max_size: int,
        sink: Appender,
        evaluator: TriggeringEventEvaluator,
    ) -> None:
        super().__init__(name)
        self.max_size = max(1, max_size)
        self.sink = sink
        self.evaluator = evaluator
        self.lossy = False
        # newest event at the left, oldest at the right
        self._queue: deque[LoggingEvent] = deque()

    def close(self) -> None:
        pass

    def dispose(self) -> None:
        super().dispose()
        self.sink.dispose()

    def _append(self, event: LoggingEvent) -> None:
        if len(self._queue) == self.max_size:
            if self.lossy:
                self._queue.pop()
            else:
                self.dump()
        self._queue.appendleft(event)
        if self.evaluator.eval(event):
            self.dump()
            self._queue.clear()

    def dump(self) -> None:
        """Send the buffered events, oldest first, to the sink as one event."""
        text = "".join(self.layout.format(event) for event in reversed(self._queue))
        self.sink.do_append(LoggingEvent("", text, "", Priority.NOTSET))


def create_abort_appender(params: FactoryParams) -> Appender:
    (name,) = params.required("abort appender", "name")
    return AbortAppender(name)


def create_level_evaluator(params: FactoryParams) -> TriggeringEventEvaluator:
    (level,) = params.required("level evaluator", "level")
    return LevelEvaluator(get_priority_value(level))