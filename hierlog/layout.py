"""Layouts that turn logging events into text."""

from __future__ import annotations

import abc

from hierlog.errors import FactoryParams
from hierlog.event import LoggingEvent
from hierlog.priority import MESSAGE_SIZE, get_priority_name

__all__ = [
    "Layout",
    "BasicLayout",
    "SimpleLayout",
    "PassThroughLayout",
    "create_basic_layout",
    "create_simple_layout",
    "create_pass_through_layout",
]


class Layout(abc.ABC):
    """Formats a logging event into a string."""

    @abc.abstractmethod
    def format(self, event: LoggingEvent) -> str:
        """Return the text for *event*."""


class BasicLayout(Layout):
    """Fixed format: 'seconds priority category ndc: message'."""

    def format(self, event: LoggingEvent) -> str:
        priority_name = get_priority_name(event.priority)
        return (
            f"{event.time_stamp.seconds} {priority_name} "
            f"{event.category_name} {event.ndc}: {event.message}\n"
        )


class SimpleLayout(Layout):
    """Fixed format: the priority name padded to a fixed width, then the message."""

    def format(self, event: LoggingEvent) -> str:
        priority_name = get_priority_name(event.priority)
        return f"{priority_name:<{MESSAGE_SIZE}}: {event.message}\n"


class PassThroughLayout(Layout):
    """Returns the message unchanged."""

    def format(self, event: LoggingEvent) -> str:
        return event.message


def create_basic_layout(params: FactoryParams) -> Layout:
    return BasicLayout()


def create_simple_layout(params: FactoryParams) -> Layout:
    return SimpleLayout()


def create_pass_through_layout(params: FactoryParams) -> Layout:
    return PassThroughLayout()