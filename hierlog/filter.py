"""Chainable filters that decide whether an appender handles an event."""

from __future__ import annotations

import abc
import enum

from hierlog.event import LoggingEvent

__all__ = ["Decision", "Filter"]


class Decision(enum.IntEnum):
    DENY = -1
    NEUTRAL = 0
    ACCEPT = 1


class Filter(abc.ABC):
    """A filter with an optional next filter that is consulted on NEUTRAL."""

    def __init__(self, chained_filter: Filter | None = None) -> None:
        self.chained_filter = chained_filter

    @abc.abstractmethod
    def _decide(self, event: LoggingEvent) -> Decision:
        """Return this filter's own decision on *event*."""

    def decide(self, event: LoggingEvent) -> Decision:
        """Decide on *event*, passing NEUTRAL decisions down the chain."""
        decision = self._decide(event)
        if decision == Decision.NEUTRAL and self.chained_filter is not None:
            decision = self.chained_filter.decide(event)
        return decision

    def end_of_chain(self) -> Filter:
        """Return the last filter of the chain starting here."""
        end = self
        while end.chained_filter is not None:
            end = end.chained_filter
        return end

    def append_chained_filter(self, filter: Filter) -> None:
        """Attach *filter* after the last filter of the chain."""
        self.end_of_chain().chained_filter = filter