"""A layout configured by a conversion pattern such as '%d %p %c - %m%n'."""

from __future__ import annotations

import re
import time
from typing import Callable

from hierlog.errors import ConfigureFailure, FactoryParams
from hierlog.event import LoggingEvent, TimeStamp
from hierlog.layout import Layout
from hierlog.priority import get_priority_name

__all__ = ["PatternLayout", "create_pattern_layout"]

Component = Callable[[LoggingEvent], str]

_SIGNED = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"[ \t\n\r\f\v]*[0-9]+")
_LEADING_INT = re.compile(r"[ \t\n\r\f\v]*([+-]?[0-9]+)")

_FORMAT_ISO8601 = "%Y-%m-%d %H:%M:%S,%l"
_FORMAT_ABSOLUTE = "%H:%M:%S,%l"
_FORMAT_DATE = "%d %b %Y %H:%M:%S,%l"
_NAMED_TIME_FORMATS = {
    "": _FORMAT_ISO8601,
    "ISO8601": _FORMAT_ISO8601,
    "ABSOLUTE": _FORMAT_ABSOLUTE,
    "DATE": _FORMAT_DATE,
}


def _literal(text: str) -> Component:
    return lambda event: text


def _category_name(specifier: str) -> Component:
    if specifier == "":
        precision = -1
    else:
        match = _LEADING_INT.match(specifier)
        precision = int(match.group(1)) if match else 0

    def render(event: LoggingEvent) -> str:
        name = event.category_name
        if precision == -1:
            return name
        begin = None
        for _ in range(precision):
            if begin is None or begin < 2:
                found = name.rfind(".")
            else:
                found = name.rfind(".", 0, begin - 1)
            if found < 0:
                begin = 0
                break
            begin = found + 1
        return name[begin or 0:]

    return render


def _message(specifier: str) -> Component:
    return lambda event: event.message


def _ndc(specifier: str) -> Component:
    return lambda event: event.ndc


def _priority(specifier: str) -> Component:
    return lambda event: get_priority_name(event.priority)


def _thread_name(specifier: str) -> Component:
    return lambda event: event.thread_name


def _processor_time(specifier: str) -> Component:
    return lambda event: str(int(time.process_time() * 1_000_000))


def _time_stamp(specifier: str) -> Component:
    time_format = _NAMED_TIME_FORMATS.get(specifier, specifier)
    head, marker, tail = time_format.partition("%l")

    def render(event: LoggingEvent) -> str:
        stamp = event.time_stamp
        fmt = f"{head}{stamp.milliseconds:03d}{tail}" if marker else head
        if not fmt:
            return ""
        return time.strftime(fmt, time.localtime(stamp.seconds))

    return render


def _seconds_since_epoch(specifier: str) -> Component:
    return lambda event: str(event.time_stamp.seconds)


def _millis_since_start(specifier: str) -> Component:
    def render(event: LoggingEvent) -> str:
        start = TimeStamp.get_start_time()
        stamp = event.time_stamp
        elapsed = (stamp.seconds - start.seconds) * 1000
        elapsed += stamp.milliseconds - start.milliseconds
        return str(elapsed)

    return render


def _format_modifier(component: Component, min_width: int, max_width: int, align_left: bool) -> Component:
    def render(event: LoggingEvent) -> str:
        text = component(event)
        if 0 < max_width < len(text):
            text = text[:max_width]
        if min_width > len(text):
            return text.ljust(min_width) if align_left else text.rjust(min_width)
        return text

    return render


_COMPONENTS: dict[str, Callable[[str], Component]] = {
    "m": _message,
    "c": _category_name,
    "d": _time_stamp,
    "p": _priority,
    "r": _millis_since_start,
    "R": _seconds_since_epoch,
    "t": _thread_name,
    "u": _processor_time,
    "x": _ndc,
}


class PatternLayout(Layout):
    """Formats events according to a printf-like conversion pattern."""

    DEFAULT_CONVERSION_PATTERN = "%m%n"
    SIMPLE_CONVERSION_PATTERN = "%p - %m%n"
    BASIC_CONVERSION_PATTERN = "%R %p %c %x: %m%n"
    TTCC_CONVERSION_PATTERN = "%r [%t] %p %c %x - %m%n"

    def __init__(self) -> None:
        self._components: list[Component] = []
        self._conversion_pattern = ""
        self.set_conversion_pattern(self.DEFAULT_CONVERSION_PATTERN)

    def clear_conversion_pattern(self) -> None:
        self._components = []
        self._conversion_pattern = ""

    def set_conversion_pattern(self, pattern: str) -> None:
        """Parse *pattern*; raises ConfigureFailure on a malformed specifier."""
        self.clear_conversion_pattern()
        literal: list[str] = []
        min_width = 0
        max_width = 0
        pos = 0
        end = len(pattern)

        def unterminated(at: int) -> ConfigureFailure:
            return ConfigureFailure(
                f"unterminated conversion specifier in '{pattern}' at index {at}"
            )

        while pos < end:
            ch = pattern[pos]
            pos += 1
            if ch != "%":
                literal.append(ch)
                continue

            if pos < end and (pattern[pos] == "-" or pattern[pos] in "0123456789"):
                match = _SIGNED.match(pattern, pos)
                if match is None:
                    raise unterminated(pos)
                min_width = int(match.group())
                pos = match.end()
            if pos < end and pattern[pos] == ".":
                match = _UNSIGNED.match(pattern, pos + 1)
                if match is None:
                    raise unterminated(pos + 1)
                max_width = int(match.group())
                pos = match.end()

            if pos >= end:
                raise unterminated(pos)
            ch = pattern[pos]
            pos += 1

            postfix = ""
            if pos < end and pattern[pos] == "{":
                close = pattern.find("}", pos + 1)
                if close < 0:
                    postfix = pattern[pos + 1:]
                    pos = end
                else:
                    postfix = pattern[pos + 1:close]
                    pos = close + 1

            if ch == "%":
                literal.append("%")
                continue
            if ch == "n":
                literal.append("\n")
                continue

            factory = _COMPONENTS.get(ch)
            if factory is None:
                raise ConfigureFailure(
                    f"unknown conversion specifier '{ch}' in '{pattern}' at index {pos}"
                )
            component = factory(postfix)
            if literal:
                self._components.append(_literal("".join(literal)))
                literal.clear()
            if min_width != 0 or max_width != 0:
                component = _format_modifier(component, abs(min_width), max_width, min_width < 0)
                min_width = max_width = 0
            self._components.append(component)

        if literal:
            self._components.append(_literal("".join(literal)))
        self._conversion_pattern = pattern

    def get_conversion_pattern(self) -> str:
        return self._conversion_pattern

    def format(self, event: LoggingEvent) -> str:
        return "".join(component(event) for component in self._components)


_NAMED_PATTERNS = {
    "simple": PatternLayout.SIMPLE_CONVERSION_PATTERN,
    "basic": PatternLayout.BASIC_CONVERSION_PATTERN,
    "ttcc": PatternLayout.TTCC_CONVERSION_PATTERN,
}


def create_pattern_layout(params: FactoryParams) -> Layout:
    """Create a PatternLayout from the optional 'pattern' parameter.

    The names 'default', 'simple', 'basic' and 'ttcc' select the predefined
    patterns; anything else is used as the pattern itself.
    """
    pattern = params.optional("pattern", "")
    layout = PatternLayout()
    if pattern in ("", "default"):
        return layout
    layout.set_conversion_pattern(_NAMED_PATTERNS.get(pattern, pattern))
    return layout