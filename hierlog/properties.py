"""A key/value store loaded from log4j-style property files."""

from __future__ import annotations

import os
import re
from typing import IO, Iterable

from hierlog.stringutil import trim

__all__ = ["Properties"]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_PREFIXES = ("log4j", "log4cpp")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


class Properties(dict):
    """Properties keyed by name; the first definition of a key wins."""

    def load(self, stream: Iterable[str]) -> None:
        """Replace the contents with the properties read from *stream*.

        Text after '#' is a comment, lines without '=' are ignored and a
        leading 'log4j.' or 'log4cpp.' is stripped from each key. Values
        may refer to environment variables or earlier properties as ${name}.
        """
        self.clear()
        for raw in stream:
            line = raw[:-1] if raw.endswith("\n") else raw
            hash_pos = line.find("#")
            if hash_pos == 0:
                continue
            command = line if hash_pos < 0 else line[:hash_pos]
            key, sep, value = command.partition("=")
            if not sep:
                continue
            key = trim(key)
            value = self._substitute_variables(trim(value))
            head, dot, rest = key.partition(".")
            if dot and head in _PREFIXES:
                key = rest
            self.setdefault(key, value)

    def save(self, stream: IO[str]) -> None:
        """Write the properties as 'key=value' lines in key order."""
        for key in sorted(self):
            stream.write(f"{key}={self[key]}\n")

    def get_int(self, name: str, default: int) -> int:
        """Return the leading integer of the value, 0 if there is none."""
        if name not in self:
            return default
        return _atoi(self[name])

    def get_bool(self, name: str, default: bool) -> bool:
        """Return True only when the value is exactly 'true'."""
        if name not in self:
            return default
        return self[name] == "true"

    def get_string(self, name: str, default: str) -> str:
        return self.get(name, default)

    def _substitute_variables(self, value: str) -> str:
        right = value.find("${")
        if right < 0:
            return value

        parts: list[str] = []
        left = 0
        while True:
            if right < 0:
                parts.append(value[left:])
                break
            parts.append(value[left:right])
            left = right + 2
            right = value.find("}", left)
            if right < 0:
                # no closing brace: keep the rest literally
                parts.append(value[left - 2:])
                break
            key = value[left:right]
            if key == "${":
                parts.append("${")
            else:
                env_value = os.environ.get(key) if key else None
                if env_value is not None:
                    parts.append(env_value)
                else:
                    parts.append(self.get(key, ""))
            left = right + 1
            right = value.find("${", left)
        return "".join(parts)