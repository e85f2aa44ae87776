"""Configuration errors and the parameter bag handed to factories."""

from __future__ import annotations

from typing import Any

__all__ = ["ConfigureFailure", "FactoryParams"]

_TRUE = {"1", "true"}
_FALSE = {"0", "false"}


class ConfigureFailure(RuntimeError):
    """Raised when a configuration cannot be read or is invalid."""


class FactoryParams(dict):
    """String parameters by name, with helpers for required and optional ones."""

    def __missing__(self, key: str) -> str:
        raise KeyError(f"There is no parameter '{key}'")

    def required(self, where: str, *args: str) -> tuple[str, ...]:
        """Return the values of the named parameters, in order.

        Raises ValueError naming *where* when one of them is missing.
        """
        missing = [name for name in args if name not in self]
        if missing:
            raise ValueError(f"Mandatory parameter '{missing[0]}' missing for {where}")
        return tuple(self[name] for name in args)

    def optional(self, name: str, default: Any) -> Any:
        """Return the parameter converted to the type of *default*, or *default*."""
        if name not in self:
            return default
        value = self[name]
        if isinstance(default, bool):
            lowered = value.strip().lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
            raise ValueError(f"Parameter '{name}' is not a boolean: '{value}'")
        if isinstance(default, int):
            try:
                return int(value.strip(), 0)
            except ValueError:
                raise ValueError(f"Parameter '{name}' is not an integer: '{value}'") from None
        return value