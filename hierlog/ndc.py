"""Nested diagnostic context: a per-thread stack of context messages."""

from __future__ import annotations

import threading
from dataclasses import dataclass

__all__ = [
    "DiagnosticContext",
    "clear",
    "clone_stack",
    "get",
    "get_depth",
    "inherit",
    "pop",
    "push",
    "set_max_depth",
]


@dataclass(frozen=True)
class DiagnosticContext:
    """One stack entry: its own message and the messages of the whole path."""

    message: str
    full_message: str


_local = threading.local()
_used = False


def _stack() -> list[DiagnosticContext]:
    stack = getattr(_local, "stack", None)
    if stack is None:
        stack = []
        _local.stack = stack
    return stack


def clear() -> None:
    """Empty the current thread's context stack."""
    _stack().clear()


def clone_stack() -> list[DiagnosticContext]:
    """Return a copy of the current thread's context stack."""
    return list(_stack())


def get() -> str:
    """Return the full context message, or '' if there is none."""
    if not _used:
        return ""
    stack = _stack()
    return stack[-1].full_message if stack else ""


def get_depth() -> int:
    return len(_stack())


def inherit(stack: list[DiagnosticContext]) -> None:
    """Replace the current thread's stack with a copy of *stack*."""
    _local.stack = list(stack)


def pop() -> str:
    """Remove the innermost context and return its message.

    Raises IndexError when the stack is empty.
    """
    stack = _stack()
    if not stack:
        raise IndexError("pop from empty diagnostic context")
    return stack.pop().message


def push(message: str) -> None:
    """Push a new context message."""
    global _used
    _used = True
    stack = _stack()
    full = f"{stack[-1].full_message} {message}" if stack else message
    stack.append(DiagnosticContext(message, full))


def set_max_depth(max_depth: int) -> None:
    """Record the requested maximum depth for this thread.

    The value is kept but the stack depth is not limited.
    """
    _local.max_depth = int(max_depth)