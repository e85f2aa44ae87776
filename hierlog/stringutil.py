"""Small string helpers: printf-style formatting, trimming and splitting."""

from __future__ import annotations

__all__ = ["vform", "trim", "split"]

_WHITESPACE = " \t\r\n"
_MAX_SEGMENTS = 2**31 - 1


def vform(fmt: str, *args: object) -> str:
    """Format *fmt* printf-style with *args*."""
    return fmt % args


def trim(s: str) -> str:
    """Strip leading and trailing spaces, tabs, carriage returns and newlines."""
    return s.strip(_WHITESPACE)


def split(s: str, delimiter: str, max_segments: int = _MAX_SEGMENTS) -> list[str]:
    """Split *s* on *delimiter* into at most *max_segments* segments.

    The string is scanned left to right, so the last segment may still
    contain the delimiter. At least one segment is always returned.
    """
    return s.split(delimiter, max(max_segments - 1, 0))