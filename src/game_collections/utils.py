"""Small helpers shared by the filter engine."""

import re
from collections.abc import Iterable
from typing import TypeVar

T = TypeVar("T")


def unique(values: Iterable[T]) -> list[T]:
    """Remove duplicates, keeping the first occurrence of each value.

    Example:
        >>> unique(["zip", "7z", "zip"])
        ['zip', '7z']
    """
    seen: set = set()
    result: list[T] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def rx_match(pattern: re.Pattern | None, text: str) -> bool:
    """Search ``text`` with an optional pattern. No pattern never matches."""
    return pattern is not None and pattern.search(text) is not None


def file_suffix(name: str) -> str:
    """Lowercase text after the last dot of a file name ("" if there is none).

    Directories get a suffix too, and a leading-dot name like ``.hidden``
    has suffix ``hidden``.
    """
    _, dot, suffix = name.rpartition(".")
    return suffix.lower() if dot else ""
