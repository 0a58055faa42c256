"""Small helpers for working with sequences."""

from __future__ import annotations

from typing import Callable, Sequence, TypeVar

T = TypeVar("T")


def map_last(items: Sequence[T], transform: Callable[[T], T]) -> list[T]:
    """Return a copy of ``items`` with only the last element transformed.

    Args:
        items: The sequence to copy.
        transform: Applied to the last element. Not called for an empty sequence.

    Returns:
        A new list; ``items`` itself is left untouched.

    Examples:
        >>> map_last(["foo", "bar"], str.upper)
        ['foo', 'BAR']
        >>> map_last([], str.upper)
        []
    """
    result = list(items)
    if result:
        result[-1] = transform(result[-1])
    return result


__all__ = ["map_last"]
