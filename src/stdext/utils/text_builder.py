"""Append-only text building.

``build_text`` collects string fragments through a ``TextScope`` and returns
the concatenated result:

    >>> def greet(t):
    ...     t += "hello"
    ...     t.append(",")
    ...     t += " world\\n"
    ...     t.trim_last_newline()
    >>> build_text(greet)
    'hello, world'
"""

from __future__ import annotations

from typing import Callable


class TextScope:
    """Accumulates text fragments for ``build_text``."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, fragment: str) -> TextScope:
        """Append a string (or single character) to the text.

        Raises:
            TypeError: If the fragment is not a string.
        """
        if not isinstance(fragment, str):
            raise TypeError(f"Expected str fragment, got {type(fragment).__name__}")
        if fragment:
            self._parts.append(fragment)
        return self

    def __iadd__(self, fragment: str) -> TextScope:
        return self.append(fragment)

    def trim_last_newline(self) -> None:
        """Remove one trailing newline, if the text ends with one."""
        if self._parts and self._parts[-1].endswith("\n"):
            last = self._parts[-1][:-1]
            if last:
                self._parts[-1] = last
            else:
                self._parts.pop()

    @property
    def text(self) -> str:
        return "".join(self._parts)

    def __repr__(self) -> str:
        return f"TextScope({self.text!r})"


def build_text(block: Callable[[TextScope], None]) -> str:
    """Run ``block`` once against a fresh ``TextScope`` and return its text."""
    scope = TextScope()
    block(scope)
    return scope.text


__all__ = [
    "TextScope",
    "build_text",
]
