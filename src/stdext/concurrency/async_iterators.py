from collections.abc import AsyncIterator
from typing import AsyncIterable


async def join_to_string(aiterable: AsyncIterable[str]) -> str:
    """
    Concatenate every string fragment of an async iterable.

    Args:
        aiterable: The async iterable of string fragments.

    Returns:
        The fragments joined in iteration order, or "" for an empty iterable.

    Example:
        >>> async def gen():
        ...     yield "Hello"
        ...     yield " World!"
        >>> await join_to_string(gen())
        'Hello World!'
    """
    parts: list[str] = []
    async for fragment in aiterable:
        parts.append(fragment)
    return "".join(parts)


async def line_flow(text: str) -> AsyncIterator[str]:
    """
    Yield each line of a text with a trailing newline.

    Lines are split on "\\n" only. Empty lines are preserved and an empty
    text yields a single "\\n", so joining the flow gives back the text with
    exactly one newline appended.

    Args:
        text: The text to split into lines.

    Yields:
        str: The next line, terminated by "\\n".

    Example:
        >>> [line async for line in line_flow("a\\n\\nb")]
        ['a\\n', '\\n', 'b\\n']
    """
    for line in text.split("\n"):
        yield line + "\n"


__all__ = [
    "join_to_string",
    "line_flow",
]
