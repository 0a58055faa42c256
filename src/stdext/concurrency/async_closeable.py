"""
Scoped release of asynchronously closeable resources.

Provides the ``use`` helper which runs a unit of work against a resource and
always awaits the resource's ``close()`` afterwards, together with the
bookkeeping needed to keep a failing ``close()`` from hiding the failure
that caused the resource to be released in the first place.
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar, runtime_checkable

_SUPPRESSED_ATTR = "_stdext_suppressed"


@runtime_checkable
class SupportsAsyncClose(Protocol):
    """Anything exposing an awaitable ``close()``."""

    async def close(self) -> None: ...


T = TypeVar("T", bound=SupportsAsyncClose | None)
R = TypeVar("R")


class AsyncCloseable(ABC):
    """
    A resource that is released with an awaitable ``close()``.

    Implementations should release every underlying resource and mark
    themselves closed before raising from ``close()``. Calling ``close()``
    more than once may have visible side effects, so implementations are
    strongly encouraged to make it idempotent.

    Subclasses can be used directly as async context managers:

        async with MyConnection() as conn:
            await conn.send(b"ping")

    which releases the resource with the same failure precedence as ``use``.
    """

    @abstractmethod
    async def close(self) -> None:
        """
        Close this resource.

        This may raise, so prefer ``use`` or ``async with`` over calling it
        directly.
        """

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await close_finally(self, exc_val)
        return False


def add_suppressed(exception: BaseException, suppressed: BaseException) -> None:
    """
    Attach ``suppressed`` to ``exception`` as secondary failure information.

    The suppressed exception is appended to the list returned by
    ``get_suppressed`` and summarised as a note, so it shows up when the
    primary exception's traceback is rendered.

    Raises:
        ValueError: If an exception is attached to itself.
    """
    if suppressed is exception:
        raise ValueError("Self-suppression not permitted") from suppressed
    chain = exception.__dict__.get(_SUPPRESSED_ATTR)
    if chain is None:
        chain = []
        setattr(exception, _SUPPRESSED_ATTR, chain)
    chain.append(suppressed)
    exception.add_note(f"Suppressed: {type(suppressed).__name__}: {suppressed}")


def get_suppressed(exception: BaseException) -> tuple[BaseException, ...]:
    """Return the exceptions suppressed in favour of ``exception``, in order."""
    return tuple(exception.__dict__.get(_SUPPRESSED_ATTR, ()))


async def close_finally(
    resource: SupportsAsyncClose | None, cause: BaseException | None
) -> None:
    """
    Close ``resource`` after a unit of work finished with ``cause``.

    Args:
        resource: The resource to release. ``None`` is ignored.
        cause: The exception raised by the unit of work, or ``None`` if it
            completed normally. When set, a failure from ``close()`` is
            attached to it instead of being raised.
    """
    if resource is None:
        return
    if cause is None:
        await resource.close()
        return
    try:
        await resource.close()
    except BaseException as close_exception:
        # close() re-raising the cause itself is not a second failure
        if close_exception is not cause:
            add_suppressed(cause, close_exception)


async def use(resource: T, block: Callable[[T], Awaitable[R] | R]) -> R:
    """
    Run ``block`` on ``resource`` and close the resource whatever happens.

    ``block`` is called exactly once with the resource. It may be a coroutine
    function or a plain callable. Once it has returned or raised, the
    resource's ``close()`` is awaited exactly once, unless the resource is
    ``None``.

    If ``block`` raises, its exception propagates; should ``close()`` fail as
    well, the close failure is attached to it (see ``get_suppressed``). If
    only ``close()`` fails, that failure propagates. Cancellation of the
    calling task is handled like any other failure of ``block``.

    Example:
        async def read_all(conn):
            return await conn.read()

        payload = await use(await open_connection(host), read_all)

    Args:
        resource: A resource with an awaitable ``close()``, or ``None``.
        block: The unit of work to run against the resource.

    Returns:
        The value returned (or awaited) from ``block``.
    """
    try:
        result = block(resource)
        if inspect.isawaitable(result):
            result = await result
    except BaseException as exception:
        await close_finally(resource, exception)
        raise
    await close_finally(resource, None)
    return result


__all__ = [
    "AsyncCloseable",
    "SupportsAsyncClose",
    "add_suppressed",
    "close_finally",
    "get_suppressed",
    "use",
]
