from .async_closeable import (
    AsyncCloseable,
    SupportsAsyncClose,
    add_suppressed,
    close_finally,
    get_suppressed,
    use,
)
from .async_iterators import join_to_string, line_flow

__all__ = [
    "AsyncCloseable",
    "SupportsAsyncClose",
    "add_suppressed",
    "close_finally",
    "get_suppressed",
    "join_to_string",
    "line_flow",
    "use",
]
