"""
Per-request context.

The gateway authenticates each JSON-RPC request and stores the caller's API
key and user id here; tool handlers read them without threading them
through every call.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass(frozen=True)
class RequestContext:
    api_key: Optional[str] = None
    user_id: Optional[str] = None


_request_context: ContextVar[Optional[RequestContext]] = ContextVar(
    "request_context", default=None
)


@contextmanager
def request_context(context: RequestContext) -> Iterator[RequestContext]:
    """Bind `context` for the duration of the block."""
    token = _request_context.set(context)
    try:
        yield context
    finally:
        _request_context.reset(token)


def get_request_context() -> RequestContext:
    """Current request context; empty outside a request."""
    return _request_context.get() or RequestContext()
