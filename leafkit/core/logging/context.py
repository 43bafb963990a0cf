# leafkit/core/logging/context.py
from __future__ import annotations
import contextvars
from collections.abc import Iterator
from contextlib import contextmanager

__all__ = ["setLogContext", "clearLogContext", "getLogContext", "leafLogContext"]

# Keys formatters know how to render, in display order
LOG_CONTEXT_KEYS = ("command", "leafName", "projectRoot")

_leafLogContext: contextvars.ContextVar[dict[str, str] | None] = contextvars.ContextVar(
    "leafkit.logctx", default=None
)



def setLogContext(
    *,
    command: str | None = None,
    leafName: str | None = None,
    projectRoot: str | None = None,
) -> None:
    """Merge the given values into the current context; None leaves a key untouched."""
    updates = {"command": command, "leafName": leafName, "projectRoot": projectRoot}
    merged = dict(_leafLogContext.get() or {})
    merged.update({key: str(value) for key, value in updates.items() if value is not None})
    _leafLogContext.set(merged)



def clearLogContext() -> None:
    _leafLogContext.set(None)



def getLogContext() -> dict[str, str] | None:
    return _leafLogContext.get()



@contextmanager
def leafLogContext(leafName: str) -> Iterator[None]:
    """Tag records emitted inside the block with `leafName`, restoring the previous context on exit."""
    merged = dict(_leafLogContext.get() or {})
    merged["leafName"] = leafName
    token = _leafLogContext.set(merged)
    try:
        yield
    finally:
        _leafLogContext.reset(token)
