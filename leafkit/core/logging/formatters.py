# leafkit/core/logging/formatters.py
from __future__ import annotations
import logging

from leafkit.core.jsonutils import safeJsonDumps
from leafkit.core.redaction import redactText
from .context import LOG_CONTEXT_KEYS, getLogContext

__all__ = ["RedactingFormatter", "JsonFormatter", "DevFormatter"]



class RedactingFormatter(logging.Formatter):
    """Delegates to `inner` and masks secrets in the finished line."""

    def __init__(self, inner: logging.Formatter) -> None:
        super().__init__()
        self.inner = inner

    def format(self, record: logging.LogRecord) -> str:
        return redactText(self.inner.format(record))



class JsonFormatter(logging.Formatter):
    """One JSON object per line; used for log files and `configureLogging(json=True)` consoles."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": int(record.created * 1000),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
            "ctx": getLogContext() or {},
        }
        if record.exc_info and record.exc_info[1] is not None:
            error = record.exc_info[1]
            payload["exc"] = {
                "type": type(error).__name__,
                "message": str(error),
                "stack": self.formatException(record.exc_info),
            }
        return safeJsonDumps(payload)



class DevFormatter(logging.Formatter):
    """
    Console lines for people:

        WARNING: [leafkit.leafs.resolver] Leaf dependency cycle: ETHA -> ETHB -> ETHA [add/ETHA]

    The bracketed suffix lists command and leaf name from the log context.
    """

    def _contextSuffix(self) -> str:
        ctx = getLogContext() or {}
        shown = [ctx[key] for key in LOG_CONTEXT_KEYS if key != "projectRoot" and ctx.get(key)]
        return f" [{'/'.join(shown)}]" if shown else ""

    def format(self, record: logging.LogRecord) -> str:
        text = record.getMessage()
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        if record.stack_info:
            text = f"{text}\n{self.formatStack(record.stack_info)}"
        return f"{record.levelname}: [{record.name}] {text}{self._contextSuffix()}"
