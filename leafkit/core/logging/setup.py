# leafkit/core/logging/setup.py
from __future__ import annotations
import logging
import logging.handlers
from pathlib import Path

from leafkit.app.settings import settings, settingsBool
from .formatters import DevFormatter, JsonFormatter, RedactingFormatter

__all__ = [
    "configureLogging",
]

_HANDLER_MARK = "_leafkitHandler"



def _resolveLevel(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if level is None:
        if settingsBool("debug.devModeEnabled", False):
            return logging.DEBUG
        level = settings("logging.level", "INFO")
    # "info" / "INFO" -> logging.INFO; unknown names fall back to INFO
    resolved = getattr(logging, str(level).strip().upper(), None)
    return resolved if isinstance(resolved, int) else logging.INFO



def configureLogging(
    level: int | str | None = None,
    *,
    logFile: str | Path | None = None,
    json: bool = False,
) -> None:
    """
    Install leafkit's handlers on the "leafkit" logger.

      - Console: DevFormatter (or one-line JSON when `json`), redacted
      - Optional rotating JSON file log at `logFile` (or setting `logging.file`)

    Calling it again replaces the handlers it installed before.
    """
    rootLevel = _resolveLevel(level)

    root = logging.getLogger("leafkit")
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(rootLevel)

    consoleFmt = RedactingFormatter(JsonFormatter() if json else DevFormatter())
    consoleHandler = logging.StreamHandler()
    consoleHandler.setLevel(rootLevel)
    consoleHandler.setFormatter(consoleFmt)
    setattr(consoleHandler, _HANDLER_MARK, True)
    root.addHandler(consoleHandler)

    filePath = logFile or settings("logging.file", None)
    if filePath:
        fileHandler = logging.handlers.RotatingFileHandler(
            str(filePath),
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        fileHandler.setLevel(rootLevel)
        fileHandler.setFormatter(RedactingFormatter(JsonFormatter()))
        setattr(fileHandler, _HANDLER_MARK, True)
        root.addHandler(fileHandler)
