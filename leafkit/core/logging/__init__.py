# leafkit/core/logging/__init__.py
from __future__ import annotations

from .context import clearLogContext, getLogContext, leafLogContext, setLogContext
from .setup import configureLogging

__all__ = [
    "configureLogging",
    "setLogContext",
    "clearLogContext",
    "getLogContext",
    "leafLogContext",
]
