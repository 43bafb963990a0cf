# leafkit/core/dictpath.py
from __future__ import annotations
import re
from collections.abc import Mapping
from typing import Any

__all__ = ["getByPath"]

# A segment is a run of non-dot characters; "\x" escapes any character (including ".")
_SEGMENT = r"(?:\\.|[^.\\])+"
_PATH_RE = re.compile(rf"{_SEGMENT}(?:\.{_SEGMENT})*", re.DOTALL)
_SEGMENT_RE = re.compile(_SEGMENT, re.DOTALL)
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)



def _splitPath(path: str) -> list[str] | None:
    """
    "leafs.prefix" -> ["leafs", "prefix"], "a\\.b.c" -> ["a.b", "c"].
    None for empty segments or a dangling trailing backslash.
    """
    if not _PATH_RE.fullmatch(path):
        return None
    return [_ESCAPE_RE.sub(r"\1", segment) for segment in _SEGMENT_RE.findall(path)]



def getByPath(obj: Any, path: str, default: Any | None = None) -> Any:
    """Value at dotted `path` inside nested mappings; `default` when a hop is missing or the path is invalid."""
    if not isinstance(path, str):
        return default
    parts = _splitPath(path)
    if parts is None:
        return default

    current = obj
    for part in parts:
        if not isinstance(current, Mapping) or part not in current:
            return default
        current = current[part]
    return current
