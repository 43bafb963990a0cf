# leafkit/core/jsonutils.py
from __future__ import annotations
import json
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import PurePath
from typing import Any

__all__ = ["safeJsonDumps"]



def _jsonDefault(obj: Any) -> Any:
    """`default=` hook for json.dumps covering the types leafkit puts into log records."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json", by_alias=True)
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, PurePath):
        return str(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=repr)
    if isinstance(obj, BaseException):
        return {"type": type(obj).__name__, "message": str(obj)}
    return repr(obj)



def safeJsonDumps(obj: object) -> str:
    """
    Compact single-line JSON that never raises.

    Unknown objects go through `_jsonDefault`; circular structures and
    NaN/Infinity collapse the whole value to its repr string.
    """
    try:
        return json.dumps(obj, ensure_ascii=False, allow_nan=False, separators=(",", ":"), default=_jsonDefault)
    except ValueError:
        return json.dumps(repr(obj), ensure_ascii=False)
