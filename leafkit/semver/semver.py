# leafkit/semver/semver.py
from __future__ import annotations

import re
from itertools import zip_longest
from typing import Literal

__all__ = [
    "SEMVER_PATTERN_RE",
    "parseLeafVersion",
    "compareVersions",
    "isNewerVersion",
    "isStrictSemVer",
]



SEMVER_PATTERN_RE = re.compile(
    r"^v?(?P<major>0|[1-9]\d*)"
    r"\.(?P<minor>0|[1-9]\d*)"
    r"\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>(?:0|[1-9]\d*|[0-9A-Za-z-]*[A-Za-z-][0-9A-Za-z-]*)"
    r"(?:\.(?:0|[1-9]\d*|[0-9A-Za-z-]*[A-Za-z-][0-9A-Za-z-]*))*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)

_UNSIGNED_RE = re.compile(r"\d+")

# Stays under the interpreter's int/str conversion limit (4300 digits)
_DIGIT_CHUNK = 4000



def _segmentValue(digits: str) -> int:
    """Exact integer value of a digit run of any length."""
    value = 0
    for start in range(0, len(digits), _DIGIT_CHUNK):
        chunk = digits[start:start + _DIGIT_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return value



def parseLeafVersion(raw: str | None) -> tuple[int, ...]:
    """
    Parse a leaf manifest version into numeric segments.

    Lenient by contract, never raises:
        "1.2.3"      -> (1, 2, 3)
        "v2.0"       -> (2, 0)
        "V2.0"       -> (0, 0)      only a lowercase v is a prefix
        "1.x.3"      -> (1, 0, 3)   non-numeric segment counts as 0
        "1.0.0-rc.1" -> (1, 0, 0, 1) suffixes are not understood: "0-rc" counts as 0
        ""  / None   -> (0,)
    """
    if not isinstance(raw, str):
        return (0,)
    text = raw.strip()
    # Accept a single leading lowercase 'v' (v1.2.3 -> 1.2.3)
    if text.startswith("v"):
        text = text[1:]
    segments: list[int] = []
    for part in text.split("."):
        part = part.strip()
        segments.append(_segmentValue(part) if _UNSIGNED_RE.fullmatch(part) else 0)
    return tuple(segments)



def compareVersions(first: str | None, second: str | None) -> Literal[-1, 0, 1]:
    """
    Compare two leaf versions segment by segment.

    Returns -1 if first < second, 0 if equal, 1 if first > second.
    Missing trailing segments count as 0, so "1.2" == "1.2.0".
    """
    for left, right in zip_longest(parseLeafVersion(first), parseLeafVersion(second), fillvalue=0):
        if left > right:
            return 1
        if left < right:
            return -1
    return 0



def isNewerVersion(candidate: str | None, current: str | None) -> bool:
    """True iff `candidate` is strictly greater than `current`."""
    return compareVersions(candidate, current) > 0



def isStrictSemVer(raw: str | None) -> bool:
    """True when `raw` is a full MAJOR.MINOR.PATCH[-pre][+build] version (optional 'v')."""
    return isinstance(raw, str) and SEMVER_PATTERN_RE.match(raw.strip()) is not None
