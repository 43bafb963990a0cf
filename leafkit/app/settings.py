# leafkit/app/settings.py
from __future__ import annotations
import copy
import json5
from functools import lru_cache
from pathlib import Path
from typing import Any, cast

from pydantic import JsonValue

from leafkit.app.paths import PROJECT_SETTINGS_NAME, USER_SETTINGS_RELPATH
from leafkit.core.dictpath import getByPath

import logging
logger = logging.getLogger(__name__)

__all__ = [
    "SETTINGS", "loadUserSettings", "loadProjectSettings",
    "loadSettings", "clearSettingsCache", "deepMerge", "settings", "settingsBool",
]


SETTINGS: JsonValue = {
    "__source": "LEAFKIT_DEFAULTS",
    "catalog": {"root": None},
    "leafs": {
        "prefix": "ETH",
        "manifestFile": "leaf.json",
        "installRecordFile": ".leaf-install.json5",
        "rejectDependencyCycles": False,
    },
    "project": {"sourceDir": "src"},
    "requirements": {
        "modelDirs": ["models", "model"],
        "modelExtensions": [".ts", ".js"],
    },
    "debug": {"devModeEnabled": False},
    "logging": {"level": "INFO", "file": None},
}



def _readSettingsFile(filePath: Path) -> JsonValue:
    if not filePath.is_file():
        return {}
    try:
        data = json5.loads(filePath.read_text(encoding="utf-8"))
    except (OSError, ValueError) as err:
        logger.error("Failed to parse '%s': %s", filePath, err)
        return {}
    if not isinstance(data, dict):
        logger.error("Settings file '%s' must contain an object, got %s", filePath, type(data).__name__)
        return {}
    return cast(JsonValue, data)



def loadUserSettings() -> JsonValue:
    return _readSettingsFile(Path.home() / USER_SETTINGS_RELPATH)



def loadProjectSettings(projectRoot: str | Path) -> JsonValue:
    return _readSettingsFile(Path(projectRoot) / PROJECT_SETTINGS_NAME)



@lru_cache(maxsize=16)
def _loadSettingsCached(projectKey: str | None) -> JsonValue:
    merged = deepMerge(SETTINGS, loadUserSettings())
    if projectKey is not None:
        merged = deepMerge(merged, loadProjectSettings(projectKey))
    return merged



def loadSettings(projectRoot: str | Path | None = None) -> JsonValue:
    """
    Defaults, overlaid by ~/.leafkit/leafkit.json5, overlaid by
    <projectRoot>/leafkit.json5 when a project root is given.
    """
    projectKey = str(Path(projectRoot).resolve()) if projectRoot is not None else None
    # Callers get their own copy; the cached tree stays pristine
    return copy.deepcopy(_loadSettingsCached(projectKey))



def clearSettingsCache() -> None:
    _loadSettingsCached.cache_clear()



def deepMerge(base: JsonValue, overlay: JsonValue) -> JsonValue:
    """
    Overlay `overlay` onto `base` without mutating either.

    Objects merge key by key, recursively. Any other overlay value (list,
    scalar, null) replaces the base value wholesale.
    """
    if not (isinstance(base, dict) and isinstance(overlay, dict)):
        return overlay
    merged: dict[str, JsonValue] = dict(base)
    for key, value in overlay.items():
        merged[key] = deepMerge(merged[key], value) if key in merged else value
    return cast(JsonValue, merged)



# ----- Accessors -----

_TRUE_STRINGS = ("1", "true", "yes", "on")
_FALSE_STRINGS = ("0", "false", "no", "off", "")

def settings(path: str, default: Any = None, *, projectRoot: str | Path | None = None) -> Any:
    """Setting at dotted `path` (e.g. "leafs.prefix"); `default` when unset or null."""
    value = getByPath(loadSettings(projectRoot), path)
    return default if value is None else value



def settingsBool(path: str, default: bool = False, *, projectRoot: str | Path | None = None) -> bool:
    """
    Boolean setting at `path`. Strings such as "yes"/"off" are understood;
    an unrecognized string falls back to `default`.
    """
    value = getByPath(loadSettings(projectRoot), path)
    if value is None:
        return default
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        return default
    return bool(value)
