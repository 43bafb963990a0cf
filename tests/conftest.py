import json
import sys
from pathlib import Path
from typing import Any, Callable

import pytest

from leafkit.app.settings import clearSettingsCache
from leafkit.leafs.constants import CATALOG_ENV_VAR
from leafkit.leafs.system import LeafSystem



def pytest_configure(config: pytest.Config) -> None:
    if sys.flags.optimize:
        raise RuntimeError("Assertions are disabled (optimize > 0)")



@pytest.fixture(autouse=True)
def isolatedSettings(monkeypatch, tmp_path):
    """Keep the developer's ~/.leafkit and $LEAFKIT_CATALOG_ROOT out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.delenv(CATALOG_ENV_VAR, raising=False)
    clearSettingsCache()
    yield home
    clearSettingsCache()



def writeManifest(leafDir: Path, payload: dict[str, Any] | str) -> Path:
    leafDir.mkdir(parents=True, exist_ok=True)
    manifestPath = leafDir / "leaf.json"
    text = payload if isinstance(payload, str) else json.dumps(payload, indent=2)
    manifestPath.write_text(text, encoding="utf-8")
    return manifestPath



def manifestFor(name: str, version: str = "1.0.0", **extra: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": name,
        "version": version,
        "description": f"{name} leaf",
        "dependencies": [],
        "env": [],
        "config": {"import": f"import {name} from './{name}/app.js'", "example": {}},
    }
    data.update(extra)
    return data



@pytest.fixture()
def catalogRoot(tmp_path) -> Path:
    root = tmp_path / "catalog"
    root.mkdir()
    return root



@pytest.fixture()
def projectRoot(tmp_path) -> Path:
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    return root



@pytest.fixture()
def makeLeaf(catalogRoot) -> Callable[..., Path]:
    """Create a catalog leaf: makeLeaf("ETHUserLeaf", version="1.2.0", dependencies=[...])."""
    def _make(
        name: str,
        version: str = "1.0.0",
        *,
        manifest: dict[str, Any] | str | None = None,
        withManifest: bool = True,
        files: dict[str, str] | None = None,
        **extra: Any,
    ) -> Path:
        leafDir = catalogRoot / name
        leafDir.mkdir(parents=True, exist_ok=True)
        if withManifest:
            writeManifest(leafDir, manifest if manifest is not None else manifestFor(name, version, **extra))
        for relPath, content in (files or {}).items():
            target = leafDir / relPath
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return leafDir
    return _make



@pytest.fixture()
def installLeaf(projectRoot) -> Callable[..., Path]:
    """Materialize a leaf directly in the project, bypassing the installer."""
    def _install(name: str, version: str | None = "1.0.0", **extra: Any) -> Path:
        leafDir = projectRoot / "src" / name
        leafDir.mkdir(parents=True, exist_ok=True)
        if version is not None:
            writeManifest(leafDir, manifestFor(name, version, **extra))
        return leafDir
    return _install



@pytest.fixture()
def system(catalogRoot) -> LeafSystem:
    return LeafSystem(catalogRoot)
