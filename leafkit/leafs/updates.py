# leafkit/leafs/updates.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path

from leafkit.leafs.installed import InstalledStateReader
from leafkit.leafs.store import ManifestStore
from leafkit.semver.semver import isNewerVersion

__all__ = ["LeafUpdateInfo", "UpdateTracker"]



@dataclass(frozen=True, slots=True)
class LeafUpdateInfo:
    name: str
    installedVersion: str
    availableVersion: str
    hasUpdate: bool



class UpdateTracker:
    """Compares installed leaf manifests with their catalog counterparts."""

    def __init__(self, store: ManifestStore, installed: InstalledStateReader) -> None:
        self.store = store
        self.installed = installed

    def checkUpdate(self, leafName: str, projectRoot: str | Path) -> LeafUpdateInfo | None:
        """None when either the installed or the catalog manifest cannot be read."""
        installedManifest = self.store.readInstalledManifest(leafName, projectRoot)
        if installedManifest is None:
            return None
        availableManifest = self.store.readCatalogManifest(leafName)
        if availableManifest is None:
            return None
        return LeafUpdateInfo(
            name=leafName,
            installedVersion=installedManifest.version,
            availableVersion=availableManifest.version,
            hasUpdate=isNewerVersion(availableManifest.version, installedManifest.version),
        )

    def checkAllUpdates(self, projectRoot: str | Path) -> list[LeafUpdateInfo]:
        updates: list[LeafUpdateInfo] = []
        for leafName in self.installed.getInstalledLeafs(projectRoot):
            info = self.checkUpdate(leafName, projectRoot)
            if info is not None:
                updates.append(info)
        return updates

    def getLeafsWithUpdates(self, projectRoot: str | Path) -> list[LeafUpdateInfo]:
        return [info for info in self.checkAllUpdates(projectRoot) if info.hasUpdate]
