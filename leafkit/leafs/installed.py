# leafkit/leafs/installed.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import json5
from pydantic import BaseModel, ConfigDict, ValidationError

from leafkit.leafs.layout import LeafLayout
from leafkit.leafs.manifest import LeafManifest
from leafkit.leafs.store import ManifestStore

logger = logging.getLogger(__name__)

__all__ = ["InstallRecord", "InstalledLeafState", "InstalledStateReader"]



class InstallRecord(BaseModel):
    """Written into a leaf's project directory after each successful install."""
    model_config = ConfigDict(extra="ignore")

    name: str
    version: str | None = None
    installedAt: datetime
    source: str



@dataclass(frozen=True, slots=True)
class InstalledLeafState:
    """Snapshot of one leaf inside a project, derived from the filesystem at query time."""
    name: str
    directory: Path
    installed: bool
    manifest: LeafManifest | None = None
    record: InstallRecord | None = None

    @property
    def version(self) -> str | None:
        if self.manifest is not None:
            return self.manifest.version
        if self.record is not None:
            return self.record.version
        return None



class InstalledStateReader:
    """
    Inspects `<projectRoot>/<sourceDir>` for materialized leafs.

    "Installed" means the leaf directory exists; a manifest inside it is
    additionally required to be listed by getInstalledLeafs().
    """

    def __init__(self, store: ManifestStore, *, layout: LeafLayout | None = None) -> None:
        self.store = store
        self.layout = layout or store.layout

    def isLeafInstalledInProject(self, leafName: str, projectRoot: str | Path) -> bool:
        if not self.layout.isSafeName(leafName):
            return False
        return self.layout.forProject(projectRoot).leafDir(projectRoot, leafName).exists()

    def leafDirectories(self, projectRoot: str | Path) -> list[Path]:
        """Every prefixed directory under the source root, manifest or not, sorted by name."""
        layout = self.layout.forProject(projectRoot)
        sourceRoot = layout.sourceRoot(projectRoot)
        if not sourceRoot.is_dir():
            return []
        try:
            entries = sorted(sourceRoot.iterdir(), key=lambda entry: entry.name)
        except OSError as err:
            logger.warning("Cannot list '%s': %s", sourceRoot, err)
            return []
        return [entry for entry in entries if entry.is_dir() and layout.isLeafName(entry.name)]

    def getInstalledLeafs(self, projectRoot: str | Path) -> list[str]:
        """Names of installed leafs that carry a manifest file."""
        manifestFile = self.layout.forProject(projectRoot).manifestFile
        return [
            leafDir.name
            for leafDir in self.leafDirectories(projectRoot)
            if (leafDir / manifestFile).is_file()
        ]

    def readInstallRecord(self, leafName: str, projectRoot: str | Path) -> InstallRecord | None:
        if not self.layout.isSafeName(leafName):
            return None
        layout = self.layout.forProject(projectRoot)
        recordPath = layout.leafDir(projectRoot, leafName) / layout.installRecordFile
        if not recordPath.is_file():
            return None
        try:
            return InstallRecord.model_validate(json5.loads(recordPath.read_text(encoding="utf-8")))
        except (OSError, ValueError, ValidationError) as err:
            logger.warning("Ignoring unreadable install record '%s': %s", recordPath, err)
            return None

    def readState(self, leafName: str, projectRoot: str | Path) -> InstalledLeafState:
        directory = self.layout.forProject(projectRoot).leafDir(projectRoot, leafName)
        if not self.isLeafInstalledInProject(leafName, projectRoot):
            return InstalledLeafState(name=leafName, directory=directory, installed=False)
        return InstalledLeafState(
            name=leafName,
            directory=directory,
            installed=True,
            manifest=self.store.readInstalledManifest(leafName, projectRoot),
            record=self.readInstallRecord(leafName, projectRoot),
        )
