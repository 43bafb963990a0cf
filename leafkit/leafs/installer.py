# leafkit/leafs/installer.py
from __future__ import annotations
import logging
import shutil
import threading
import weakref
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import json5

from leafkit.core.errors import CatalogNotFoundError
from leafkit.core.logging import leafLogContext
from leafkit.leafs.catalog import LeafCatalog
from leafkit.leafs.installed import InstallRecord, InstalledStateReader
from leafkit.leafs.layout import LeafLayout
from leafkit.leafs.store import ManifestStore

logger = logging.getLogger(__name__)

__all__ = [
    "FileMaterializer",
    "ShutilMaterializer",
    "InstallResult",
    "InstallationOrchestrator",
]



class FileMaterializer(Protocol):
    def copyTree(self, src: Path, dst: Path) -> None:
        """Copy `src` recursively into `dst`, creating directories and overwriting same-named files."""
        ...



class ShutilMaterializer:
    """Default materializer backed by shutil.copytree (hidden entries included)."""

    def copyTree(self, src: Path, dst: Path) -> None:
        shutil.copytree(src, dst, dirs_exist_ok=True)



@dataclass(frozen=True, slots=True)
class InstallResult:
    success: bool
    destinationPath: Path
    error: str | None = None



_LOCKS_GUARD = threading.Lock()
# Entries drop out once no caller holds the lock
_PROJECT_LOCKS: weakref.WeakValueDictionary[str, threading.RLock] = weakref.WeakValueDictionary()

def _projectLock(projectRoot: str | Path) -> threading.RLock:
    """In-process advisory lock serializing mutations of one project tree."""
    key = str(Path(projectRoot).resolve(strict=False))
    with _LOCKS_GUARD:
        lock = _PROJECT_LOCKS.get(key)
        if lock is None:
            lock = threading.RLock()
            _PROJECT_LOCKS[key] = lock
        return lock



def _deletePath(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()



class InstallationOrchestrator:
    """
    The only component that mutates a project tree.

    install() is a full overwrite: an existing leaf directory is deleted
    before the catalog copy is materialized, so re-running install also
    cleans up any partial copy left by an earlier failure.
    """

    def __init__(
        self,
        catalog: LeafCatalog,
        store: ManifestStore,
        installed: InstalledStateReader,
        *,
        materializer: FileMaterializer | None = None,
        layout: LeafLayout | None = None,
    ) -> None:
        self.catalog = catalog
        self.store = store
        self.installed = installed
        self.materializer: FileMaterializer = materializer or ShutilMaterializer()
        self.layout = layout or catalog.layout

    # ----- Install -----

    def _writeInstallRecord(self, leafName: str, source: Path, destination: Path, recordFile: str) -> None:
        manifest = self.store.readCatalogManifest(leafName)
        record = InstallRecord(
            name=leafName,
            version=manifest.version if manifest is not None else None,
            installedAt=datetime.now(timezone.utc),
            source=str(source),
        )
        recordPath = destination / recordFile
        try:
            recordPath.write_text(
                json5.dumps(record.model_dump(mode="json"), ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        except OSError as err:
            logger.warning("Could not write install record '%s': %s", recordPath, err)

    def install(self, leafName: str, projectRoot: str | Path) -> InstallResult:
        with leafLogContext(leafName):
            return self._install(leafName, projectRoot)

    def _install(self, leafName: str, projectRoot: str | Path) -> InstallResult:
        layout = self.layout.forProject(projectRoot)
        destination = layout.leafDir(projectRoot, leafName)
        if not self.catalog.exists(leafName):
            return InstallResult(False, destination, f'Leaf "{leafName}" not found')

        with _projectLock(projectRoot):
            try:
                source = self.catalog.leafPath(leafName)
                if destination.exists() or destination.is_symlink():
                    logger.debug("Replacing existing '%s'", destination)
                    _deletePath(destination)
                self.materializer.copyTree(source, destination)
            except (OSError, CatalogNotFoundError) as err:
                logger.error("Failed to install leaf '%s' into '%s': %s", leafName, destination, err)
                return InstallResult(False, destination, str(err) or type(err).__name__)
            self._writeInstallRecord(leafName, source, destination, layout.installRecordFile)

        logger.info("Installed leaf '%s' into '%s'", leafName, destination)
        return InstallResult(True, destination)

    def installMany(self, leafNames: Iterable[str], projectRoot: str | Path) -> list[InstallResult]:
        """Install in the given order; stops after the first failure, which is the last result."""
        results: list[InstallResult] = []
        with _projectLock(projectRoot):
            for leafName in leafNames:
                result = self.install(leafName, projectRoot)
                results.append(result)
                if not result.success:
                    break
        return results

    def update(self, leafName: str, projectRoot: str | Path) -> InstallResult:
        """Re-materialize an installed leaf from the catalog, discarding local changes."""
        destination = self.layout.forProject(projectRoot).leafDir(projectRoot, leafName)
        if not self.installed.isLeafInstalledInProject(leafName, projectRoot):
            return InstallResult(False, destination, f'Leaf "{leafName}" is not installed')
        return self.install(leafName, projectRoot)

    # ----- Remove -----

    def remove(self, leafName: str, projectRoot: str | Path) -> bool:
        """Delete the leaf directory; False when there was nothing to remove or deletion failed."""
        with leafLogContext(leafName):
            return self._remove(leafName, projectRoot)

    def _remove(self, leafName: str, projectRoot: str | Path) -> bool:
        if not self.layout.isSafeName(leafName):
            return False
        leafDir = self.layout.forProject(projectRoot).leafDir(projectRoot, leafName)
        with _projectLock(projectRoot):
            if not (leafDir.exists() or leafDir.is_symlink()):
                return False
            try:
                _deletePath(leafDir)
            except OSError as err:
                logger.error("Failed to remove leaf '%s' at '%s': %s", leafName, leafDir, err)
                return False
        logger.info("Removed leaf '%s' from '%s'", leafName, leafDir)
        return True
