# leafkit/leafs/system.py
from __future__ import annotations
import logging
from pathlib import Path

from leafkit.leafs.catalog import LeafCatalog
from leafkit.leafs.installed import InstalledLeafState, InstalledStateReader
from leafkit.leafs.installer import FileMaterializer, InstallResult, InstallationOrchestrator
from leafkit.leafs.layout import LeafLayout
from leafkit.leafs.manifest import LeafManifest, LeafRequirement
from leafkit.leafs.requirements import RequirementCheckResult, RequirementChecker
from leafkit.leafs.resolver import DependencyResolver, InstallPlan
from leafkit.leafs.store import ManifestLookup, ManifestStore
from leafkit.leafs.updates import LeafUpdateInfo, UpdateTracker

logger = logging.getLogger(__name__)

__all__ = ["LeafSystem"]



class LeafSystem:
    """
    Wires catalog, manifest store, installed-state reader, requirement checker,
    resolver, update tracker and installer around one catalog.

    The project root is an explicit argument of every project operation, so a
    single instance can serve several project trees.
    """

    def __init__(
        self,
        catalog: LeafCatalog | str | Path | None = None,
        *,
        materializer: FileMaterializer | None = None,
        layout: LeafLayout | None = None,
    ) -> None:
        if not isinstance(catalog, LeafCatalog):
            catalog = LeafCatalog(catalog, layout=layout)
        self.catalog = catalog
        self.layout = layout or catalog.layout
        self.store = ManifestStore(catalog, layout=self.layout)
        self.installed = InstalledStateReader(self.store, layout=self.layout)
        self.requirements = RequirementChecker(self.store, self.installed, layout=self.layout)
        self.resolver = DependencyResolver(self.store, self.installed, self.requirements)
        self.updates = UpdateTracker(self.store, self.installed)
        self.installer = InstallationOrchestrator(
            catalog,
            self.store,
            self.installed,
            materializer=materializer,
            layout=self.layout,
        )

    # ----- Catalog -----

    def listAvailable(self) -> list[str]:
        return self.catalog.listAvailable()

    def exists(self, leafName: str) -> bool:
        return self.catalog.exists(leafName)

    def getLeafConfig(self, leafName: str) -> LeafManifest | None:
        return self.store.readCatalogManifest(leafName)

    def lookupLeafConfig(self, leafName: str) -> ManifestLookup:
        return self.store.lookupCatalogManifest(leafName)

    # ----- Project state -----

    def isLeafInstalledInProject(self, leafName: str, projectRoot: str | Path) -> bool:
        return self.installed.isLeafInstalledInProject(leafName, projectRoot)

    def getInstalledLeafs(self, projectRoot: str | Path) -> list[str]:
        return self.installed.getInstalledLeafs(projectRoot)

    def getInstalledLeafConfig(self, leafName: str, projectRoot: str | Path) -> LeafManifest | None:
        return self.store.readInstalledManifest(leafName, projectRoot)

    def getInstalledState(self, leafName: str, projectRoot: str | Path) -> InstalledLeafState:
        return self.installed.readState(leafName, projectRoot)

    # ----- Requirements -----

    def checkRequirement(self, requirement: LeafRequirement, projectRoot: str | Path) -> RequirementCheckResult:
        return self.requirements.check(requirement, projectRoot)

    def checkAllRequirements(self, leafName: str, projectRoot: str | Path) -> list[RequirementCheckResult]:
        return self.requirements.checkAll(leafName, projectRoot)

    def getMissingRequirements(self, leafName: str, projectRoot: str | Path) -> list[RequirementCheckResult]:
        return self.requirements.checkMissing(leafName, projectRoot)

    # ----- Dependencies -----

    def getMissingDependencies(self, leafName: str, projectRoot: str | Path) -> list[str]:
        return self.resolver.getMissingDependencies(leafName, projectRoot)

    def getInstallOrder(self, leafName: str, projectRoot: str | Path, *, strict: bool = False) -> list[str]:
        return self.resolver.getInstallOrder(leafName, projectRoot, strict=strict)

    def plan(self, leafName: str, projectRoot: str | Path, *, strict: bool = False) -> InstallPlan:
        return self.resolver.plan(leafName, projectRoot, strict=strict)

    # ----- Updates -----

    def checkUpdate(self, leafName: str, projectRoot: str | Path) -> LeafUpdateInfo | None:
        return self.updates.checkUpdate(leafName, projectRoot)

    def checkAllUpdates(self, projectRoot: str | Path) -> list[LeafUpdateInfo]:
        return self.updates.checkAllUpdates(projectRoot)

    def getLeafsWithUpdates(self, projectRoot: str | Path) -> list[LeafUpdateInfo]:
        return self.updates.getLeafsWithUpdates(projectRoot)

    # ----- Mutations -----

    def install(self, leafName: str, projectRoot: str | Path) -> InstallResult:
        return self.installer.install(leafName, projectRoot)

    def update(self, leafName: str, projectRoot: str | Path) -> InstallResult:
        return self.installer.update(leafName, projectRoot)

    def remove(self, leafName: str, projectRoot: str | Path) -> bool:
        return self.installer.remove(leafName, projectRoot)

    def addLeaf(
        self,
        leafName: str,
        projectRoot: str | Path,
        *,
        withDependencies: bool = True,
        strict: bool = False,
    ) -> list[InstallResult]:
        """
        Install `leafName`, preceded by its missing dependencies when
        `withDependencies`. Stops at the first failed install.

        The target is installed even when it already exists (full overwrite),
        matching install(); requirement gating is left to the caller.
        """
        order: list[str] = []
        if withDependencies:
            order = [name for name in self.getInstallOrder(leafName, projectRoot, strict=strict) if name != leafName]
        order.append(leafName)
        logger.debug("Installing %s into '%s'", order, projectRoot)
        return self.installer.installMany(order, projectRoot)
