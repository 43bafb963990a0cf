# leafkit/leafs/resolver.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path

from leafkit.core.errors import DependencyCycleError
from leafkit.leafs.installed import InstalledStateReader
from leafkit.leafs.requirements import RequirementCheckResult, RequirementChecker
from leafkit.leafs.store import ManifestStore

logger = logging.getLogger(__name__)

__all__ = ["InstallPlan", "DependencyResolver"]



@dataclass(frozen=True, slots=True)
class InstallPlan:
    """Everything a caller needs before materializing `target`."""
    target: str
    order: list[str]
    missing: list[str]
    cycles: list[list[str]] = field(default_factory=list)
    missingRequirements: list[RequirementCheckResult] = field(default_factory=list)

    @property
    def hasCycles(self) -> bool:
        return bool(self.cycles)



@dataclass(slots=True)
class _Walk:
    """Mutable state of one depth-first pass."""
    order: list[str] = field(default_factory=list)
    inProgress: list[str] = field(default_factory=list)
    done: set[str] = field(default_factory=set)
    cycles: list[list[str]] = field(default_factory=list)



class DependencyResolver:
    """
    Computes which leafs a target still needs and the order to install them in.

    A dependency without a readable catalog manifest simply contributes no
    further dependencies; a walk is never aborted by a missing manifest.
    """

    def __init__(
        self,
        store: ManifestStore,
        installed: InstalledStateReader,
        requirements: RequirementChecker | None = None,
    ) -> None:
        self.store = store
        self.installed = installed
        self.requirements = requirements

    def _dependenciesOf(self, leafName: str) -> list[str]:
        manifest = self.store.readCatalogManifest(leafName)
        if manifest is None:
            return []
        return manifest.uniqueDependencies()

    # ----- Missing dependencies -----

    def getMissingDependencies(self, leafName: str, projectRoot: str | Path) -> list[str]:
        """
        Transitive dependencies of `leafName` not installed in the project,
        de-duplicated, in discovery order. Never contains `leafName` itself.
        """
        missing: list[str] = []
        seen: set[str] = {leafName}
        pending = [leafName]
        while pending:
            current = pending.pop(0)
            for dep in self._dependenciesOf(current):
                if dep in seen:
                    continue
                seen.add(dep)
                if self.installed.isLeafInstalledInProject(dep, projectRoot):
                    continue
                missing.append(dep)
                pending.append(dep)
        return missing

    # ----- Install order -----

    def _visit(self, name: str, projectRoot: str | Path, walk: _Walk) -> None:
        if name in walk.done:
            return
        if name in walk.inProgress:
            start = walk.inProgress.index(name)
            walk.cycles.append(walk.inProgress[start:] + [name])
            return

        walk.inProgress.append(name)
        for dep in self._dependenciesOf(name):
            if not self.installed.isLeafInstalledInProject(dep, projectRoot):
                self._visit(dep, projectRoot, walk)
        walk.inProgress.pop()
        walk.done.add(name)

        if not self.installed.isLeafInstalledInProject(name, projectRoot):
            walk.order.append(name)

    def _walk(self, leafName: str, projectRoot: str | Path) -> _Walk:
        walk = _Walk()
        self._visit(leafName, projectRoot, walk)
        for cycle in walk.cycles:
            logger.warning("Leaf dependency cycle: %s", " -> ".join(cycle))
        return walk

    def getInstallOrder(self, leafName: str, projectRoot: str | Path, *, strict: bool = False) -> list[str]:
        """
        Leafs to install, dependencies before dependents, installed leafs skipped.

        A dependency cycle yields a partial order (each leaf appears once);
        with `strict` it raises DependencyCycleError instead.
        """
        walk = self._walk(leafName, projectRoot)
        if strict and walk.cycles:
            raise DependencyCycleError(walk.cycles[0])
        return walk.order

    def findCycles(self, leafName: str, projectRoot: str | Path) -> list[list[str]]:
        return self._walk(leafName, projectRoot).cycles

    # ----- Planning -----

    def plan(self, leafName: str, projectRoot: str | Path, *, strict: bool = False) -> InstallPlan:
        walk = self._walk(leafName, projectRoot)
        if strict and walk.cycles:
            raise DependencyCycleError(walk.cycles[0])
        missingRequirements = (
            self.requirements.checkMissing(leafName, projectRoot)
            if self.requirements is not None
            else []
        )
        return InstallPlan(
            target=leafName,
            order=walk.order,
            missing=self.getMissingDependencies(leafName, projectRoot),
            cycles=walk.cycles,
            missingRequirements=missingRequirements,
        )
