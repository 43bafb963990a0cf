# leafkit/leafs/requirements.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path

from leafkit.leafs.constants import MODELS_SUBDIR
from leafkit.leafs.installed import InstalledStateReader
from leafkit.leafs.layout import LeafLayout
from leafkit.leafs.manifest import LeafRequirement
from leafkit.leafs.store import ManifestStore

logger = logging.getLogger(__name__)

__all__ = ["RequirementCheckResult", "RequirementChecker"]



@dataclass(frozen=True, slots=True)
class RequirementCheckResult:
    satisfied: bool
    requirement: LeafRequirement
    foundPath: Path | None = None



class RequirementChecker:
    """
    Verifies a leaf's declared prerequisites (models, files, directories)
    against a project tree. Pure reads, safe to call repeatedly.
    """

    def __init__(
        self,
        store: ManifestStore,
        installed: InstalledStateReader,
        *,
        layout: LeafLayout | None = None,
    ) -> None:
        self.store = store
        self.installed = installed
        self.layout = layout or store.layout

    # ----- Candidate locations -----

    def _modelCandidates(self, modelName: str, projectRoot: Path) -> list[Path]:
        layout = self.layout.forProject(projectRoot)
        sourceRoot = layout.sourceRoot(projectRoot)
        paths = [
            sourceRoot / modelDir / f"{modelName}{ext}"
            for modelDir in layout.modelDirs
            for ext in layout.modelExtensions
        ]
        # A model can also be shipped by another installed leaf
        for leafDir in self.installed.leafDirectories(projectRoot):
            paths.extend(leafDir / MODELS_SUBDIR / f"{modelName}{ext}" for ext in layout.modelExtensions)
        return paths

    def candidatePaths(self, requirement: LeafRequirement, projectRoot: str | Path) -> list[Path]:
        """
        Ordered locations that would satisfy `requirement`.

        An explicit `path` (relative paths are taken from the project root)
        is the only candidate. Otherwise:
          - model:              <src>/<modelDir>/<name><ext>, then <src>/<leaf>/models/<name><ext>
          - file / directory:   <src>/<name>, then <project>/<name>
        """
        root = Path(projectRoot)
        if requirement.path:
            explicit = Path(requirement.path).expanduser()
            return [explicit if explicit.is_absolute() else root / explicit]

        if requirement.type == "model":
            return self._modelCandidates(requirement.name, root)
        return [self.layout.forProject(root).sourceRoot(root) / requirement.name, root / requirement.name]

    # ----- Checks -----

    def check(self, requirement: LeafRequirement, projectRoot: str | Path) -> RequirementCheckResult:
        for candidate in self.candidatePaths(requirement, projectRoot):
            if candidate.exists():
                return RequirementCheckResult(satisfied=True, requirement=requirement, foundPath=candidate)
        logger.debug("Requirement %s:%s not satisfied in '%s'", requirement.type, requirement.name, projectRoot)
        return RequirementCheckResult(satisfied=False, requirement=requirement)

    def checkAll(self, leafName: str, projectRoot: str | Path) -> list[RequirementCheckResult]:
        """Check every requirement of the catalog manifest; [] when the leaf has no manifest."""
        manifest = self.store.readCatalogManifest(leafName)
        if manifest is None or not manifest.requirements:
            return []
        return [self.check(requirement, projectRoot) for requirement in manifest.requirements]

    def checkMissing(self, leafName: str, projectRoot: str | Path) -> list[RequirementCheckResult]:
        return [result for result in self.checkAll(leafName, projectRoot) if not result.satisfied]
