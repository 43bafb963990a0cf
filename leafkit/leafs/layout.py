# leafkit/leafs/layout.py
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path

from leafkit.app.settings import loadSettings
from leafkit.core.dictpath import getByPath

__all__ = ["LeafLayout"]



@dataclass(frozen=True, slots=True)
class LeafLayout:
    """
    Naming and directory conventions shared by the catalog and project trees.

    A layout built by fromSettings() follows configuration: forProject()
    re-reads it with `<projectRoot>/leafkit.json5` overlaid. A layout built
    by hand is used as-is for every project.
    """
    prefix: str = "ETH"
    manifestFile: str = "leaf.json"
    installRecordFile: str = ".leaf-install.json5"
    sourceDir: str = "src"
    modelDirs: tuple[str, ...] = ("models", "model")
    modelExtensions: tuple[str, ...] = (".ts", ".js")
    followsSettings: bool = field(default=False, compare=False, repr=False)

    @classmethod
    def fromSettings(cls, projectRoot: str | Path | None = None) -> "LeafLayout":
        merged = loadSettings(projectRoot)
        defaults = cls()

        def pick(path: str, fallback):
            value = getByPath(merged, path)
            return fallback if value is None else value

        return cls(
            prefix=str(pick("leafs.prefix", defaults.prefix)),
            manifestFile=str(pick("leafs.manifestFile", defaults.manifestFile)),
            installRecordFile=str(pick("leafs.installRecordFile", defaults.installRecordFile)),
            sourceDir=str(pick("project.sourceDir", defaults.sourceDir)),
            modelDirs=tuple(pick("requirements.modelDirs", defaults.modelDirs)),
            modelExtensions=tuple(pick("requirements.modelExtensions", defaults.modelExtensions)),
            followsSettings=True,
        )

    def forProject(self, projectRoot: str | Path) -> "LeafLayout":
        """The layout in effect inside `projectRoot`."""
        if not self.followsSettings:
            return self
        return LeafLayout.fromSettings(projectRoot)

    # ----- Naming -----

    def isLeafName(self, name: str) -> bool:
        return name.startswith(self.prefix)

    @staticmethod
    def isSafeName(name: str) -> bool:
        """A single path component: leaf names must never escape their parent directory."""
        return bool(name) and name not in (".", "..") and "/" not in name and "\\" not in name

    # ----- Project paths -----

    def sourceRoot(self, projectRoot: str | Path) -> Path:
        return Path(projectRoot) / self.sourceDir

    def leafDir(self, projectRoot: str | Path, leafName: str) -> Path:
        return self.sourceRoot(projectRoot) / leafName
